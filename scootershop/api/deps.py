# scootershop/api/deps.py
from fastapi import HTTPException, Request, status

from scootershop.core.config import settings
from scootershop.core.security import ADMIN_SUBJECT, decode_session_token


def is_admin_request(request: Request) -> bool:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return False
    return decode_session_token(token) == ADMIN_SUBJECT


async def require_admin(request: Request) -> None:
    """Reject the request unless it carries a valid admin session cookie."""
    if not is_admin_request(request):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
