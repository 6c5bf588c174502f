# scootershop/api/v1/routes/auth.py
import logging
from fastapi import APIRouter, HTTPException, Request, Response, status

from scootershop.api.deps import is_admin_request
from scootershop.core.config import settings
from scootershop.core.security import create_session_token, verify_admin_password
from scootershop.schemas.auth import LoginRequest, SessionStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("", response_model=SessionStatus)
async def login(payload: LoginRequest, response: Response):
    if not verify_admin_password(payload.password):
        logger.warning("⚠️ Rejected admin login attempt")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_token(),
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        path="/",
    )
    logger.info("✅ Admin session started")
    return SessionStatus(authenticated=True)

@router.get("", response_model=SessionStatus)
async def session_status(request: Request):
    return SessionStatus(authenticated=is_admin_request(request))

@router.delete("", response_model=SessionStatus)
async def logout(response: Response):
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/")
    return SessionStatus(authenticated=False)
