# scootershop/schemas/notification.py
from pydantic import BaseModel
from datetime import datetime

class NotificationRead(BaseModel):
    id: str
    title: str
    message: str
    type: str
    status: str
    is_read: bool = False
    created_at: datetime
