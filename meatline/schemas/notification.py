from typing import Optional
from datetime import datetime
from pydantic import BaseModel
from meatline.models import NotificationTypeEnum


class NotificationResponse(BaseModel):
    id: int
    user_id: int
    type: NotificationTypeEnum
    title: str
    message: str
    related_entity_type: Optional[str] = None
    related_entity_id: Optional[int] = None
    is_read: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
