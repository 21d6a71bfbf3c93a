from typing import Optional
from datetime import datetime
from pydantic import BaseModel

from app.core.schemas import APIModel
from app.modules.user_management.schemas.user import UserSummary

class NotificationCreate(BaseModel):
    user_id: str
    actor_id: Optional[str] = None  # ID of the user who triggered the notification
    type: str
    content: str
    target_id: Optional[str] = None
    target_kind: Optional[str] = None
    reaction_type: Optional[str] = None
    comment_id: Optional[str] = None

class NotificationUpdate(APIModel):
    is_read: bool = True

class Notification(APIModel):
    """Notification model returned to client"""
    id: str
    user_id: str
    actor_id: Optional[str] = None
    type: str
    content: str
    target_id: Optional[str] = None
    target_kind: Optional[str] = None
    reaction_type: Optional[str] = None
    comment_id: Optional[str] = None
    is_read: bool
    created_at: datetime
    actor: Optional[UserSummary] = None
