from typing import Optional
from datetime import datetime

from app.core.schemas import APIModel
from app.modules.user_management.schemas.user import UserSummary

class CommentIn(APIModel):
    """Body for creating or editing a comment"""
    content: Optional[str] = None

class Comment(APIModel):
    """Comment model returned to client"""
    id: str
    user_id: str
    target_id: str
    target_kind: str
    content: str
    created_at: datetime
    updated_at: datetime
    user: Optional[UserSummary] = None
    is_edited: bool = False
