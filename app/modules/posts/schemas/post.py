from typing import Dict, Optional
from datetime import datetime
from pydantic import field_validator

from app.core.schemas import APIModel
from app.modules.user_management.schemas.user import UserSummary

class PostBase(APIModel):
    content: str
    media_url: Optional[str] = None
    audience: str = "Public"

class PostCreate(PostBase):
    @field_validator("audience")
    @classmethod
    def validate_audience(cls, v):
        from app.modules.posts.models.post import AUDIENCES
        if v not in AUDIENCES:
            raise ValueError(f"Audience must be one of: {', '.join(AUDIENCES)}")
        return v

class Post(PostBase):
    """Post model returned to client"""
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime

class PostWithCounts(Post):
    """Post model with ledger aggregates and the caller's own state"""
    author: Optional[UserSummary] = None
    like_count: int = 0
    comment_count: int = 0
    share_count: int = 0
    reaction_count: int = 0
    reaction_counts: Dict[str, int] = {}
    is_liked: bool = False
    user_reaction: Optional[str] = None
