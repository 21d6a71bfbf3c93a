from typing import Optional
from datetime import datetime

from app.core.schemas import APIModel
from app.modules.posts.schemas.post import Post
from app.modules.user_management.schemas.user import UserSummary

class ShareCreate(APIModel):
    """Body of POST /shares/post/{post_id}"""
    share_caption: Optional[str] = None
    audience: Optional[str] = None  # Public, Following, OnlyMe; anything else means Public

class ShareUpdate(APIModel):
    share_caption: Optional[str] = None
    audience: Optional[str] = None

class Share(APIModel):
    """Share model returned to client"""
    id: str
    user_id: str
    post_id: str
    share_caption: Optional[str] = None
    audience: str
    created_at: datetime
    updated_at: datetime

class ShareDetail(Share):
    """Share with its sharer, the original post and its own aggregates"""
    user: Optional[UserSummary] = None
    post: Optional[Post] = None
    reaction_count: int = 0
    comment_count: int = 0
    user_reaction: Optional[str] = None

class ShareStatus(APIModel):
    shared: bool

class UnshareResult(APIModel):
    share_id: str
    post_id: str
    share_count: int
