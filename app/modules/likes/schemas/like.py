from typing import List, Optional
from datetime import datetime

from app.core.schemas import APIModel
from app.modules.posts.schemas.post import Post
from app.modules.user_management.schemas.user import UserSummary

class LikeToggle(APIModel):
    """State after toggle_like"""
    liked: bool
    like_count: int

class LikeStatus(APIModel):
    liked: bool

class Like(APIModel):
    id: str
    user_id: str
    post_id: str
    created_at: datetime
    user: Optional[UserSummary] = None

class LikeList(APIModel):
    likes: List[Like]
    total_likes: int

class LikedPost(APIModel):
    post: Post
    liked_at: datetime
