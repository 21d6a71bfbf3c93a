from typing import Any, List

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
import logging

from app.core.config import settings
from app.core.errors import AppError, UnexpectedError
from app.core.pagination import PageParams, build_pagination
from app.core.schemas import Envelope
from app.db.session import get_db
from app.deps import get_current_user
from app.modules.cache.invalidation import keys_for
from app.modules.likes.schemas.like import Like as LikeSchema, LikedPost, LikeList, LikeStatus, LikeToggle
from app.modules.likes.services.like import check_user_liked, get_post_likes, get_user_liked_posts, toggle_like
from app.modules.posts.schemas.post import Post as PostSchema
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserSummary
from app.modules.user_management.services.user import get_users_by_ids

router = APIRouter()
logger = logging.getLogger("app")

@router.post("/posts/{post_id}", response_model=Envelope[LikeToggle])
def toggle_post_like(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to like or unlike"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Like a post, or unlike it if the current user already does"""
    try:
        result = toggle_like(db, current_user.id, post_id)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error toggling like: {str(e)}")
        raise UnexpectedError("Failed to toggle like") from e

    return {
        "success": True,
        "data": LikeToggle.model_validate(result),
        "invalidate": keys_for("toggle_like", post_id=post_id, actor_id=current_user.id),
        "message": "Post liked successfully" if result["liked"] else "Post unliked successfully",
    }

@router.get("/posts/{post_id}", response_model=Envelope[LikeList])
def read_post_likes(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    paging: PageParams = Depends(),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Users who liked a post, newest first"""
    likes, total = get_post_likes(db, post_id, paging.page, paging.limit)
    users = get_users_by_ids(db, [like.user_id for like in likes])

    items = []
    for like in likes:
        item = LikeSchema.model_validate(like)
        if like.user_id in users:
            item.user = UserSummary.model_validate(users[like.user_id])
        items.append(item)

    return {
        "success": True,
        "data": LikeList(likes=items, total_likes=total),
        "pagination": build_pagination(paging.page, paging.limit, total),
    }

@router.get("/posts/{post_id}/check", response_model=Envelope[LikeStatus])
def read_like_status(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Whether the current user likes a post"""
    return {"success": True, "data": LikeStatus(liked=check_user_liked(db, current_user.id, post_id))}

@router.get("/users/{user_id}", response_model=Envelope[List[LikedPost]])
@router.get("/user/{user_id}/liked", response_model=Envelope[List[LikedPost]])
def read_user_liked_posts(
    *,
    db: Session = Depends(get_db),
    user_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Posts a user has liked"""
    rows, total = get_user_liked_posts(db, user_id, page, limit)
    return {
        "success": True,
        "data": [LikedPost(post=PostSchema.model_validate(post), liked_at=like.created_at) for like, post in rows],
        "pagination": build_pagination(page, limit, total),
    }
