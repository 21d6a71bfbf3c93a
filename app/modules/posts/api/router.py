from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from app.core.errors import AppError, UnexpectedError
from app.core.schemas import Envelope
from app.db.session import get_db
from app.deps import get_current_user
from app.modules.cache.invalidation import keys_for
from app.modules.posts.schemas.post import Post as PostSchema, PostCreate, PostWithCounts
from app.modules.posts.services.post import create_post, delete_post, get_post_with_counts
from app.modules.user_management.models.user import User

router = APIRouter()
logger = logging.getLogger("app")

@router.post("", response_model=Envelope[PostSchema], status_code=status.HTTP_201_CREATED)
def create_new_post(
    *,
    db: Session = Depends(get_db),
    post_in: PostCreate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Create new post"""
    post = create_post(db, post_in, current_user.id)
    return {
        "success": True,
        "data": PostSchema.model_validate(post),
        "invalidate": keys_for("create_post"),
        "message": "Post created successfully",
    }

@router.get("/{post_id}", response_model=Envelope[PostWithCounts])
def read_post(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get post by ID with like, reaction, comment and share counts"""
    return {"success": True, "data": get_post_with_counts(db, post_id, current_user.id)}

@router.delete("/{post_id}", response_model=Envelope[Dict[str, str]])
def delete_post_by_id(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Delete a post and everything attached to it"""
    try:
        delete_post(db, current_user.id, post_id)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error deleting post: {str(e)}")
        raise UnexpectedError("Failed to delete post") from e

    return {
        "success": True,
        "data": {"id": post_id},
        "invalidate": keys_for("delete_post", post_id=post_id),
        "message": "Post deleted successfully",
    }
