from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
import logging

from app.core.errors import AppError, UnexpectedError
from app.core.pagination import PageParams, build_pagination
from app.core.schemas import Envelope
from app.core.targets import TargetKind
from app.db.session import get_db
from app.deps import get_current_user
from app.modules.cache.invalidation import keys_for
from app.modules.comments.models.comment import Comment
from app.modules.comments.schemas.comment import Comment as CommentSchema, CommentIn
from app.modules.comments.services.comment import add_comment, delete_comment, list_comments, update_comment
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserSummary
from app.modules.user_management.services.user import get_users_by_ids

router = APIRouter()
share_comments_router = APIRouter()
logger = logging.getLogger("app")

def _prepare_comments_response(db: Session, comments: List[Comment]) -> List[CommentSchema]:
    """Attach author identities, loading them in one query"""
    users = get_users_by_ids(db, [c.user_id for c in comments])
    result = []
    for comment in comments:
        item = CommentSchema.model_validate(comment)
        item.is_edited = bool(comment.updated_at and comment.created_at and comment.updated_at > comment.created_at)
        if comment.user_id in users:
            item.user = UserSummary.model_validate(users[comment.user_id])
        result.append(item)
    return result

def _target_ids(target_id: str, target_kind: str) -> Dict[str, str]:
    if target_kind == TargetKind.POST.value:
        return {"post_id": target_id}
    return {"share_id": target_id}

def _create(db: Session, user: User, target_id: str, kind: TargetKind, comment_in: CommentIn, mutation: str) -> Any:
    try:
        comment = add_comment(db, user.id, target_id, kind, comment_in.content)
        data = _prepare_comments_response(db, [comment])[0]
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error creating comment: {str(e)}")
        raise UnexpectedError("Failed to create comment") from e

    return {
        "success": True,
        "data": data,
        "invalidate": keys_for(mutation, **_target_ids(target_id, kind.value)),
        "message": "Comment created successfully",
    }

def _list(db: Session, target_id: str, kind: TargetKind, paging: PageParams) -> Any:
    comments, total = list_comments(db, target_id, kind, paging.page, paging.limit)
    return {
        "success": True,
        "data": _prepare_comments_response(db, comments),
        "pagination": build_pagination(paging.page, paging.limit, total),
    }

@router.post("/posts/{post_id}", response_model=Envelope[CommentSchema], status_code=status.HTTP_201_CREATED)
def create_post_comment(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to comment on"),
    comment_in: CommentIn,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Create new comment on a post"""
    return _create(db, current_user, post_id, TargetKind.POST, comment_in, "add_post_comment")

@router.get("/posts/{post_id}", response_model=Envelope[List[CommentSchema]])
def read_post_comments(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to get comments for"),
    paging: PageParams = Depends(),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Comments on a post, oldest first"""
    return _list(db, post_id, TargetKind.POST, paging)

@router.put("/{comment_id}", response_model=Envelope[CommentSchema])
def update_comment_by_id(
    *,
    db: Session = Depends(get_db),
    comment_id: str,
    comment_in: CommentIn,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Edit a comment"""
    try:
        comment = update_comment(db, current_user.id, comment_id, comment_in.content)
        data = _prepare_comments_response(db, [comment])[0]
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error updating comment: {str(e)}")
        raise UnexpectedError("Failed to update comment") from e

    return {
        "success": True,
        "data": data,
        "invalidate": keys_for("update_comment", **_target_ids(data.target_id, data.target_kind)),
        "message": "Comment updated successfully",
    }

@router.delete("/{comment_id}", response_model=Envelope[Dict[str, str]])
def delete_comment_by_id(
    *,
    db: Session = Depends(get_db),
    comment_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Delete a comment"""
    try:
        deleted = delete_comment(db, current_user.id, comment_id)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error deleting comment: {str(e)}")
        raise UnexpectedError("Failed to delete comment") from e

    return {
        "success": True,
        "data": deleted,
        "invalidate": keys_for("delete_comment", **_target_ids(deleted["target_id"], deleted["target_kind"])),
        "message": "Comment deleted successfully",
    }

@share_comments_router.post("/{share_id}/comments", response_model=Envelope[CommentSchema], status_code=status.HTTP_201_CREATED)
def create_share_comment(
    *,
    db: Session = Depends(get_db),
    share_id: str,
    comment_in: CommentIn,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Create new comment on a share"""
    return _create(db, current_user, share_id, TargetKind.SHARE, comment_in, "add_share_comment")

@share_comments_router.get("/{share_id}/comments", response_model=Envelope[List[CommentSchema]])
def read_share_comments(
    *,
    db: Session = Depends(get_db),
    share_id: str,
    paging: PageParams = Depends(),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Comments on a share, oldest first"""
    return _list(db, share_id, TargetKind.SHARE, paging)
