from typing import List, Optional, Tuple
import logging
import uuid

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import EmptyContent, NotAuthorized, NotFoundError, ValidationError
from app.core.targets import TargetKind, require_target
from app.modules.comments.models.comment import Comment
from app.modules.notifications.services.notification import delete_comment_notifications
from app.modules.notifications.services.notification_events import create_comment_notification

logger = logging.getLogger("app")

def _clean_content(content: Optional[str]) -> str:
    content = (content or "").strip()
    if not content:
        raise EmptyContent()
    if len(content) > settings.COMMENT_MAX_LENGTH:
        raise ValidationError(f"Comment content must be {settings.COMMENT_MAX_LENGTH} characters or less")
    return content

def get_comment(db: Session, comment_id: str) -> Optional[Comment]:
    """Get comment by ID"""
    return db.query(Comment).filter(Comment.id == comment_id).first()

def _require_own_comment(db: Session, actor_id: str, comment_id: str) -> Comment:
    comment = get_comment(db, comment_id)
    if not comment:
        raise NotFoundError("Comment not found")
    if comment.user_id != actor_id:
        raise NotAuthorized("You can only modify your own comments")
    return comment

def count_comments(db: Session, target_id: str, target_kind: TargetKind) -> int:
    return db.query(Comment).filter(
        Comment.target_id == target_id,
        Comment.target_kind == TargetKind(target_kind).value,
    ).count()

def add_comment(db: Session, actor_id: str, target_id: str, target_kind: TargetKind, content: Optional[str]) -> Comment:
    """Create a new comment on a post or share"""
    content = _clean_content(content)
    target_kind = TargetKind(target_kind)
    require_target(db, target_id, target_kind)

    comment = Comment(
        id=str(uuid.uuid4()),
        user_id=actor_id,
        target_id=target_id,
        target_kind=target_kind.value,
        content=content,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)

    logger.info(f"User {actor_id} commented on {target_kind.value} {target_id}")
    create_comment_notification(db, target_id, target_kind, actor_id, comment.id)

    return comment

def update_comment(db: Session, actor_id: str, comment_id: str, content: Optional[str]) -> Comment:
    """Edit a comment; only its author may"""
    content = _clean_content(content)
    comment = _require_own_comment(db, actor_id, comment_id)

    comment.content = content
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment

def delete_comment(db: Session, actor_id: str, comment_id: str) -> dict:
    """Delete a comment; only its author may"""
    comment = _require_own_comment(db, actor_id, comment_id)
    deleted = {"id": comment.id, "target_id": comment.target_id, "target_kind": comment.target_kind}

    try:
        delete_comment_notifications(db, comment.id)
        db.delete(comment)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"User {actor_id} deleted comment {comment_id}")
    return deleted

def list_comments(
    db: Session, target_id: str, target_kind: TargetKind, page: int = 1, limit: int = 20
) -> Tuple[List[Comment], int]:
    """Comments on a target, oldest first, ties broken by ID"""
    target_kind = TargetKind(target_kind)
    require_target(db, target_id, target_kind)

    query = db.query(Comment).filter(
        Comment.target_id == target_id,
        Comment.target_kind == target_kind.value,
    )
    total = query.count()
    comments = (
        query.order_by(Comment.created_at.asc(), Comment.id.asc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return comments, total
