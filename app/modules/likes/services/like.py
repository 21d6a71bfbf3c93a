from typing import List, Tuple
import logging
import uuid

from sqlalchemy.orm import Session

from app.core.targets import TargetKind, require_target
from app.db.upsert import insert_if_absent
from app.modules.likes.models.like import Like
from app.modules.posts.models.post import Post
from app.modules.notifications.services.notification_events import create_like_notification

logger = logging.getLogger("app")

def count_likes(db: Session, post_id: str) -> int:
    return db.query(Like).filter(Like.post_id == post_id).count()

def toggle_like(db: Session, actor_id: str, post_id: str) -> dict:
    """
    Like the post, or unlike it when the actor already does.

    Insert first and fall back to delete when the (user_id, post_id) unique
    constraint rejects the row. Two identical concurrent calls therefore
    serialize into like-then-unlike instead of creating a duplicate.
    """
    require_target(db, post_id, TargetKind.POST)

    try:
        liked = insert_if_absent(db, Like(id=str(uuid.uuid4()), user_id=actor_id, post_id=post_id))
        if not liked:
            db.query(Like).filter(
                Like.user_id == actor_id, Like.post_id == post_id
            ).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"User {actor_id} {'liked' if liked else 'unliked'} post {post_id}")

    if liked:
        create_like_notification(db, post_id, actor_id)

    return {"liked": liked, "like_count": count_likes(db, post_id)}

def check_user_liked(db: Session, actor_id: str, post_id: str) -> bool:
    return db.query(Like).filter(Like.user_id == actor_id, Like.post_id == post_id).first() is not None

def get_post_likes(db: Session, post_id: str, page: int = 1, limit: int = 20) -> Tuple[List[Like], int]:
    """Likes on a post, newest first"""
    require_target(db, post_id, TargetKind.POST)

    query = db.query(Like).filter(Like.post_id == post_id)
    total = query.count()
    likes = (
        query.order_by(Like.created_at.desc(), Like.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return likes, total

def get_user_liked_posts(db: Session, user_id: str, page: int = 1, limit: int = 10) -> Tuple[List[Tuple[Like, Post]], int]:
    """Posts a user liked, most recent like first"""
    query = (
        db.query(Like, Post)
        .join(Post, Post.id == Like.post_id)
        .filter(Like.user_id == user_id)
    )
    total = query.count()
    rows = (
        query.order_by(Like.created_at.desc(), Like.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return rows, total
