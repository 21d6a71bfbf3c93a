from typing import List, Optional, Tuple
import logging
import uuid

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session

from app.core.errors import NotAuthorized, NotFoundError
from app.core.targets import TargetKind, require_target
from app.db.upsert import upsert
from app.modules.comments.models.comment import Comment
from app.modules.notifications.services.notification import delete_target_notifications
from app.modules.notifications.services.notification_events import create_share_notification
from app.modules.posts.models.post import AUDIENCES, Post
from app.modules.reactions.models.reaction import Reaction
from app.modules.shares.models.share import Share
from app.modules.shares.schemas.share import ShareUpdate

logger = logging.getLogger("app")

def _clean_caption(caption: Optional[str]) -> Optional[str]:
    if caption is None:
        return None
    return caption.strip() or None

def get_share(db: Session, share_id: str) -> Optional[Share]:
    """Get share by ID"""
    return db.query(Share).filter(Share.id == share_id).first()

def get_user_share(db: Session, actor_id: str, post_id: str) -> Optional[Share]:
    """Get the share an actor holds of a post"""
    return db.query(Share).filter(Share.user_id == actor_id, Share.post_id == post_id).first()

def count_shares(db: Session, post_id: str) -> int:
    return db.query(Share).filter(Share.post_id == post_id).count()

def _require_owned_share(db: Session, actor_id: str, share_id: str) -> Share:
    share = get_share(db, share_id)
    if not share:
        raise NotFoundError("Share not found")
    if share.user_id != actor_id:
        raise NotAuthorized("Unauthorized to modify this share")
    return share

def create_share(
    db: Session,
    actor_id: str,
    post_id: str,
    caption: Optional[str] = None,
    audience: Optional[str] = None,
) -> Tuple[Share, bool]:
    """
    Share a post, or update the caption/audience of the actor's existing share.

    Returns the share and whether it was newly created.
    """
    post = require_target(db, post_id, TargetKind.POST)
    if post.user_id != actor_id and post.audience == "OnlyMe":
        raise NotAuthorized("This post is private and cannot be shared")

    existing = get_user_share(db, actor_id, post_id)
    if audience not in AUDIENCES:
        audience = existing.audience if existing else "Public"
    caption = _clean_caption(caption)

    new_id = str(uuid.uuid4())
    try:
        share_id = upsert(
            db,
            Share,
            values={
                "id": new_id,
                "user_id": actor_id,
                "post_id": post_id,
                "share_caption": caption,
                "audience": audience,
            },
            conflict_keys=["user_id", "post_id"],
            update={"share_caption": caption, "audience": audience, "updated_at": func.now()},
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    # A concurrent first share may have won the insert; the returned id says who
    created = share_id == new_id
    logger.info(f"User {actor_id} {'shared' if created else 'updated share of'} post {post_id}")

    if created:
        create_share_notification(db, post_id, actor_id)

    return get_share(db, share_id), created

def update_share(db: Session, actor_id: str, share_id: str, share_in: ShareUpdate) -> Share:
    """Update caption and/or audience of the actor's own share"""
    share = _require_owned_share(db, actor_id, share_id)
    update_data = share_in.model_dump(exclude_unset=True)

    if "share_caption" in update_data:
        share.share_caption = _clean_caption(update_data["share_caption"])
    if update_data.get("audience") in AUDIENCES:
        share.audience = update_data["audience"]

    db.add(share)
    db.commit()
    db.refresh(share)
    return share

def purge_share(db: Session, share: Share) -> None:
    """Delete a share with everything attached to it. Leaves the commit to the caller."""
    kind = TargetKind.SHARE.value
    db.query(Reaction).filter(Reaction.target_kind == kind, Reaction.target_id == share.id).delete(synchronize_session=False)
    db.query(Comment).filter(Comment.target_kind == kind, Comment.target_id == share.id).delete(synchronize_session=False)
    delete_target_notifications(db, share.id, kind)
    db.query(Share).filter(Share.id == share.id).delete(synchronize_session=False)

def delete_share(db: Session, actor_id: str, share_id: str) -> dict:
    """
    Delete the actor's share together with its reactions and comments.
    All rows go in one transaction.
    """
    share = _require_owned_share(db, actor_id, share_id)
    post_id = share.post_id

    try:
        purge_share(db, share)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"User {actor_id} deleted share {share_id}")
    return {"share_id": share_id, "post_id": post_id, "share_count": count_shares(db, post_id)}

def check_user_shared(db: Session, actor_id: str, post_id: str) -> bool:
    return get_user_share(db, actor_id, post_id) is not None

def list_shares_for_post(db: Session, post_id: str, page: int = 1, limit: int = 20) -> Tuple[List[Share], int]:
    """Shares of a post, newest first"""
    require_target(db, post_id, TargetKind.POST)

    query = db.query(Share).filter(Share.post_id == post_id)
    total = query.count()
    shares = (
        query.order_by(Share.created_at.desc(), Share.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return shares, total

def list_shares_for_user(
    db: Session, user_id: str, viewer_id: str, page: int = 1, limit: int = 10
) -> Tuple[List[Share], int]:
    """Shares made by a user that the viewer may see, newest first"""
    query = (
        db.query(Share)
        .join(Post, Post.id == Share.post_id)
        .filter(Share.user_id == user_id)
    )

    if viewer_id != user_id:
        query = query.filter(
            Share.audience != "OnlyMe",
            or_(Post.audience != "OnlyMe", and_(Post.audience == "OnlyMe", Post.user_id == viewer_id)),
        )

    total = query.count()
    shares = (
        query.order_by(Share.created_at.desc(), Share.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return shares, total
