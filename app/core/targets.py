"""
Reaction and comment targets.

Posts and shares live in separate id spaces; every ledger row that points
at one of them stores (target_id, target_kind).
"""
from enum import Enum
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import TargetNotFound


class TargetKind(str, Enum):
    POST = "Post"
    SHARE = "Share"


def get_target(db: Session, target_id: str, target_kind: TargetKind):
    """Return the Post or Share row a ledger entry points at, or None"""
    if target_kind == TargetKind.POST:
        from app.modules.posts.models.post import Post
        return db.query(Post).filter(Post.id == target_id).first()

    from app.modules.shares.models.share import Share
    return db.query(Share).filter(Share.id == target_id).first()


def require_target(db: Session, target_id: str, target_kind: TargetKind):
    target = get_target(db, target_id, target_kind)
    if not target:
        raise TargetNotFound(f"{TargetKind(target_kind).value} not found")
    return target


def get_target_owner_id(db: Session, target_id: str, target_kind: TargetKind) -> Optional[str]:
    target = get_target(db, target_id, target_kind)
    return target.user_id if target else None
