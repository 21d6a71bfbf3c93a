from typing import Dict, List, Optional, Tuple
import logging
import uuid

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import InvalidReactionType
from app.core.targets import TargetKind, require_target
from app.db.upsert import upsert
from app.modules.posts.models.post import Post
from app.modules.reactions.models.reaction import Reaction, REACTION_TYPES, normalize_reaction_type
from app.modules.notifications.services.notification_events import create_reaction_notification

logger = logging.getLogger("app")

def _canonical(raw_type) -> str:
    canonical = normalize_reaction_type(raw_type)
    if canonical is None:
        raise InvalidReactionType(raw_type, REACTION_TYPES)
    return canonical

def _target_filter(target_id: str, target_kind: TargetKind):
    return (Reaction.target_id == target_id, Reaction.target_kind == TargetKind(target_kind).value)

def get_actor_reaction(db: Session, actor_id: str, target_id: str, target_kind: TargetKind) -> Optional[Reaction]:
    """Get the reaction an actor holds on a target"""
    return (
        db.query(Reaction)
        .filter(Reaction.user_id == actor_id, *_target_filter(target_id, target_kind))
        .first()
    )

def get_reaction_counts(db: Session, target_id: str, target_kind: TargetKind) -> Dict:
    """Per-type reaction counts for a target, zero-filled for every type"""
    rows = (
        db.query(Reaction.reaction_type, func.count(Reaction.id))
        .filter(*_target_filter(target_id, target_kind))
        .group_by(Reaction.reaction_type)
        .all()
    )

    counts = {reaction_type: 0 for reaction_type in REACTION_TYPES}
    for reaction_type, count in rows:
        # Legacy rows may still hold "HEART"; fold them into "Heart"
        canonical = normalize_reaction_type(reaction_type)
        if canonical:
            counts[canonical] += count

    return {"counts": counts, "total": sum(counts.values())}

def set_reaction(db: Session, actor_id: str, target_id: str, target_kind: TargetKind, raw_type) -> Dict:
    """
    Create or overwrite the actor's reaction on a target.

    The write is a single upsert keyed on (user_id, target_id, target_kind),
    so concurrent calls can never leave two rows for the same actor.
    """
    canonical = _canonical(raw_type)
    target_kind = TargetKind(target_kind)
    require_target(db, target_id, target_kind)

    new_id = str(uuid.uuid4())
    try:
        row_id = upsert(
            db,
            Reaction,
            values={
                "id": new_id,
                "user_id": actor_id,
                "target_id": target_id,
                "target_kind": target_kind.value,
                "reaction_type": canonical,
            },
            conflict_keys=["user_id", "target_id", "target_kind"],
            update={"reaction_type": canonical, "updated_at": func.now()},
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"User {actor_id} reacted {canonical} to {target_kind.value} {target_id}")

    # Only the first reaction on a target notifies its owner
    if row_id == new_id:
        create_reaction_notification(db, target_id, target_kind, actor_id, canonical)

    return {
        "type": canonical,
        "actor_reaction": get_actor_reaction(db, actor_id, target_id, target_kind),
        **get_reaction_counts(db, target_id, target_kind),
    }

def remove_reaction(db: Session, actor_id: str, target_id: str, target_kind: TargetKind) -> Dict:
    """Delete the actor's reaction; removing an absent reaction is not an error"""
    try:
        removed = (
            db.query(Reaction)
            .filter(Reaction.user_id == actor_id, *_target_filter(target_id, target_kind))
            .delete(synchronize_session=False)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    if removed:
        logger.info(f"User {actor_id} removed reaction from {TargetKind(target_kind).value} {target_id}")

    return {"removed": bool(removed), **get_reaction_counts(db, target_id, target_kind)}

def list_reactions(
    db: Session,
    target_id: str,
    target_kind: TargetKind,
    page: int = 1,
    limit: int = 20,
    filter_type: Optional[str] = None,
) -> Tuple[List[Reaction], int]:
    """Reactions on a target, newest first, optionally limited to one type"""
    query = db.query(Reaction).filter(*_target_filter(target_id, target_kind))

    if filter_type:
        canonical = _canonical(filter_type)
        query = query.filter(func.lower(Reaction.reaction_type) == canonical.lower())

    total = query.count()
    reactions = (
        query.order_by(Reaction.created_at.desc(), Reaction.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return reactions, total

def list_user_reacted_posts(db: Session, user_id: str, page: int = 1, limit: int = 10) -> Tuple[List[Tuple[Reaction, Post]], int]:
    """Posts a user reacted to, most recent reaction first"""
    query = (
        db.query(Reaction, Post)
        .join(Post, Post.id == Reaction.target_id)
        .filter(Reaction.user_id == user_id, Reaction.target_kind == TargetKind.POST.value)
    )

    total = query.count()
    rows = (
        query.order_by(Reaction.created_at.desc(), Reaction.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return rows, total
