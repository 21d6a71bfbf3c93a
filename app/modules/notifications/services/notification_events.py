"""
Notification events service.
This module handles the creation of notifications when someone likes,
reacts to, shares or comments on another user's post or share.
Notifications are best effort: a failure is logged and never undoes the
mutation that triggered it.
"""
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from app.core.targets import TargetKind, get_target_owner_id
from app.modules.notifications.services.notification import create_notification
from app.modules.notifications.schemas.notification import NotificationCreate
from app.modules.user_management.services.user import get_user

# Set up logger
logger = logging.getLogger(__name__)

_TEMPLATES = {
    "like": "{actor} liked your post",
    "reaction": "{actor} reacted {reaction_type} to your {target}",
    "share": "{actor} shared your post",
    "comment": "{actor} commented on your {target}",
}

def _notify(
    db: Session,
    type: str,
    actor_id: str,
    target_id: str,
    target_kind: TargetKind,
    reaction_type: Optional[str] = None,
    comment_id: Optional[str] = None,
) -> bool:
    """
    Create a notification for the owner of a target.

    Args:
        db: Database session
        type: One of like, reaction, share, comment
        actor_id: ID of the user who triggered the event
        target_id: ID of the post or share acted upon
        target_kind: Post or Share
        reaction_type: Canonical reaction label for reaction events
        comment_id: ID of the comment for comment events

    Returns:
        True if notification was created, False otherwise
    """
    try:
        recipient_id = get_target_owner_id(db, target_id, target_kind)
        if not recipient_id:
            logger.warning(f"{target_kind.value} {target_id} not found when creating {type} notification")
            return False

        # Don't notify users about their own activity
        if recipient_id == actor_id:
            logger.debug(f"User {actor_id} acted on their own {target_kind.value}, no notification created")
            return False

        actor = get_user(db, actor_id)
        actor_name = actor.username if actor else "Someone"
        target = "shared post" if target_kind == TargetKind.SHARE else "post"

        create_notification(db, NotificationCreate(
            user_id=recipient_id,
            actor_id=actor_id,
            type=type,
            content=_TEMPLATES[type].format(actor=actor_name, reaction_type=reaction_type, target=target),
            target_id=target_id,
            target_kind=target_kind.value,
            reaction_type=reaction_type,
            comment_id=comment_id,
        ))
        logger.info(f"Created {type} notification for user {recipient_id} from user {actor_id}")
        return True

    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating {type} notification: {e}")
        return False

def create_like_notification(db: Session, post_id: str, liker_id: str) -> bool:
    return _notify(db, "like", liker_id, post_id, TargetKind.POST)

def create_reaction_notification(
    db: Session, target_id: str, target_kind: TargetKind, reactor_id: str, reaction_type: str
) -> bool:
    return _notify(db, "reaction", reactor_id, target_id, target_kind, reaction_type=reaction_type)

def create_share_notification(db: Session, post_id: str, sharer_id: str) -> bool:
    return _notify(db, "share", sharer_id, post_id, TargetKind.POST)

def create_comment_notification(
    db: Session, target_id: str, target_kind: TargetKind, commenter_id: str, comment_id: Optional[str] = None
) -> bool:
    return _notify(db, "comment", commenter_id, target_id, target_kind, comment_id=comment_id)
