from typing import List, Optional, Tuple
import uuid
from sqlalchemy.orm import Session

from app.modules.notifications.models.notification import Notification
from app.modules.notifications.schemas.notification import NotificationCreate, NotificationUpdate, Notification as NotificationSchema
from app.modules.user_management.schemas.user import UserSummary
from app.modules.user_management.services.user import get_users_by_ids

def get_notification(db: Session, notification_id: str) -> Optional[Notification]:
    """Get notification by ID"""
    return db.query(Notification).filter(Notification.id == notification_id).first()

def get_user_notifications(
    db: Session, user_id: str, page: int = 1, limit: int = 20, unread_only: bool = False
) -> Tuple[List[NotificationSchema], int]:
    """Get notifications for a user, newest first, with the total count"""
    query = db.query(Notification).filter(Notification.user_id == user_id)

    if unread_only:
        query = query.filter(Notification.is_read.is_(False))

    total = query.count()
    notifications = (
        query.order_by(Notification.created_at.desc(), Notification.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    actors = get_users_by_ids(db, [n.actor_id for n in notifications if n.actor_id])
    result = []
    for notification in notifications:
        item = NotificationSchema.model_validate(notification)
        actor = actors.get(notification.actor_id)
        if actor:
            item.actor = UserSummary.model_validate(actor)
        result.append(item)

    return result, total

def create_notification(db: Session, notification_in: NotificationCreate) -> Notification:
    """Create a new notification"""
    notification = Notification(
        id=str(uuid.uuid4()),
        **notification_in.model_dump(),
    )

    db.add(notification)
    db.commit()
    db.refresh(notification)

    return notification

def update_notification(db: Session, notification: Notification, notification_in: NotificationUpdate) -> Notification:
    """Update a notification"""
    notification.is_read = notification_in.is_read

    db.add(notification)
    db.commit()
    db.refresh(notification)

    return notification

def mark_all_as_read(db: Session, user_id: str) -> int:
    """Mark all notifications as read for a user"""
    result = db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.is_read.is_(False)
    ).update({"is_read": True})

    db.commit()

    return result

def delete_target_notifications(db: Session, target_id: str, target_kind: str) -> int:
    """Delete notifications pointing at a target. Leaves the commit to the caller."""
    return db.query(Notification).filter(
        Notification.target_id == target_id,
        Notification.target_kind == target_kind,
    ).delete(synchronize_session=False)

def delete_comment_notifications(db: Session, comment_id: str) -> int:
    """Delete notifications raised by a comment. Leaves the commit to the caller."""
    return db.query(Notification).filter(
        Notification.comment_id == comment_id,
    ).delete(synchronize_session=False)
