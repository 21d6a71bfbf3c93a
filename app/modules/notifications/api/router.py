from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.errors import NotAuthorized, NotFoundError
from app.core.pagination import PageParams, build_pagination
from app.core.schemas import Envelope
from app.db.session import get_db
from app.deps import get_current_user
from app.modules.user_management.models.user import User
from app.modules.notifications.schemas.notification import (
    Notification as NotificationSchema,
    NotificationUpdate
)
from app.modules.notifications.services.notification import (
    get_notification,
    get_user_notifications,
    update_notification,
    mark_all_as_read,
)

router = APIRouter()

@router.get("", response_model=Envelope[List[NotificationSchema]])
def read_notifications(
    db: Session = Depends(get_db),
    paging: PageParams = Depends(),
    unread_only: bool = False,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get user's notifications with pagination and filter options"""
    notifications, total = get_user_notifications(db, current_user.id, paging.page, paging.limit, unread_only)
    return {
        "success": True,
        "data": notifications,
        "pagination": build_pagination(paging.page, paging.limit, total),
    }

@router.put("/read-all", response_model=Envelope[Dict[str, int]])
def mark_all_notifications_as_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Mark all notifications as read"""
    return {"success": True, "data": {"updated": mark_all_as_read(db, current_user.id)}}

@router.put("/{notification_id}", response_model=Envelope[NotificationSchema])
def mark_notification_as_read(
    *,
    db: Session = Depends(get_db),
    notification_id: str,
    notification_in: NotificationUpdate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Mark a specific notification as read"""
    notification = get_notification(db, notification_id=notification_id)
    if not notification:
        raise NotFoundError("Notification not found")

    if notification.user_id != current_user.id:
        raise NotAuthorized()

    notification = update_notification(db, notification, notification_in)
    return {"success": True, "data": NotificationSchema.model_validate(notification)}
