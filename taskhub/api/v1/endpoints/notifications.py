"""
Notification Endpoints Module

Notifications are pulled, not pushed. A client either fetches the latest
page, or passes the checkpoint from its previous response as since_id to get
only what arrived after it. How often to poll is up to the client.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, update
from sqlmodel import Session, select

from taskhub.api import deps
from taskhub.core.errors import NotFoundError, ValidationError
from taskhub.core.timeutil import utcnow
from taskhub.db.session import get_db
from taskhub.models.notification import Notification
from taskhub.models.related import ref_columns
from taskhub.models.user import User
from taskhub.schemas.notification import (
    MarkedRead, NotificationCreate, NotificationList, NotificationRead, UnreadCount,
)

router = APIRouter()


def _unread_count(db: Session, user_id: str) -> int:
    statement = select(func.count()).select_from(Notification).where(
        Notification.user_id == user_id, Notification.is_read == False  # noqa: E712
    )
    return db.exec(statement).one()


@router.get("", response_model=NotificationList)
def list_notifications(
    since_id: Optional[int] = Query(default=None, ge=0),
    limit: int = Query(default=50, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Notifications for the current user.

    Without since_id: the newest `limit` notifications, newest first.
    With since_id: notifications with a larger id, oldest first, so repeated
    calls with the returned checkpoint never skip or repeat an entry.
    """
    statement = select(Notification).where(Notification.user_id == current_user.id)
    if since_id is None:
        statement = statement.order_by(Notification.id.desc())
    else:
        statement = statement.where(Notification.id > since_id).order_by(Notification.id)

    notifications = db.exec(statement.limit(limit)).all()

    ids = [n.id for n in notifications]
    checkpoint = max(ids) if ids else since_id

    return NotificationList(
        notifications=[NotificationRead.model_validate(n) for n in notifications],
        unread_count=_unread_count(db, current_user.id),
        checkpoint=checkpoint,
    )


@router.get("/unread-count", response_model=UnreadCount)
def read_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return UnreadCount(unread_count=_unread_count(db, current_user.id))


@router.patch("/mark-all-read", response_model=MarkedRead)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    statement = (
        update(Notification)
        .where(Notification.user_id == current_user.id, Notification.is_read == False)  # noqa: E712
        .values(is_read=True, updated_at=utcnow())
    )
    result = db.exec(statement)
    db.commit()
    return MarkedRead(updated_count=result.rowcount)


@router.patch("/{notification_id}/read")
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Mark one of the current user's notifications as read.

    Raises:
        NotFoundError: If it doesn't exist, belongs to someone else, or is already read
    """
    statement = (
        update(Notification)
        .where(
            Notification.id == notification_id,
            Notification.user_id == current_user.id,
            Notification.is_read == False,  # noqa: E712
        )
        .values(is_read=True, updated_at=utcnow())
    )
    result = db.exec(statement)
    if result.rowcount != 1:
        db.rollback()
        raise NotFoundError("Notification not found or already read")
    db.commit()
    return {"status": "success", "detail": "Notification marked as read"}


@router.post("", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    notification_in: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_manager),
):
    """
    Create an arbitrary notification for a user. Project managers only.

    Raises:
        ValidationError: If the recipient doesn't exist
    """
    if not db.get(User, notification_in.user_id):
        raise ValidationError("Recipient not found", fields=["user_id"])

    related_type, related_id = (
        ref_columns(notification_in.related) if notification_in.related else (None, None)
    )
    notification = Notification(
        user_id=notification_in.user_id,
        type=notification_in.type,
        title=notification_in.title,
        message=notification_in.message,
        related_type=related_type,
        related_id=related_id,
    )
    db.add(notification)
    db.commit()
    db.refresh(notification)
    return NotificationRead.model_validate(notification)
