import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from fitbook import models
from fitbook.consts import NOTIFICATION_NOT_FOUND_MESSAGE
from fitbook.database.database import commit
from fitbook.errors import NotFound
from fitbook.models import NotificationType
from fitbook.utils.logging_utils import log


def notify(
    db: Session,
    user_id: UUID,
    title: str,
    message: str,
    type: NotificationType,
    class_id: Optional[UUID] = None,
    created_at: Optional[datetime.datetime] = None,
    commit_changes: bool = True,
) -> models.Notification:
    """
    Append a notification to the feed of the given user.

    Pass ``commit_changes=False`` to make the notification part of a larger unit of
    work owned by the caller.
    """
    notification = models.Notification(
        user_id=user_id,
        title=title,
        message=message,
        type=type,
        class_id=class_id,
        read=False,
    )
    if created_at is not None:
        notification.created_at = created_at
    db.add(notification)
    if commit_changes:
        commit(db)
        db.refresh(notification)
    log.debug(f"Notification '{title}' ({type.value}) queued for user '{user_id}'")
    return notification


def list_for_user(
    db: Session, user_id: UUID, unread_only: bool = False
) -> list[models.Notification]:
    query = db.query(models.Notification).filter_by(user_id=user_id)
    if unread_only:
        query = query.filter_by(read=False)
    return query.order_by(models.Notification.created_at.desc()).all()


def unread_count(db: Session, user_id: UUID) -> int:
    return db.query(models.Notification).filter_by(user_id=user_id, read=False).count()


def mark_read(db: Session, notification_id: UUID, user_id: UUID) -> models.Notification:
    notification = (
        db.query(models.Notification)
        .filter_by(id=notification_id, user_id=user_id)
        .one_or_none()
    )
    if notification is None:
        raise NotFound(NOTIFICATION_NOT_FOUND_MESSAGE)
    if not notification.read:
        notification.read = True
        commit(db)
        db.refresh(notification)
    return notification


def mark_all_read(db: Session, user_id: UUID) -> int:
    row_count = (
        db.query(models.Notification)
        .filter_by(user_id=user_id, read=False)
        .update({models.Notification.read: True})
    )
    commit(db)
    return row_count


def find_recent(
    db: Session,
    user_id: UUID,
    class_id: UUID,
    type: NotificationType,
    since: datetime.datetime,
) -> Optional[models.Notification]:
    return (
        db.query(models.Notification)
        .filter_by(user_id=user_id, class_id=class_id, type=type)
        .filter(models.Notification.created_at >= since)
        .first()
    )
