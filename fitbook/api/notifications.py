from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from fitbook import models, notifications
from fitbook.api.common import get_current_user, get_db
from fitbook.schemas.notification import (
    MarkAllReadResponse,
    NotificationMutationResponse,
    NotificationResponse,
    NotificationsResponse,
    UnreadCountResponse,
)

router = APIRouter()


@router.get("", response_model=NotificationsResponse)
def list_notifications_api(
    unread_only: bool = Query(False, alias="unreadOnly"),
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return NotificationsResponse(
        notifications=[
            NotificationResponse.model_validate(n)
            for n in notifications.list_for_user(db, user.id, unread_only=unread_only)
        ]
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
def get_unread_count_api(
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UnreadCountResponse(count=notifications.unread_count(db, user.id))


@router.put("/read-all", response_model=MarkAllReadResponse)
def mark_all_read_api(
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MarkAllReadResponse(updated=notifications.mark_all_read(db, user.id))


@router.put("/{notification_id}/read", response_model=NotificationMutationResponse)
def mark_read_api(
    notification_id: UUID,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    notification = notifications.mark_read(db, notification_id, user.id)
    return NotificationMutationResponse(
        notification=NotificationResponse.model_validate(notification)
    )
