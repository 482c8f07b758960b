import datetime
from typing import Optional
from uuid import UUID

from fitbook.models import NotificationType
from fitbook.schemas.camel import CamelModel


class NotificationResponse(CamelModel):
    id: UUID
    user_id: UUID
    title: str
    message: str
    type: NotificationType
    class_id: Optional[UUID] = None
    read: bool
    created_at: datetime.datetime


class NotificationsResponse(CamelModel):
    success: bool = True
    notifications: list[NotificationResponse]


class NotificationMutationResponse(CamelModel):
    success: bool = True
    notification: NotificationResponse


class UnreadCountResponse(CamelModel):
    success: bool = True
    count: int


class MarkAllReadResponse(CamelModel):
    success: bool = True
    updated: int
