import datetime
from typing import Optional
from uuid import UUID

from fitbook.models import BookingStatus
from fitbook.schemas.camel import CamelModel


class BookClassPayload(CamelModel):
    class_id: Optional[UUID] = None
    class_name: Optional[str] = None
    date: Optional[datetime.date] = None
    time: Optional[datetime.time] = None
    place: Optional[str] = None
    exercise_type: Optional[str] = None
    instructor: Optional[str] = None


class BookingResponse(CamelModel):
    id: UUID
    user_id: UUID
    class_id: UUID
    class_name: str
    instructor: str
    exercise_type: str
    date: datetime.date
    time: datetime.time
    place: str
    status: BookingStatus
    created_at: datetime.datetime


class BookingSummary(CamelModel):
    id: UUID
    class_id: UUID
    class_name: str
    instructor: str
    date: datetime.date
    time: datetime.time
    place: str
    status: BookingStatus


class MyBookings(CamelModel):
    bookings: list[BookingSummary]
    booked_class_ids: list[UUID]


class MyBookingsResponse(MyBookings):
    success: bool = True


class BookingMutationResponse(CamelModel):
    success: bool = True
    message: str
    booking: BookingSummary


class BookClassResponse(CamelModel):
    success: bool = True
    message: str
    booking: BookingResponse
