from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from starlette import status

from fitbook import booking, models
from fitbook.api.common import get_current_user, get_db
from fitbook.schemas.booking import (
    BookClassPayload,
    BookClassResponse,
    BookingMutationResponse,
    BookingResponse,
    BookingSummary,
    MyBookingsResponse,
)
from fitbook.schemas.common import MessageResponse
from fitbook.utils.logging_utils import log

router = APIRouter()


@router.get("/my-bookings", response_model=MyBookingsResponse)
def get_my_bookings(
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    my_bookings = booking.list_my_bookings(db, user.id)
    return MyBookingsResponse(
        bookings=my_bookings.bookings,
        booked_class_ids=my_bookings.booked_class_ids,
    )


@router.post(
    "/book-class",
    response_model=BookClassResponse,
    status_code=status.HTTP_201_CREATED,
)
def book_class_api(
    payload: BookClassPayload,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    log.debug(f"Booking request from '{user.name}' for class '{payload.class_id}'")
    db_booking = booking.book_class(
        db,
        user,
        class_id=payload.class_id,
        class_name=payload.class_name,
        date=payload.date,
        time=payload.time,
        place=payload.place,
        exercise_type=payload.exercise_type,
        instructor=payload.instructor,
    )
    return BookClassResponse(
        message="Class booked successfully",
        booking=BookingResponse.model_validate(db_booking),
    )


@router.put("/{booking_id}/cancel", response_model=MessageResponse)
def cancel_booking_api(
    booking_id: UUID,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    booking.cancel_booking(db, booking_id, user.id)
    return MessageResponse(message="Booking cancelled and deleted successfully")


@router.put("/class/{class_id}/cancel", response_model=BookingMutationResponse)
def cancel_booking_by_class_api(
    class_id: UUID,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    db_booking = booking.cancel_booking_by_class(db, class_id, user.id)
    return BookingMutationResponse(
        message="Booking cancelled successfully",
        booking=BookingSummary.model_validate(db_booking),
    )


@router.delete("/{booking_id}", response_model=MessageResponse)
def delete_booking_api(
    booking_id: UUID,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    booking.delete_booking(db, booking_id, user.id)
    return MessageResponse(message="Booking cancelled successfully")
