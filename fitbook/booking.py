import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from fitbook import classes, models, notifications
from fitbook.consts import (
    ALREADY_BOOKED_MESSAGE,
    BOOKING_NOT_FOUND_MESSAGE,
    CANCELLATION_TITLE,
    CLASS_NOT_FOUND_MESSAGE,
    INSTRUCTOR_BOOKING_TITLE,
    MEMBER_BOOKING_TITLE,
    NO_INSTRUCTOR_MESSAGE,
    UNKNOWN_INSTRUCTOR,
)
from fitbook.database.database import commit
from fitbook.errors import Conflict, NotFound, ValidationError
from fitbook.models import BookingStatus, NotificationType
from fitbook.schemas.booking import BookingSummary, MyBookings
from fitbook.utils.logging_utils import log
from fitbook.utils.time_utils import readable_date, readable_time
from fitbook.utils.validation_utils import require_fields


def book_class(
    db: Session,
    user: models.User,
    class_id: Optional[UUID],
    class_name: Optional[str],
    date: Optional[datetime.date],
    time: Optional[datetime.time],
    place: Optional[str],
    exercise_type: Optional[str],
    instructor: Optional[str] = None,
) -> models.Booking:
    """
    Book a class for the given user.

    The booking row, the roster entry and both notifications (member and instructor)
    are written in a single transaction. A concurrent booking of the same class by the
    same user that slips past the roster check is rejected by the unique constraints
    and reported as a Conflict.
    """
    require_fields(class_id, class_name, date, time, place, exercise_type)
    class_record = classes.get_class(db, class_id)
    if class_record is None:
        log.warning(f"Class '{class_id}' not found")
        raise NotFound(CLASS_NOT_FOUND_MESSAGE)
    if class_record.instructor_id is None:
        log.error(f"No instructor found for class '{class_id}'")
        raise ValidationError(NO_INSTRUCTOR_MESSAGE)
    if user.id in classes.participant_ids(class_record):
        log.debug(f"User '{user.id}' already booked class '{class_id}'")
        raise Conflict(ALREADY_BOOKED_MESSAGE)
    booking = models.Booking(
        user_id=user.id,
        class_id=class_id,
        class_name=class_name,
        exercise_type=exercise_type,
        instructor=instructor
        or class_record.resolved_instructor_name
        or UNKNOWN_INSTRUCTOR,
        date=date,
        time=time,
        place=place,
        status=BookingStatus.BOOKED,
    )
    db.add(booking)
    classes.add_participant(class_record, user.id)
    notifications.notify(
        db,
        user.id,
        title=MEMBER_BOOKING_TITLE,
        message=f"You have successfully booked {class_name} class for {date.isoformat()} at {readable_time(time)}",
        type=NotificationType.BOOKING,
        class_id=class_id,
        commit_changes=False,
    )
    notifications.notify(
        db,
        class_record.instructor_id,
        title=INSTRUCTOR_BOOKING_TITLE,
        message=f"{user.name} has booked your {class_name} class scheduled for {date.isoformat()} at {readable_time(time)}",
        type=NotificationType.INSTRUCTOR_BOOKING,
        class_id=class_id,
        commit_changes=False,
    )
    commit(db, conflict_message=ALREADY_BOOKED_MESSAGE)
    db.refresh(booking)
    log.info(f"User '{user.name}' booked '{class_name}' ({class_id})")
    return booking


def _leave_class(db: Session, booking: models.Booking) -> None:
    class_record = classes.get_class(db, booking.class_id)
    if class_record is None:
        log.debug(f"Class '{booking.class_id}' no longer exists, roster untouched")
        return
    classes.remove_participant(class_record, booking.user_id)


def _find_active_booking(db: Session, **criteria) -> Optional[models.Booking]:
    return (
        db.query(models.Booking)
        .filter_by(status=BookingStatus.BOOKED, **criteria)
        .one_or_none()
    )


def cancel_booking(db: Session, booking_id: UUID, user_id: UUID) -> None:
    """
    Cancel an active booking by its id. The booking row is deleted, not marked as
    cancelled (compare with ``cancel_booking_by_class``).
    """
    booking = _find_active_booking(db, id=booking_id, user_id=user_id)
    if booking is None:
        log.debug(f"Active booking '{booking_id}' not found for user '{user_id}'")
        raise NotFound(BOOKING_NOT_FOUND_MESSAGE)
    _leave_class(db, booking)
    notifications.notify(
        db,
        user_id,
        title=CANCELLATION_TITLE,
        message=f"You have cancelled your booking for {booking.class_name} on "
        f"{readable_date(booking.date)} at {readable_time(booking.time)}",
        type=NotificationType.BOOKING,
        class_id=booking.class_id,
        commit_changes=False,
    )
    db.delete(booking)
    commit(db)
    log.info(f"Booking '{booking_id}' cancelled and deleted")


def cancel_booking_by_class(
    db: Session, class_id: UUID, user_id: UUID
) -> models.Booking:
    """
    Cancel the active booking of a user for a class. The booking row is kept with
    status cancelled (compare with ``cancel_booking``).
    """
    booking = _find_active_booking(db, class_id=class_id, user_id=user_id)
    if booking is None:
        log.debug(f"Active booking for class '{class_id}' not found for user '{user_id}'")
        raise NotFound(BOOKING_NOT_FOUND_MESSAGE)
    _leave_class(db, booking)
    booking.status = BookingStatus.CANCELLED
    commit(db)
    db.refresh(booking)
    log.info(f"Booking '{booking.id}' marked as cancelled")
    return booking


def delete_booking(db: Session, booking_id: UUID, user_id: UUID) -> None:
    booking = (
        db.query(models.Booking)
        .filter_by(id=booking_id, user_id=user_id)
        .one_or_none()
    )
    if booking is None:
        log.debug(f"Booking '{booking_id}' not found for user '{user_id}'")
        raise NotFound(BOOKING_NOT_FOUND_MESSAGE)
    db.delete(booking)
    _leave_class(db, booking)
    commit(db)
    log.info(f"Booking '{booking_id}' deleted")


def list_my_bookings(db: Session, user_id: UUID) -> MyBookings:
    db_bookings = (
        db.query(models.Booking)
        .filter_by(user_id=user_id, status=BookingStatus.BOOKED)
        .order_by(models.Booking.created_at.desc())
        .all()
    )
    summaries = []
    for db_booking in db_bookings:
        class_record = classes.get_class(db, db_booking.class_id)
        summary = BookingSummary.model_validate(db_booking)
        # the live class instructor wins over the name copied at booking time
        if class_record is not None and class_record.instructor is not None:
            summary.instructor = class_record.instructor.name
        summaries.append(summary)
    # roster membership counts even if the booking row is missing
    enrolled_classes = classes.get_classes_with_participant(db, user_id)
    booked_class_ids = list(
        dict.fromkeys(
            [s.class_id for s in summaries] + [c.id for c in enrolled_classes]
        )
    )
    return MyBookings(bookings=summaries, booked_class_ids=booked_class_ids)
