import datetime
import uuid

import pytest

from fitbook import booking, classes, models, notifications
from fitbook.errors import Conflict, NotFound, ValidationError
from fitbook.models import BookingStatus, NotificationType


def book_yoga(db, user, class_record, **overrides):
    fields = dict(
        class_id=class_record.id,
        class_name="Yoga",
        date=class_record.date,
        time=class_record.time,
        place=class_record.place,
        exercise_type=class_record.exercise_type,
    )
    fields.update(overrides)
    return booking.book_class(db, user, **fields)


def count_rows(db, model, **criteria) -> int:
    return db.query(model).filter_by(**criteria).count()


def test_book_class(db, member, instructor, yoga_class):
    db_booking = book_yoga(db, member, yoga_class)

    assert db_booking.status == BookingStatus.BOOKED
    assert db_booking.class_name == "Yoga"
    assert db_booking.instructor == instructor.name
    assert classes.participant_ids(yoga_class) == [member.id]

    member_feed = notifications.list_for_user(db, member.id)
    assert [n.type for n in member_feed] == [NotificationType.BOOKING]
    assert member_feed[0].class_id == yoga_class.id
    assert member_feed[0].read is False
    instructor_feed = notifications.list_for_user(db, instructor.id)
    assert [n.type for n in instructor_feed] == [NotificationType.INSTRUCTOR_BOOKING]
    assert member.name in instructor_feed[0].message


def test_book_class_keeps_given_instructor_name(db, member, yoga_class):
    db_booking = book_yoga(db, member, yoga_class, instructor="Guest Teacher")
    assert db_booking.instructor == "Guest Teacher"


def test_book_class_twice(db, member, yoga_class):
    book_yoga(db, member, yoga_class)
    with pytest.raises(Conflict):
        book_yoga(db, member, yoga_class)
    assert count_rows(db, models.Booking, user_id=member.id) == 1
    assert classes.participant_ids(yoga_class) == [member.id]


@pytest.mark.parametrize(
    "missing", ["class_id", "class_name", "date", "time", "place", "exercise_type"]
)
def test_book_class_missing_field(db, member, yoga_class, missing):
    with pytest.raises(ValidationError):
        book_yoga(db, member, yoga_class, **{missing: None})
    assert count_rows(db, models.Booking) == 0


def test_book_class_blank_field(db, member, yoga_class):
    with pytest.raises(ValidationError):
        book_yoga(db, member, yoga_class, place="  ")


def test_book_unknown_class(db, member, yoga_class):
    with pytest.raises(NotFound):
        book_yoga(db, member, yoga_class, class_id=uuid.uuid4())
    assert count_rows(db, models.Booking) == 0


def test_book_class_without_instructor(db, member):
    class_record = models.ClassRecord(
        category="Cardio",
        exercise_type="Spinning",
        date=datetime.date(2030, 1, 16),
        time=datetime.time(18, 30),
        place="Bike room",
    )
    db.add(class_record)
    db.commit()

    with pytest.raises(ValidationError):
        book_yoga(db, member, class_record, class_name="Spinning")
    assert count_rows(db, models.Booking) == 0
    assert count_rows(db, models.Notification) == 0
    db.refresh(class_record)
    assert classes.participant_ids(class_record) == []


def test_concurrent_duplicate_booking_is_rejected(db, db_sessionmaker, member, yoga_class):
    with db_sessionmaker() as other_db:
        # the other request has already seen the roster without the member
        stale_class = other_db.get(models.ClassRecord, yoga_class.id)
        assert stale_class.participants == []
        other_member = other_db.get(models.User, member.id)

        book_yoga(db, member, yoga_class)

        with pytest.raises(Conflict):
            book_yoga(other_db, other_member, stale_class)

    db.expire_all()
    assert count_rows(db, models.Booking, user_id=member.id) == 1
    assert count_rows(db, models.ClassParticipant, user_id=member.id) == 1
    assert count_rows(db, models.Notification, user_id=member.id) == 1


def test_cancel_booking_deletes_row(db, member, yoga_class):
    db_booking = book_yoga(db, member, yoga_class)
    booking_id = db_booking.id

    booking.cancel_booking(db, booking_id, member.id)

    assert db.get(models.Booking, booking_id) is None
    assert classes.participant_ids(yoga_class) == []
    assert booking.list_my_bookings(db, member.id).bookings == []
    titles = [n.title for n in notifications.list_for_user(db, member.id)]
    assert "Class Cancelled" in titles


def test_cancel_booking_of_other_user(db, member, instructor, yoga_class):
    db_booking = book_yoga(db, member, yoga_class)
    with pytest.raises(NotFound):
        booking.cancel_booking(db, db_booking.id, instructor.id)
    assert db.get(models.Booking, db_booking.id) is not None


def test_cancel_booking_twice(db, member, yoga_class):
    db_booking = book_yoga(db, member, yoga_class)
    booking_id = db_booking.id
    booking.cancel_booking(db, booking_id, member.id)
    with pytest.raises(NotFound):
        booking.cancel_booking(db, booking_id, member.id)


def test_cancel_booking_by_class_keeps_row(db, member, yoga_class):
    db_booking = book_yoga(db, member, yoga_class)

    cancelled = booking.cancel_booking_by_class(db, yoga_class.id, member.id)

    assert cancelled.id == db_booking.id
    assert cancelled.status == BookingStatus.CANCELLED
    assert db.get(models.Booking, db_booking.id).status == BookingStatus.CANCELLED
    assert classes.participant_ids(yoga_class) == []
    my_bookings = booking.list_my_bookings(db, member.id)
    assert my_bookings.bookings == []
    assert my_bookings.booked_class_ids == []


def test_cancel_booking_by_class_without_booking(db, member, yoga_class):
    with pytest.raises(NotFound):
        booking.cancel_booking_by_class(db, yoga_class.id, member.id)


def test_book_again_after_soft_cancel(db, member, yoga_class):
    first = book_yoga(db, member, yoga_class)
    booking.cancel_booking_by_class(db, yoga_class.id, member.id)

    second = book_yoga(db, member, yoga_class)

    assert second.id != first.id
    assert count_rows(db, models.Booking, user_id=member.id) == 2
    assert count_rows(db, models.Booking, user_id=member.id, status=BookingStatus.BOOKED) == 1
    assert classes.participant_ids(yoga_class) == [member.id]


def test_cancel_booking_when_class_is_gone(db, member, yoga_class):
    db_booking = book_yoga(db, member, yoga_class)
    booking_id = db_booking.id
    classes.delete_class(db, yoga_class.id)

    booking.cancel_booking(db, booking_id, member.id)

    assert db.get(models.Booking, booking_id) is None


def test_delete_booking(db, member, yoga_class):
    db_booking = book_yoga(db, member, yoga_class)
    booking_id = db_booking.id

    booking.delete_booking(db, booking_id, member.id)

    assert db.get(models.Booking, booking_id) is None
    assert classes.participant_ids(yoga_class) == []


def test_delete_cancelled_booking(db, member, yoga_class):
    db_booking = book_yoga(db, member, yoga_class)
    booking_id = db_booking.id
    booking.cancel_booking_by_class(db, yoga_class.id, member.id)

    booking.delete_booking(db, booking_id, member.id)

    assert db.get(models.Booking, booking_id) is None


def test_delete_booking_when_class_is_gone(db, member, yoga_class):
    db_booking = book_yoga(db, member, yoga_class)
    booking_id = db_booking.id
    classes.delete_class(db, yoga_class.id)

    booking.delete_booking(db, booking_id, member.id)

    assert db.get(models.Booking, booking_id) is None


def test_delete_unknown_booking(db, member, yoga_class):
    book_yoga(db, member, yoga_class)
    notification_count = count_rows(db, models.Notification)

    with pytest.raises(NotFound):
        booking.delete_booking(db, uuid.uuid4(), member.id)

    assert count_rows(db, models.Booking) == 1
    assert count_rows(db, models.Notification) == notification_count
    assert classes.participant_ids(yoga_class) == [member.id]


def test_list_my_bookings_newest_first(db, member, instructor, yoga_class):
    pilates_class = classes.create_class(
        db,
        instructor_id=instructor.id,
        instructor_name=instructor.name,
        category="Mind & Body",
        exercise_type="Pilates",
        date=datetime.date(2030, 1, 17),
        time=datetime.time(8, 0),
        place="Studio 2",
    )
    yoga_booking = book_yoga(db, member, yoga_class)
    pilates_booking = book_yoga(db, member, pilates_class, class_name="Pilates")
    yoga_booking.created_at = datetime.datetime(2030, 1, 1, 12, 0)
    pilates_booking.created_at = datetime.datetime(2030, 1, 2, 12, 0)
    db.commit()

    my_bookings = booking.list_my_bookings(db, member.id)

    assert [b.class_name for b in my_bookings.bookings] == ["Pilates", "Yoga"]
    assert my_bookings.booked_class_ids == [pilates_class.id, yoga_class.id]


def test_list_my_bookings_prefers_live_instructor_name(db, member, instructor, yoga_class):
    book_yoga(db, member, yoga_class, instructor="Old Name")
    instructor.name = "Kari Nordmann"
    db.commit()

    my_bookings = booking.list_my_bookings(db, member.id)

    assert my_bookings.bookings[0].instructor == "Kari Nordmann"


def test_list_my_bookings_falls_back_to_booked_instructor_name(db, member, yoga_class):
    db_booking = book_yoga(db, member, yoga_class, instructor="Guest Teacher")
    db_booking.class_id = uuid.uuid4()
    db.commit()

    my_bookings = booking.list_my_bookings(db, member.id)

    assert my_bookings.bookings[0].instructor == "Guest Teacher"


def test_list_my_bookings_includes_roster_only_classes(db, member, yoga_class):
    classes.add_participant(yoga_class, member.id)
    db.commit()

    my_bookings = booking.list_my_bookings(db, member.id)

    assert my_bookings.bookings == []
    assert my_bookings.booked_class_ids == [yoga_class.id]
