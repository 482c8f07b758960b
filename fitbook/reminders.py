import datetime
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.orm import Session

from fitbook import models, notifications
from fitbook.consts import CLASS_START_TITLE, REMINDER_JOB_ID
from fitbook.database.database import SessionLocal, commit
from fitbook.models import BookingStatus, NotificationType
from fitbook.settings import get_settings
from fitbook.utils.logging_utils import log
from fitbook.utils.time_utils import class_start_time, local_now


def check_starting_classes(
    db: Optional[Session] = None, now: Optional[datetime.datetime] = None
) -> int:
    """
    Emit a "class starting soon" notification for every active booking whose class
    starts within the reminder window.

    A reminder is skipped if the user already received one for the same class within
    the last window length. Never raises: failures are logged and the tick produces
    no notifications. Returns the number of notifications created.
    """
    if db is None:
        with SessionLocal() as session:
            return check_starting_classes(session, now)
    try:
        return _emit_class_start_reminders(db, now if now is not None else local_now())
    except Exception:
        log.exception("Error checking for starting classes")
        db.rollback()
        return 0


def _emit_class_start_reminders(db: Session, now: datetime.datetime) -> int:
    window_minutes = get_settings().REMINDER_WINDOW_MINUTES
    window = datetime.timedelta(minutes=window_minutes)
    window_end = now + window
    # inner join skips bookings whose class has been deleted
    upcoming = (
        db.query(models.Booking, models.ClassRecord)
        .join(models.ClassRecord, models.ClassRecord.id == models.Booking.class_id)
        .filter(models.Booking.status == BookingStatus.BOOKED)
        .all()
    )
    created = 0
    for booking, class_record in upcoming:
        start = class_start_time(class_record.date, class_record.time)
        if not now < start <= window_end:
            continue
        existing = notifications.find_recent(
            db,
            booking.user_id,
            class_record.id,
            NotificationType.CLASS_START,
            since=now - window,
        )
        if existing is not None:
            continue
        notifications.notify(
            db,
            booking.user_id,
            title=CLASS_START_TITLE,
            message=f'Your class "{booking.class_name}" is starting in {window_minutes} minutes!',
            type=NotificationType.CLASS_START,
            class_id=class_record.id,
            created_at=now,
            commit_changes=False,
        )
        db.flush()
        created += 1
    if created > 0:
        commit(db)
        log.info(f"Sent {created} class start reminder{'s' if created > 1 else ''}")
    else:
        log.debug("No classes starting soon")
    return created


class ReminderScheduler:
    """
    Runs the class start scan at a fixed interval. Ticks never overlap, a tick that
    is due while the previous one is still running is skipped.
    """

    def __init__(self, interval_seconds: Optional[int] = None) -> None:
        self.interval_seconds = (
            interval_seconds
            if interval_seconds is not None
            else get_settings().REMINDER_INTERVAL_SECONDS
        )
        self.scheduler: Optional[AsyncIOScheduler] = None

    @property
    def running(self) -> bool:
        return self.scheduler is not None and self.scheduler.running

    def start(self) -> None:
        if self.running:
            return
        self.scheduler = AsyncIOScheduler(timezone=get_settings().TIMEZONE)
        self.scheduler.add_job(
            check_starting_classes,
            IntervalTrigger(seconds=self.interval_seconds),
            id=REMINDER_JOB_ID,
            name="Class starting reminders",
            max_instances=1,
            coalesce=True,
        )
        self.scheduler.start()
        log.info(f"Reminder scheduler started, scanning every {self.interval_seconds}s")

    def stop(self) -> None:
        if self.scheduler is None:
            return
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        self.scheduler = None
        log.info("Reminder scheduler stopped")
