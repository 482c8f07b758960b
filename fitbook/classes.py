import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session, joinedload, selectinload

from fitbook import models
from fitbook.consts import CLASS_NOT_FOUND_MESSAGE
from fitbook.database.database import commit
from fitbook.errors import NotFound, ValidationError
from fitbook.utils.logging_utils import log
from fitbook.utils.validation_utils import require_fields


def create_class(
    db: Session,
    instructor_id: UUID,
    instructor_name: str,
    category: Optional[str],
    exercise_type: Optional[str],
    date: Optional[datetime.date],
    time: Optional[datetime.time],
    place: Optional[str],
) -> models.ClassRecord:
    require_fields(
        instructor_id, instructor_name, category, exercise_type, date, time, place
    )
    class_record = models.ClassRecord(
        instructor_id=instructor_id,
        instructor_name=instructor_name,
        category=category,
        exercise_type=exercise_type,
        date=date,
        time=time,
        place=place,
    )
    db.add(class_record)
    commit(db)
    db.refresh(class_record)
    log.info(
        f"Class '{class_record.exercise_type}' on {class_record.date} at {class_record.time} "
        f"created by '{instructor_name}'"
    )
    return class_record


def list_classes(db: Session) -> list[models.ClassRecord]:
    return (
        db.query(models.ClassRecord)
        .options(
            joinedload(models.ClassRecord.instructor),
            selectinload(models.ClassRecord.participants),
        )
        .order_by(models.ClassRecord.date, models.ClassRecord.time)
        .all()
    )


def get_class(db: Session, class_id: UUID) -> Optional[models.ClassRecord]:
    return db.get(models.ClassRecord, class_id)


def get_classes_with_participant(
    db: Session, user_id: UUID
) -> list[models.ClassRecord]:
    return (
        db.query(models.ClassRecord)
        .join(models.ClassRecord.participants)
        .filter(models.ClassParticipant.user_id == user_id)
        .order_by(models.ClassParticipant.joined_at)
        .all()
    )


def update_class(
    db: Session,
    class_id: UUID,
    category: Optional[str],
    exercise_type: Optional[str],
    date: Optional[datetime.date],
    time: Optional[datetime.time],
    place: Optional[str],
) -> models.ClassRecord:
    require_fields(category, exercise_type, date, time, place)
    class_record = get_class(db, class_id)
    if class_record is None:
        raise NotFound(CLASS_NOT_FOUND_MESSAGE)
    class_record.category = category
    class_record.exercise_type = exercise_type
    class_record.date = date
    class_record.time = time
    class_record.place = place
    commit(db)
    db.refresh(class_record)
    log.info(f"Class '{class_id}' updated")
    return class_record


def delete_class(db: Session, class_id: UUID) -> None:
    class_record = get_class(db, class_id)
    if class_record is None:
        raise NotFound(CLASS_NOT_FOUND_MESSAGE)
    db.delete(class_record)
    commit(db)
    log.info(f"Class '{class_id}' deleted")


def participant_ids(class_record: models.ClassRecord) -> list[UUID]:
    return [p.user_id for p in class_record.participants]


def add_participant(class_record: models.ClassRecord, user_id: UUID) -> None:
    """
    Add a user to the roster of a class. Does not commit, the caller owns the transaction.
    """
    if user_id in participant_ids(class_record):
        raise ValidationError("User is already a participant of this class")
    class_record.participants.append(models.ClassParticipant(user_id=user_id))


def remove_participant(class_record: models.ClassRecord, user_id: UUID) -> bool:
    for participant in class_record.participants:
        if participant.user_id == user_id:
            # delete-orphan cascade removes the row on flush
            class_record.participants.remove(participant)
            return True
    return False
