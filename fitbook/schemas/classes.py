import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from fitbook import models
from fitbook.schemas.camel import CamelModel


class ClassPayload(CamelModel):
    # all optional so that missing fields are reported as the usual 400
    category: Optional[str] = None
    exercise_type: Optional[str] = None
    date: Optional[datetime.date] = None
    time: Optional[datetime.time] = None
    place: Optional[str] = None


class ClassInstructor(CamelModel):
    id: UUID
    name: str


class ClassResponse(CamelModel):
    id: UUID
    instructor: Optional[ClassInstructor] = None
    instructor_name: Optional[str] = None
    category: str
    exercise_type: str
    date: datetime.date
    time: datetime.time
    place: str
    participants: list[UUID]
    created_at: datetime.datetime


def class_response_from_model(class_record: models.ClassRecord) -> ClassResponse:
    return ClassResponse(
        id=class_record.id,
        instructor=(
            ClassInstructor.model_validate(class_record.instructor)
            if class_record.instructor is not None
            else None
        ),
        instructor_name=class_record.resolved_instructor_name,
        category=class_record.category,
        exercise_type=class_record.exercise_type,
        date=class_record.date,
        time=class_record.time,
        place=class_record.place,
        participants=[p.user_id for p in class_record.participants],
        created_at=class_record.created_at,
    )


class ClassMutationResponse(CamelModel):
    success: bool = True
    message: str
    class_record: ClassResponse = Field(alias="class")


class ClassesResponse(CamelModel):
    success: bool = True
    classes: list[ClassResponse]
