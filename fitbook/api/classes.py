from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from starlette import status

from fitbook import classes, models
from fitbook.api.common import get_current_user, get_db
from fitbook.schemas.classes import (
    ClassesResponse,
    ClassMutationResponse,
    ClassPayload,
    class_response_from_model,
)
from fitbook.schemas.common import MessageResponse

router = APIRouter()


@router.post(
    "",
    response_model=ClassMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_class_api(
    payload: ClassPayload,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    class_record = classes.create_class(
        db,
        instructor_id=user.id,
        instructor_name=user.name,
        category=payload.category,
        exercise_type=payload.exercise_type,
        date=payload.date,
        time=payload.time,
        place=payload.place,
    )
    return ClassMutationResponse(
        message="Class created successfully",
        class_record=class_response_from_model(class_record),
    )


@router.get("", response_model=ClassesResponse)
def list_classes_api(db: Session = Depends(get_db)):
    return ClassesResponse(
        classes=[class_response_from_model(c) for c in classes.list_classes(db)]
    )


@router.put("/{class_id}", response_model=ClassMutationResponse)
def update_class_api(
    class_id: UUID,
    payload: ClassPayload,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    class_record = classes.update_class(
        db,
        class_id,
        category=payload.category,
        exercise_type=payload.exercise_type,
        date=payload.date,
        time=payload.time,
        place=payload.place,
    )
    return ClassMutationResponse(
        message="Class updated successfully",
        class_record=class_response_from_model(class_record),
    )


@router.delete("/{class_id}", response_model=MessageResponse)
def delete_class_api(
    class_id: UUID,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    classes.delete_class(db, class_id)
    return MessageResponse(message="Class deleted successfully")
