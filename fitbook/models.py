import datetime
import enum
import uuid
from typing import Optional

from sqlalchemy import Enum, ForeignKey, Index, Uuid, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from fitbook.utils.time_utils import local_now


class BookingStatus(enum.Enum):
    BOOKED = "booked"
    CANCELLED = "cancelled"


class NotificationType(enum.Enum):
    CLASS_START = "class_start"
    BOOKING = "booking"
    INSTRUCTOR_BOOKING = "instructor_booking"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class Base(DeclarativeBase):
    type_annotation_map = {
        uuid.UUID: Uuid(as_uuid=True),
        BookingStatus: Enum(BookingStatus, values_callable=_enum_values),
        NotificationType: Enum(NotificationType, values_callable=_enum_values),
    }


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, index=True, default=uuid.uuid4
    )
    jwt_sub: Mapped[str] = mapped_column(unique=True)
    name: Mapped[str] = mapped_column()

    def __repr__(self):
        return f"<User (id='{self.id}' name='{self.name}' jwt_sub='{self.jwt_sub}')>"


class ClassRecord(Base):
    __tablename__ = "classes"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, index=True, default=uuid.uuid4
    )
    instructor_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("users.id", ondelete="set null")
    )
    instructor_name: Mapped[Optional[str]] = mapped_column()
    category: Mapped[str] = mapped_column()
    exercise_type: Mapped[str] = mapped_column()
    date: Mapped[datetime.date] = mapped_column()
    time: Mapped[datetime.time] = mapped_column()
    place: Mapped[str] = mapped_column()
    created_at: Mapped[datetime.datetime] = mapped_column(default=local_now)

    instructor: Mapped[Optional[User]] = relationship()
    participants: Mapped[list["ClassParticipant"]] = relationship(
        back_populates="class_record",
        cascade="all, delete-orphan",
        order_by="ClassParticipant.joined_at",
    )

    @property
    def resolved_instructor_name(self) -> Optional[str]:
        if self.instructor is not None:
            return self.instructor.name
        return self.instructor_name

    def __repr__(self):
        return (
            f"<ClassRecord (id='{self.id}' exercise_type='{self.exercise_type}' date='{self.date}' "
            f"time='{self.time}' place='{self.place}' instructor_id='{self.instructor_id}')>"
        )


class ClassParticipant(Base):
    __tablename__ = "class_participants"

    # composite key keeps a user from appearing twice in the same roster
    class_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("classes.id", ondelete="cascade"), primary_key=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="cascade"), primary_key=True
    )
    joined_at: Mapped[datetime.datetime] = mapped_column(default=local_now)

    class_record: Mapped[ClassRecord] = relationship(back_populates="participants")

    def __repr__(self):
        return (
            f"<ClassParticipant (class_id='{self.class_id}' user_id='{self.user_id}' "
            f"joined_at='{self.joined_at.isoformat() if self.joined_at is not None else None}')>"
        )


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, index=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="cascade"), index=True
    )
    # no foreign key, bookings are kept after their class is deleted
    class_id: Mapped[uuid.UUID] = mapped_column(index=True)
    class_name: Mapped[str] = mapped_column()
    instructor: Mapped[str] = mapped_column()
    exercise_type: Mapped[str] = mapped_column()
    date: Mapped[datetime.date] = mapped_column()
    time: Mapped[datetime.time] = mapped_column()
    place: Mapped[str] = mapped_column()
    status: Mapped[BookingStatus] = mapped_column(default=BookingStatus.BOOKED)
    created_at: Mapped[datetime.datetime] = mapped_column(default=local_now)

    __table_args__ = (
        Index(
            "unique_active_booking",
            "user_id",
            "class_id",
            unique=True,
            sqlite_where=text("status = 'booked'"),
            postgresql_where=text("status = 'booked'"),
        ),
    )

    def __repr__(self):
        return (
            f"<Booking (id='{self.id}' user_id='{self.user_id}' class_id='{self.class_id}' "
            f"class_name='{self.class_name}' status='{self.status}')>"
        )


class Notification(Base):
    __tablename__ = "notifications"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, index=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="cascade"), index=True
    )
    title: Mapped[str] = mapped_column()
    message: Mapped[str] = mapped_column()
    type: Mapped[NotificationType] = mapped_column()
    class_id: Mapped[Optional[uuid.UUID]] = mapped_column()
    read: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime.datetime] = mapped_column(default=local_now, index=True)

    def __repr__(self):
        return (
            f"<Notification (id='{self.id}' user_id='{self.user_id}' type='{self.type}' "
            f"class_id='{self.class_id}' read='{self.read}')>"
        )
