import os

os.environ.setdefault("JWT_SECRET", "fitbook-test-secret-0123456789abcdef")
os.environ.setdefault("REMINDERS_ENABLED", "false")

import datetime  # noqa: E402

import jwt  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from fitbook import classes  # noqa: E402
from fitbook.api.api import api  # noqa: E402
from fitbook.api.common import get_db  # noqa: E402
from fitbook.database import crud  # noqa: E402
from fitbook.database.database import init_db  # noqa: E402
from fitbook.settings import get_settings  # noqa: E402


@pytest.fixture(name="db_engine")
def db_engine_fixture():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # keep single connection for in-memory DB
    )
    init_db(engine)
    return engine


@pytest.fixture(name="db_sessionmaker")
def db_sessionmaker_fixture(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(name="db")
def db_fixture(db_sessionmaker):
    with db_sessionmaker() as session:
        yield session
        session.rollback()


@pytest.fixture(name="client")
def client_fixture(db_sessionmaker):
    def override_get_db():
        db = db_sessionmaker()
        try:
            yield db
        finally:
            db.close()

    api.dependency_overrides[get_db] = override_get_db
    yield TestClient(api)
    api.dependency_overrides.clear()


@pytest.fixture(name="auth_headers")
def auth_headers_fixture():
    def build_headers(sub: str, name: str) -> dict[str, str]:
        token = jwt.encode(
            {"sub": sub, "name": name}, get_settings().JWT_SECRET, algorithm="HS256"
        )
        return {"Authorization": f"Bearer {token}"}

    return build_headers


@pytest.fixture(name="member")
def member_fixture(db):
    return crud.create_user(db, "Ola Nordmann", "member-sub")


@pytest.fixture(name="instructor")
def instructor_fixture(db):
    return crud.create_user(db, "Kari Instruktør", "instructor-sub")


@pytest.fixture(name="yoga_class")
def yoga_class_fixture(db, instructor):
    return classes.create_class(
        db,
        instructor_id=instructor.id,
        instructor_name=instructor.name,
        category="Mind & Body",
        exercise_type="Yoga",
        date=datetime.date(2030, 1, 15),
        time=datetime.time(10, 0),
        place="Studio 1",
    )
