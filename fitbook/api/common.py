from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer
from sqlalchemy.orm import Session
from starlette import status

from fitbook import models
from fitbook.database import crud
from fitbook.database.database import SessionLocal
from fitbook.settings import Settings, get_settings


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Scheme for the Authorization header
token_auth_scheme = HTTPBearer()


def get_current_user(
    token=Depends(token_auth_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> models.User:
    db_user = crud.user_from_token(db, settings, token)
    if db_user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return db_user
