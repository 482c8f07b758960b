from typing import Optional

from sqlalchemy.orm import Session

from fitbook import models
from fitbook.auth.jwt import decode_jwt_claims
from fitbook.database.database import commit
from fitbook.utils.logging_utils import log


def user_from_token(db: Session, settings, token) -> Optional[models.User]:
    if settings.JWT_SECRET is None:
        log.warning("JWT_SECRET is not configured, rejecting all tokens")
        return None
    claims = decode_jwt_claims(
        token.credentials,
        settings.JWT_SECRET,
        settings.JWT_ALGORITHMS,
        settings.JWT_AUDIENCE,
        settings.JWT_ISSUER,
    )
    if claims is None:
        return None
    jwt_sub = str(claims["sub"])
    name = claims.get("name") or jwt_sub
    db_user = get_user_by_sub(db, jwt_sub)
    if db_user is None:
        # identities are issued elsewhere, mirror them on first sight
        return create_user(db, name, jwt_sub)
    if db_user.name != name:
        db_user.name = name
        commit(db)
        db.refresh(db_user)
    return db_user


def create_user(db: Session, name: str, jwt_sub: str) -> models.User:
    db_user = models.User(name=name, jwt_sub=jwt_sub)
    db.add(db_user)
    commit(db)
    db.refresh(db_user)
    log.debug(f"Created user '{db_user.name}'")
    return db_user


def get_user_by_sub(db: Session, jwt_sub: str) -> Optional[models.User]:
    return db.query(models.User).filter_by(jwt_sub=jwt_sub).one_or_none()


def get_users(db: Session) -> list[models.User]:
    return db.query(models.User).order_by(models.User.name).all()
