from __future__ import annotations

import logging

from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bbparty.core.db import is_unique_violation
from bbparty.core.errors import ConflictError, UnauthorizedError
from bbparty.models.user import User

log = logging.getLogger("bbparty.users")

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def normalize_email(value: str) -> str:
    return (value or "").strip().lower()


def create_user(
    db: Session,
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    phone: str | None = None,
    role: str = "user",
) -> User:
    email = normalize_email(email)
    if db.execute(select(User.id).where(User.email == email)).first() is not None:
        raise ConflictError("Email is already registered")

    user = User(
        email=email,
        password_hash=pwd_context.hash(password),
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        phone=phone,
        role=role,
        is_verified=False,
    )
    try:
        with db.begin_nested():
            db.add(user)
    except IntegrityError as exc:
        if not is_unique_violation(exc, "ix_users_email", "users.email"):
            raise
        raise ConflictError("Email is already registered")

    db.commit()
    db.refresh(user)
    log.info("user created id=%s role=%s", user.id, user.role)
    return user


def login_user(db: Session, *, email: str, password: str) -> User:
    user = db.execute(select(User).where(User.email == normalize_email(email))).scalar_one_or_none()
    if user is None or not pwd_context.verify(password, user.password_hash):
        raise UnauthorizedError("Invalid email or password")
    return user
