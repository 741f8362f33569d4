# backend/bbparty/core/db.py
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from bbparty.core.config import settings


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


engine = create_engine(settings.database_url, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def is_unique_violation(exc: IntegrityError, constraint: str, *columns: str) -> bool:
    """True when exc was raised by the given unique constraint.

    Postgres reports the constraint name. SQLite only names the columns,
    as "UNIQUE constraint failed: table.col, ...".
    """
    diag = getattr(exc.orig, "diag", None)
    name = getattr(diag, "constraint_name", None)
    if name:
        return name == constraint
    msg = str(exc.orig)
    return msg.startswith("UNIQUE constraint failed") and all(c in msg for c in columns)


def get_db():
    """FastAPI dependency: yields sync SQLAlchemy Session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Ensure model modules are imported so SQLAlchemy can resolve relationships
import bbparty.models  # noqa: F401,E402
