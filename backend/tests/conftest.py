import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, timedelta  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from bbparty.core.db import Base, get_db  # noqa: E402
from bbparty.main import app  # noqa: E402
from bbparty.models import Booking, Group, GroupMember, Notification, Review, User, Venue  # noqa: E402
from bbparty.services.users import pwd_context  # noqa: E402


@pytest.fixture
def engine():
    # one shared in-memory database per test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def foreign_keys(engine):
    # SQLite leaves FK enforcement off unless asked
    with engine.connect() as conn:
        conn.exec_driver_sql("PRAGMA foreign_keys=ON")


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


class Factory:
    """Persists ready-made rows through the test session."""

    def __init__(self, db):
        self.db = db
        self._seq = 0

    def _next(self) -> int:
        self._seq += 1
        return self._seq

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def user(self, **kw) -> User:
        n = self._next()
        password = kw.pop("password", "secret123")
        defaults = dict(
            email=f"user{n}@example.com",
            password_hash=pwd_context.hash(password),
            first_name="Test",
            last_name=f"User{n}",
            role="user",
        )
        defaults.update(kw)
        return self._save(User(**defaults))

    def owner(self, **kw) -> User:
        kw.setdefault("role", "venue_owner")
        return self.user(**kw)

    def venue(self, owner: User | None = None, **kw) -> Venue:
        if owner is None:
            owner = self.owner()
        n = self._next()
        defaults = dict(
            name=f"Venue {n}",
            description="A place to party",
            category="nightlife",
            address=f"{n} Main Street",
            price_range_min=Decimal("25.00"),
            price_range_max=Decimal("80.00"),
            rating=0.0,
            review_count=0,
            is_active=True,
            owner_id=owner.id,
        )
        defaults.update(kw)
        return self._save(Venue(**defaults))

    def group(self, organizer: User, **kw) -> Group:
        defaults = dict(name="Stag weekend", organizer_id=organizer.id, member_count=1)
        defaults.update(kw)
        group = self._save(Group(**defaults))
        self._save(GroupMember(group_id=group.id, user_id=organizer.id, role="organizer"))
        return group

    def review(self, venue: Venue, user: User, **kw) -> Review:
        defaults = dict(venue_id=venue.id, user_id=user.id, rating=4, content="Great", image_urls=[])
        defaults.update(kw)
        return self._save(Review(**defaults))

    def booking(self, venue: Venue, user: User, **kw) -> Booking:
        n = self._next()
        defaults = dict(
            venue_id=venue.id,
            user_id=user.id,
            booking_date=date.today() + timedelta(days=7),
            start_time="20:00",
            guest_count=2,
            total_amount=Decimal("50.00"),
            status="pending",
            payment_status="pending",
            confirmation_code=f"BBT{n:05d}",
        )
        defaults.update(kw)
        return self._save(Booking(**defaults))

    def notification(self, user: User, **kw) -> Notification:
        defaults = dict(
            user_id=user.id,
            type="booking_update",
            title="Update",
            message="Something happened",
            is_read=False,
        )
        defaults.update(kw)
        return self._save(Notification(**defaults))


@pytest.fixture
def factory(db):
    return Factory(db)
