import pytest

from bbparty.core.errors import ConflictError, UnauthorizedError
from bbparty.models import User
from bbparty.services import users as user_service


def _create(db, email="Party@Example.com", **kw):
    kw.setdefault("password", "hunter22")
    kw.setdefault("first_name", " Sam ")
    kw.setdefault("last_name", "Rivera")
    return user_service.create_user(db, email=email, **kw)


def test_create_user_normalizes_and_hashes(db):
    user = _create(db)

    assert user.email == "party@example.com"
    assert user.first_name == "Sam"
    assert user.role == "user"
    assert user.is_verified is False
    assert user.password_hash != "hunter22"
    assert user_service.pwd_context.verify("hunter22", user.password_hash)


def test_create_venue_owner(db):
    assert _create(db, role="venue_owner").role == "venue_owner"


def test_duplicate_email_conflicts(db):
    _create(db)
    with pytest.raises(ConflictError, match="already registered"):
        _create(db, email="  party@example.COM ")
    db.rollback()
    assert db.query(User).count() == 1


def test_login_accepts_correct_password(db):
    created = _create(db)
    user = user_service.login_user(db, email="PARTY@example.com", password="hunter22")
    assert user.id == created.id


@pytest.mark.parametrize("email,password", [
    ("party@example.com", "wrong-password"),
    ("nobody@example.com", "hunter22"),
])
def test_login_rejects_bad_credentials(db, email, password):
    _create(db)
    with pytest.raises(UnauthorizedError, match="Invalid email or password"):
        user_service.login_user(db, email=email, password=password)
