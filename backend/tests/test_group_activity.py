from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from bbparty.core.errors import ForbiddenError, NotFoundError
from bbparty.models import GroupMessage
from bbparty.services import group_activity


def test_members_can_post_messages(db, factory):
    organizer = factory.user()
    group = factory.group(organizer)

    msg = group_activity.create_message(db, group_id=group.id, user_id=organizer.id, message="Who's in?")

    assert msg.id is not None
    assert msg.group_id == group.id
    assert msg.message == "Who's in?"


def test_non_member_cannot_post(db, factory):
    group = factory.group(factory.user())
    outsider = factory.user()

    with pytest.raises(ForbiddenError):
        group_activity.create_message(db, group_id=group.id, user_id=outsider.id, message="hi")
    assert db.query(GroupMessage).count() == 0


def test_message_to_missing_group(db, factory):
    with pytest.raises(NotFoundError):
        group_activity.create_message(db, group_id=42, user_id=factory.user().id, message="hi")


def test_messages_listed_oldest_first(db, factory):
    organizer = factory.user()
    group = factory.group(organizer)
    base = datetime(2026, 3, 1, 12, 0)
    later = GroupMessage(group_id=group.id, user_id=organizer.id, message="second", created_at=base + timedelta(minutes=5))
    earlier = GroupMessage(group_id=group.id, user_id=organizer.id, message="first", created_at=base)
    db.add_all([later, earlier])
    db.commit()

    assert [m.message for m in group_activity.list_messages(db, group.id)] == ["first", "second"]


def test_expenses_recorded_and_listed(db, factory):
    organizer = factory.user()
    group = factory.group(organizer)
    other_group = factory.group(factory.user())

    taxi = group_activity.create_expense(
        db, group_id=group.id, payer_id=organizer.id, description="Taxi", amount=Decimal("42.10"), category="transport"
    )
    group_activity.create_expense(
        db, group_id=group.id, payer_id=organizer.id, description="Drinks", amount=Decimal("88.00"), category="food"
    )
    group_activity.create_expense(
        db, group_id=other_group.id, payer_id=organizer.id, description="Other", amount=Decimal("1.00"), category="misc"
    )

    assert taxi.amount == Decimal("42.10")
    assert taxi.receipt_url is None
    assert [e.description for e in group_activity.list_expenses(db, group.id)] == ["Taxi", "Drinks"]


def test_expense_for_missing_group(db, factory):
    with pytest.raises(NotFoundError, match="Group with id 5 not found"):
        group_activity.create_expense(
            db, group_id=5, payer_id=factory.user().id, description="x", amount=Decimal("1.00"), category="misc"
        )
