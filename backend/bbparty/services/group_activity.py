"""Group chat messages and shared expenses."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from bbparty.core.errors import ForbiddenError, NotFoundError
from bbparty.models.expense import Expense
from bbparty.models.group import Group
from bbparty.models.group_message import GroupMessage
from bbparty.services.groups import get_member


def create_message(db: Session, *, group_id: int, user_id: int, message: str) -> GroupMessage:
    if db.get(Group, group_id) is None:
        raise NotFoundError("Group not found")
    if get_member(db, group_id=group_id, user_id=user_id) is None:
        raise ForbiddenError("User is not a member of this group")

    msg = GroupMessage(group_id=group_id, user_id=user_id, message=message)
    db.add(msg)
    db.commit()
    db.refresh(msg)
    return msg


def list_messages(db: Session, group_id: int) -> list[GroupMessage]:
    stmt = (
        select(GroupMessage)
        .where(GroupMessage.group_id == group_id)
        .order_by(GroupMessage.created_at.asc(), GroupMessage.id.asc())
    )
    return list(db.scalars(stmt).all())


def create_expense(
    db: Session,
    *,
    group_id: int,
    payer_id: int,
    description: str,
    amount: Decimal,
    category: str,
    receipt_url: str | None = None,
) -> Expense:
    if db.get(Group, group_id) is None:
        raise NotFoundError(f"Group with id {group_id} not found")

    expense = Expense(
        group_id=group_id,
        payer_id=payer_id,
        description=description,
        amount=amount,
        category=category,
        receipt_url=receipt_url,
    )
    db.add(expense)
    db.commit()
    db.refresh(expense)
    return expense


def list_expenses(db: Session, group_id: int) -> list[Expense]:
    return list(db.scalars(select(Expense).where(Expense.group_id == group_id).order_by(Expense.id.asc())).all())
