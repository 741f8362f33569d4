from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bbparty.core.db import is_unique_violation, utcnow
from bbparty.core.errors import ConflictError, NotFoundError
from bbparty.models.group import Group
from bbparty.models.group_member import GroupMember
from bbparty.models.user import User

log = logging.getLogger("bbparty.groups")


def create_group(
    db: Session,
    *,
    organizer_id: int,
    name: str,
    description: str | None = None,
    event_date: datetime | None = None,
    total_budget: Decimal | None = None,
) -> Group:
    """Create a group with its organizer enrolled, in one transaction."""
    group = Group(
        name=name,
        description=description,
        organizer_id=organizer_id,
        event_date=event_date,
        total_budget=total_budget,
        member_count=1,
        is_active=True,
    )
    db.add(group)
    db.flush()  # so group.id is assigned

    db.add(GroupMember(group_id=group.id, user_id=organizer_id, role="organizer"))
    db.commit()
    db.refresh(group)

    log.info("group created id=%s organizer_id=%s", group.id, organizer_id)
    return group


def get_member(db: Session, *, group_id: int, user_id: int) -> GroupMember | None:
    return db.execute(
        select(GroupMember).where(
            GroupMember.group_id == group_id,
            GroupMember.user_id == user_id,
        )
    ).scalar_one_or_none()


def add_member(db: Session, *, group_id: int, user_id: int) -> GroupMember:
    group = db.get(Group, group_id)
    if group is None:
        raise NotFoundError("Group not found")

    if db.get(User, user_id) is None:
        raise NotFoundError("User not found")

    # fast path; uq_group_member is the real guard against racing inserts
    if get_member(db, group_id=group_id, user_id=user_id) is not None:
        raise ConflictError("User is already a member of this group")

    member = GroupMember(group_id=group_id, user_id=user_id, role="member")
    try:
        with db.begin_nested():
            db.add(member)
    except IntegrityError as exc:
        if not is_unique_violation(exc, "uq_group_member", "group_members.group_id", "group_members.user_id"):
            raise
        raise ConflictError("User is already a member of this group")

    db.execute(
        update(Group)
        .where(Group.id == group_id)
        .values(member_count=Group.member_count + 1, updated_at=utcnow())
    )
    db.commit()
    db.refresh(member)

    log.info("group member added group_id=%s user_id=%s", group_id, user_id)
    return member


def list_user_groups(db: Session, user_id: int) -> list[Group]:
    """Groups the user organizes or belongs to, each once."""
    member_group_ids = select(GroupMember.group_id).where(GroupMember.user_id == user_id)
    stmt = (
        select(Group)
        .where(or_(Group.organizer_id == user_id, Group.id.in_(member_group_ids)))
        .order_by(Group.id.asc())
    )
    return list(db.scalars(stmt).all())
