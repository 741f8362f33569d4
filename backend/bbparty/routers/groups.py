from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from bbparty.core.db import get_db
from bbparty.models.enums import GroupRole
from bbparty.services import group_activity
from bbparty.services import groups as group_service

router = APIRouter(prefix="/groups", tags=["groups"])


# ---------- Schemas ----------

class GroupCreateIn(BaseModel):
    organizer_id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    event_date: datetime | None = None
    total_budget: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)


class GroupOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    organizer_id: int
    event_date: datetime | None
    total_budget: float | None
    member_count: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class MemberAddIn(BaseModel):
    user_id: int = Field(..., gt=0)


class GroupMemberOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    group_id: int
    user_id: int
    role: GroupRole
    joined_at: datetime


class MessageCreateIn(BaseModel):
    user_id: int = Field(..., gt=0)
    message: str = Field(..., min_length=1, max_length=4000)


class GroupMessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    group_id: int
    user_id: int
    message: str
    created_at: datetime


class ExpenseCreateIn(BaseModel):
    payer_id: int = Field(..., gt=0)
    description: str = Field(..., min_length=1, max_length=500)
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    category: str = Field(..., min_length=1, max_length=64)
    receipt_url: str | None = Field(default=None, max_length=500)


class ExpenseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    group_id: int
    payer_id: int
    description: str
    amount: float
    category: str
    receipt_url: str | None
    created_at: datetime


# ---------- Routes ----------

@router.post("", response_model=GroupOut, status_code=status.HTTP_201_CREATED)
def create_group(payload: GroupCreateIn, db: Session = Depends(get_db)):
    return group_service.create_group(db, **payload.model_dump())


@router.post("/{group_id}/members", response_model=GroupMemberOut, status_code=status.HTTP_201_CREATED)
def add_group_member(group_id: int, payload: MemberAddIn, db: Session = Depends(get_db)):
    return group_service.add_member(db, group_id=group_id, user_id=payload.user_id)


@router.get("/{group_id}/messages", response_model=List[GroupMessageOut])
def list_group_messages(group_id: int, db: Session = Depends(get_db)):
    return group_activity.list_messages(db, group_id)


@router.post("/{group_id}/messages", response_model=GroupMessageOut, status_code=status.HTTP_201_CREATED)
def create_group_message(group_id: int, payload: MessageCreateIn, db: Session = Depends(get_db)):
    return group_activity.create_message(
        db,
        group_id=group_id,
        user_id=payload.user_id,
        message=payload.message,
    )


@router.get("/{group_id}/expenses", response_model=List[ExpenseOut])
def list_group_expenses(group_id: int, db: Session = Depends(get_db)):
    return group_activity.list_expenses(db, group_id)


@router.post("/{group_id}/expenses", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
def create_group_expense(group_id: int, payload: ExpenseCreateIn, db: Session = Depends(get_db)):
    return group_activity.create_expense(db, group_id=group_id, **payload.model_dump())
