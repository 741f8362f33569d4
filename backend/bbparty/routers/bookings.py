from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from bbparty.core.db import get_db
from bbparty.models.enums import BookingStatus, PaymentStatus
from bbparty.services import bookings as booking_service

router = APIRouter(prefix="/bookings", tags=["bookings"])


# ---------- Schemas ----------

class BookingCreateIn(BaseModel):
    user_id: int = Field(..., gt=0)
    venue_id: int = Field(..., gt=0)
    group_id: int | None = Field(default=None, gt=0)
    booking_date: date
    # opaque display values, no format enforced
    start_time: str = Field(..., min_length=1, max_length=32)
    end_time: str | None = Field(default=None, max_length=32)
    guest_count: int = Field(..., gt=0)
    special_requests: str | None = None


class BookingCancelIn(BaseModel):
    user_id: int = Field(..., gt=0)


class BookingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    venue_id: int
    user_id: int
    group_id: int | None
    booking_date: date
    start_time: str
    end_time: str | None
    guest_count: int
    total_amount: float
    status: BookingStatus
    payment_status: PaymentStatus
    special_requests: str | None
    confirmation_code: str
    created_at: datetime
    updated_at: datetime


# ---------- Routes ----------

@router.post("", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
def create_booking(payload: BookingCreateIn, db: Session = Depends(get_db)):
    return booking_service.create_booking(db, **payload.model_dump())


@router.post("/{booking_id}/cancel", response_model=Optional[BookingOut])
def cancel_booking(booking_id: int, payload: BookingCancelIn, db: Session = Depends(get_db)):
    return booking_service.cancel_booking(db, booking_id=booking_id, user_id=payload.user_id)
