from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bbparty.core.db import Base, utcnow


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        UniqueConstraint("confirmation_code", name="uq_bookings_confirmation_code"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    venue_id: Mapped[int] = mapped_column(ForeignKey("venues.id"), index=True, nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)
    group_id: Mapped[int | None] = mapped_column(ForeignKey("groups.id"), index=True, nullable=True)

    booking_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    # free-form display values, e.g. "19:30"
    start_time: Mapped[str] = mapped_column(String(32), nullable=False)
    end_time: Mapped[str | None] = mapped_column(String(32), nullable=True)

    guest_count: Mapped[int] = mapped_column(Integer, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending", index=True)
    payment_status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    special_requests: Mapped[str | None] = mapped_column(Text, nullable=True)
    confirmation_code: Mapped[str] = mapped_column(String(16), nullable=False)

    # When we last queued a payment reminder. Prevents duplicates.
    reminder_sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    venue = relationship("Venue")
    user = relationship("User")
    group = relationship("Group")
