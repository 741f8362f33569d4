from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bbparty.core.db import Base, utcnow


class Group(Base):
    """An organizer-led group planning a shared event.

    member_count mirrors the number of group_members rows (organizer included).
    """

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    organizer_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)

    event_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    total_budget: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)

    member_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    organizer = relationship("User")
    members = relationship("GroupMember", back_populates="group")
