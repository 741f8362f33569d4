from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from bbparty.core.db import utcnow
from bbparty.models.booking import Booking
from bbparty.models.notification import Notification
from bbparty.models.venue import Venue

log = logging.getLogger("bbparty.notifications")


def notify(
    db: Session,
    *,
    user_id: int,
    type: str,
    title: str,
    message: str,
    data: dict[str, Any] | None = None,
) -> Notification:
    """Queue an in-app notification in the caller's transaction.

    The caller commits. Delivery (push, email) happens elsewhere.
    """
    notification = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        data=data,
        is_read=False,
    )
    db.add(notification)
    return notification


def list_user_notifications(db: Session, user_id: int) -> list[Notification]:
    """Unread first, newest first within each half."""
    stmt = (
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(
            Notification.is_read.asc(),
            Notification.created_at.desc(),
            Notification.id.desc(),
        )
    )
    return list(db.scalars(stmt).all())


def mark_read(db: Session, *, notification_id: int, user_id: int) -> bool:
    result = db.execute(
        update(Notification)
        .where(Notification.id == notification_id, Notification.user_id == user_id)
        .values(is_read=True)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return (result.rowcount or 0) > 0


def queue_payment_reminders(
    db: Session,
    *,
    today: date,
    days_ahead: int,
    dry_run: bool = False,
) -> int:
    """Write a payment_reminder for each unpaid booking coming up soon.

    A booking qualifies when payment is pending, it is still pending or
    confirmed, its date is within [today, today + days_ahead] and no reminder
    was queued for it yet.
    """
    horizon = today + timedelta(days=days_ahead)
    rows = db.execute(
        select(Booking, Venue)
        .join(Venue, Venue.id == Booking.venue_id)
        .where(
            Booking.payment_status == "pending",
            Booking.status.in_(("pending", "confirmed")),
            Booking.booking_date >= today,
            Booking.booking_date <= horizon,
            Booking.reminder_sent_at.is_(None),
        )
        .order_by(Booking.booking_date.asc(), Booking.id.asc())
    ).all()

    queued = 0
    for booking, venue in rows:
        if dry_run:
            log.info(
                "DRY_RUN payment reminder booking_id=%s user_id=%s date=%s",
                booking.id, booking.user_id, booking.booking_date,
            )
            continue

        notify(
            db,
            user_id=booking.user_id,
            type="payment_reminder",
            title="Payment due",
            message=(
                f"Your booking {booking.confirmation_code} at {venue.name} on "
                f"{booking.booking_date.isoformat()} is still awaiting payment."
            ),
            data={"booking_id": booking.id, "amount": float(booking.total_amount)},
        )
        booking.reminder_sent_at = utcnow()
        queued += 1

    if queued:
        db.commit()

    return queued
