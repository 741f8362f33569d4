from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bbparty.core.config import settings
from bbparty.core.db import is_unique_violation, utcnow
from bbparty.core.errors import ConflictError, NotFoundError
from bbparty.models.booking import Booking
from bbparty.models.group import Group
from bbparty.models.venue import Venue
from bbparty.services.notifications import notify
from bbparty.services.pricing import calculate_total_amount, generate_confirmation_code

log = logging.getLogger("bbparty.bookings")


def _insert_with_unique_code(db: Session, booking: Booking, *, max_attempts: int) -> None:
    for attempt in range(1, max_attempts + 1):
        booking.confirmation_code = generate_confirmation_code()
        try:
            with db.begin_nested():
                db.add(booking)
            return
        except IntegrityError as exc:
            if not is_unique_violation(exc, "uq_bookings_confirmation_code", "bookings.confirmation_code"):
                raise
            log.warning(
                "confirmation code collision code=%s attempt=%s/%s",
                booking.confirmation_code, attempt, max_attempts,
            )
    raise ConflictError("Could not allocate a unique confirmation code")


def create_booking(
    db: Session,
    *,
    user_id: int,
    venue_id: int,
    booking_date: date,
    start_time: str,
    guest_count: int,
    group_id: int | None = None,
    end_time: str | None = None,
    special_requests: str | None = None,
) -> Booking:
    venue = db.get(Venue, venue_id)
    if venue is None:
        raise NotFoundError("Venue not found")

    if group_id is not None and db.get(Group, group_id) is None:
        raise NotFoundError("Group not found")

    booking = Booking(
        venue_id=venue_id,
        user_id=user_id,
        group_id=group_id,
        booking_date=booking_date,
        start_time=start_time,
        end_time=end_time,
        guest_count=guest_count,
        total_amount=calculate_total_amount(venue.price_range_min, guest_count),
        special_requests=special_requests,
        status="pending",
        payment_status="pending",
    )
    _insert_with_unique_code(db, booking, max_attempts=settings.CONFIRMATION_CODE_MAX_ATTEMPTS)

    notify(
        db,
        user_id=user_id,
        type="booking_update",
        title="Booking received",
        message=f"Your booking at {venue.name} on {booking_date.isoformat()} is pending confirmation.",
        data={"booking_id": booking.id, "confirmation_code": booking.confirmation_code},
    )
    db.commit()
    db.refresh(booking)

    log.info(
        "booking created id=%s code=%s venue_id=%s user_id=%s total=%s",
        booking.id, booking.confirmation_code, venue_id, user_id, booking.total_amount,
    )
    return booking


def cancel_booking(db: Session, *, booking_id: int, user_id: int) -> Booking | None:
    """Cancel the user's booking.

    Any status can be cancelled. Returns None when no booking with this id
    belongs to the user, without telling apart a missing booking from
    someone else's. Cancelling again bumps updated_at but sends no second
    notification.
    """
    booking = db.execute(
        select(Booking)
        .where(Booking.id == booking_id, Booking.user_id == user_id)
        .with_for_update()
    ).scalar_one_or_none()
    if booking is None:
        return None

    already_cancelled = booking.status == "cancelled"
    booking.status = "cancelled"
    booking.payment_status = "refunded"
    booking.updated_at = utcnow()

    if not already_cancelled:
        notify(
            db,
            user_id=user_id,
            type="booking_update",
            title="Booking cancelled",
            message=f"Booking {booking.confirmation_code} was cancelled and refunded.",
            data={"booking_id": booking.id, "confirmation_code": booking.confirmation_code},
        )
    db.commit()
    db.refresh(booking)

    log.info("booking cancelled id=%s user_id=%s", booking_id, user_id)
    return booking


def list_user_bookings(db: Session, user_id: int) -> list[Booking]:
    return list(db.scalars(select(Booking).where(Booking.user_id == user_id).order_by(Booking.id.asc())).all())
