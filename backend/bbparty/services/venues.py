from __future__ import annotations

import logging
import math
from decimal import Decimal

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session

from bbparty.core.errors import ForbiddenError, NotFoundError
from bbparty.models.user import User
from bbparty.models.venue import Venue

log = logging.getLogger("bbparty.venues")

KM_PER_DEGREE_LAT = 111

SORT_ORDERS = {
    "rating": (Venue.rating.desc(),),
    "price_low": (Venue.price_range_min.asc(),),
    "price_high": (Venue.price_range_max.desc(),),
    # placeholder until real distance ordering exists
    "distance": (),
}

VENUE_CREATOR_ROLES = ("venue_owner", "admin")


def create_venue(
    db: Session,
    *,
    owner_id: int,
    name: str,
    description: str,
    category: str,
    address: str,
    price_range_min: Decimal,
    price_range_max: Decimal,
    latitude: float | None = None,
    longitude: float | None = None,
    phone: str | None = None,
    email: str | None = None,
    website_url: str | None = None,
    thumbnail_image_url: str | None = None,
) -> Venue:
    owner = db.get(User, owner_id)
    if owner is None:
        raise NotFoundError("Owner not found")
    if owner.role not in VENUE_CREATOR_ROLES:
        raise ForbiddenError("User does not have permission to create venues")

    venue = Venue(
        owner_id=owner_id,
        name=name,
        description=description,
        category=category,
        address=address,
        latitude=latitude,
        longitude=longitude,
        phone=phone,
        email=email,
        website_url=website_url,
        thumbnail_image_url=thumbnail_image_url,
        price_range_min=price_range_min,
        price_range_max=price_range_max,
        rating=0.0,
        review_count=0,
        is_active=True,
    )
    db.add(venue)
    db.commit()
    db.refresh(venue)
    log.info("venue created id=%s owner_id=%s", venue.id, owner_id)
    return venue


def get_venue(db: Session, venue_id: int) -> Venue | None:
    return db.get(Venue, venue_id)


def bounding_box(latitude: float, longitude: float, radius_km: float) -> tuple[float, float, float, float]:
    """Approximate (min_lat, max_lat, min_lon, max_lon) around a point."""
    lat_span = radius_km / KM_PER_DEGREE_LAT
    lon_span = radius_km / (KM_PER_DEGREE_LAT * math.cos(math.radians(latitude)))
    return (
        latitude - lat_span,
        latitude + lat_span,
        longitude - lon_span,
        longitude + lon_span,
    )


def search_venues(
    db: Session,
    *,
    keyword: str | None = None,
    category: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    latitude: float | None = None,
    longitude: float | None = None,
    radius_km: float | None = None,
    sort_by: str | None = None,
) -> list[Venue]:
    """Active venues matching every supplied filter.

    Price bounds use overlap semantics: min_price keeps venues whose
    price_range_max reaches it, max_price keeps venues whose price_range_min
    does not exceed it.
    """
    stmt = select(Venue).where(Venue.is_active.is_(True))

    if keyword:
        stmt = stmt.where(
            or_(
                Venue.name.icontains(keyword, autoescape=True),
                Venue.description.icontains(keyword, autoescape=True),
            )
        )

    if category:
        stmt = stmt.where(Venue.category == category)

    if min_price is not None:
        stmt = stmt.where(Venue.price_range_max >= min_price)

    if max_price is not None:
        stmt = stmt.where(Venue.price_range_min <= max_price)

    if latitude is not None and longitude is not None and radius_km is not None:
        min_lat, max_lat, min_lon, max_lon = bounding_box(latitude, longitude, radius_km)
        # NULL coordinates never satisfy BETWEEN, so they drop out here
        stmt = stmt.where(
            and_(
                Venue.latitude.between(min_lat, max_lat),
                Venue.longitude.between(min_lon, max_lon),
            )
        )

    order = SORT_ORDERS.get(sort_by or "rating", SORT_ORDERS["rating"])
    stmt = stmt.order_by(*order, Venue.id.asc())

    return list(db.scalars(stmt).all())
