from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field, model_validator
from sqlalchemy.orm import Session

from bbparty.core.db import get_db
from bbparty.models.enums import VenueCategory
from bbparty.services import reviews as review_service
from bbparty.services import venues as venue_service

router = APIRouter(prefix="/venues", tags=["venues"])


# ---------- Schemas ----------

class VenueCreateIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    category: VenueCategory
    address: str = Field(..., min_length=1, max_length=500)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    phone: str | None = Field(default=None, max_length=32)
    email: str | None = Field(default=None, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    website_url: str | None = Field(default=None, max_length=500)
    thumbnail_image_url: str | None = Field(default=None, max_length=500)
    price_range_min: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    price_range_max: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    owner_id: int = Field(..., gt=0)

    @model_validator(mode="after")
    def _check_price_range(self):
        if self.price_range_min > self.price_range_max:
            raise ValueError("price_range_min must not exceed price_range_max")
        return self


class VenueOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    category: VenueCategory
    address: str
    latitude: float | None
    longitude: float | None
    phone: str | None
    email: str | None
    website_url: str | None
    price_range_min: float
    price_range_max: float
    rating: float
    review_count: int
    is_active: bool
    thumbnail_image_url: str | None
    owner_id: int
    created_at: datetime
    updated_at: datetime


class ReviewCreateIn(BaseModel):
    user_id: int = Field(..., gt=0)
    rating: int = Field(..., ge=1, le=5)
    title: str | None = Field(default=None, max_length=200)
    content: str = Field(..., min_length=1)
    image_urls: List[str] = Field(default_factory=list)


class ReviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    venue_id: int
    user_id: int
    rating: int
    title: str | None
    content: str
    image_urls: List[str]
    is_verified: bool
    helpful_count: int
    created_at: datetime
    updated_at: datetime


# ---------- Routes ----------

@router.get("", response_model=List[VenueOut])
def search_venues(
    keyword: str | None = Query(default=None),
    category: VenueCategory | None = Query(default=None),
    min_price: float | None = Query(default=None, ge=0),
    max_price: float | None = Query(default=None, ge=0),
    latitude: float | None = Query(default=None, ge=-90, le=90),
    longitude: float | None = Query(default=None, ge=-180, le=180),
    radius_km: float | None = Query(default=None, gt=0),
    sort_by: Literal["rating", "price_low", "price_high", "distance"] | None = Query(default=None),
    db: Session = Depends(get_db),
):
    return venue_service.search_venues(
        db,
        keyword=keyword or None,
        category=category.value if category else None,
        min_price=min_price,
        max_price=max_price,
        latitude=latitude,
        longitude=longitude,
        radius_km=radius_km,
        sort_by=sort_by,
    )


@router.post("", response_model=VenueOut, status_code=status.HTTP_201_CREATED)
def create_venue(payload: VenueCreateIn, db: Session = Depends(get_db)):
    data = payload.model_dump()
    data["category"] = payload.category.value
    return venue_service.create_venue(db, **data)


@router.get("/{venue_id}", response_model=Optional[VenueOut])
def get_venue(venue_id: int, db: Session = Depends(get_db)):
    return venue_service.get_venue(db, venue_id)


@router.get("/{venue_id}/reviews", response_model=List[ReviewOut])
def list_venue_reviews(venue_id: int, db: Session = Depends(get_db)):
    return review_service.list_venue_reviews(db, venue_id)


@router.post("/{venue_id}/reviews", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
def create_review(venue_id: int, payload: ReviewCreateIn, db: Session = Depends(get_db)):
    return review_service.create_review(
        db,
        user_id=payload.user_id,
        venue_id=venue_id,
        rating=payload.rating,
        title=payload.title,
        content=payload.content,
        image_urls=payload.image_urls,
    )
