from __future__ import annotations

from datetime import datetime
from typing import Any, List, Literal

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from bbparty.core.db import get_db
from bbparty.models.enums import NotificationType, UserRole
from bbparty.routers.bookings import BookingOut
from bbparty.routers.groups import GroupOut
from bbparty.routers.venues import VenueOut
from bbparty.services import bookings as booking_service
from bbparty.services import favorites as favorite_service
from bbparty.services import groups as group_service
from bbparty.services import notifications as notification_service
from bbparty.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])


# ---------- Schemas ----------

class UserCreateIn(BaseModel):
    email: str = Field(..., max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=32)
    # admins are never self-registered
    role: Literal["user", "venue_owner"] = "user"


class LoginIn(BaseModel):
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=1)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    phone: str | None
    profile_image_url: str | None
    role: UserRole
    is_verified: bool
    created_at: datetime
    updated_at: datetime


class FavoriteIn(BaseModel):
    venue_id: int = Field(..., gt=0)


class FavoriteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    venue_id: int
    created_at: datetime


class NotificationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    type: NotificationType
    title: str
    message: str
    data: dict[str, Any] | None
    is_read: bool
    created_at: datetime


# ---------- Routes ----------

@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreateIn, db: Session = Depends(get_db)):
    return user_service.create_user(db, **payload.model_dump())


@router.post("/login", response_model=UserOut)
def login_user(payload: LoginIn, db: Session = Depends(get_db)):
    return user_service.login_user(db, email=payload.email, password=payload.password)


@router.get("/{user_id}/bookings", response_model=List[BookingOut])
def user_bookings(user_id: int, db: Session = Depends(get_db)):
    return booking_service.list_user_bookings(db, user_id)


@router.get("/{user_id}/groups", response_model=List[GroupOut])
def user_groups(user_id: int, db: Session = Depends(get_db)):
    return group_service.list_user_groups(db, user_id)


@router.get("/{user_id}/favorites", response_model=List[VenueOut])
def user_favorites(user_id: int, db: Session = Depends(get_db)):
    return favorite_service.list_favorite_venues(db, user_id)


@router.post("/{user_id}/favorites", response_model=FavoriteOut, status_code=status.HTTP_201_CREATED)
def add_favorite(user_id: int, payload: FavoriteIn, db: Session = Depends(get_db)):
    return favorite_service.add_favorite(db, user_id=user_id, venue_id=payload.venue_id)


@router.delete("/{user_id}/favorites/{venue_id}", response_model=bool)
def remove_favorite(user_id: int, venue_id: int, db: Session = Depends(get_db)):
    return favorite_service.remove_favorite(db, user_id=user_id, venue_id=venue_id)


@router.get("/{user_id}/notifications", response_model=List[NotificationOut])
def user_notifications(user_id: int, db: Session = Depends(get_db)):
    return notification_service.list_user_notifications(db, user_id)


@router.post("/{user_id}/notifications/{notification_id}/read", response_model=bool)
def mark_notification_read(user_id: int, notification_id: int, db: Session = Depends(get_db)):
    return notification_service.mark_read(db, notification_id=notification_id, user_id=user_id)
