from .enums import (
    BookingStatus,
    GroupRole,
    NotificationType,
    PaymentStatus,
    UserRole,
    VenueCategory,
)
from .user import User
from .venue import Venue
from .review import Review
from .group import Group
from .group_member import GroupMember
from .booking import Booking
from .favorite import Favorite
from .notification import Notification
from .group_message import GroupMessage
from .expense import Expense

__all__ = [
    "BookingStatus",
    "GroupRole",
    "NotificationType",
    "PaymentStatus",
    "UserRole",
    "VenueCategory",
    "User",
    "Venue",
    "Review",
    "Group",
    "GroupMember",
    "Booking",
    "Favorite",
    "Notification",
    "GroupMessage",
    "Expense",
]
