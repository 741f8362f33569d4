import enum


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"
    VENUE_OWNER = "venue_owner"


class VenueCategory(str, enum.Enum):
    NIGHTLIFE = "nightlife"
    HOTELS = "hotels"
    DAYTIME_ACTIVITIES = "daytime_activities"
    EVENING_ACTIVITIES = "evening_activities"
    TRANSPORT = "transport"
    RESTAURANTS = "restaurants"


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class GroupRole(str, enum.Enum):
    ORGANIZER = "organizer"
    MEMBER = "member"


class NotificationType(str, enum.Enum):
    BOOKING_UPDATE = "booking_update"
    GROUP_MESSAGE = "group_message"
    PRICE_ALERT = "price_alert"
    PAYMENT_REMINDER = "payment_reminder"
