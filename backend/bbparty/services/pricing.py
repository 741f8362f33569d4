from __future__ import annotations

import secrets
import string
from decimal import Decimal

CONFIRMATION_CODE_PREFIX = "BB"
CONFIRMATION_CODE_LENGTH = 6

_BASE36 = string.digits + string.ascii_uppercase
_CENT = Decimal("0.01")


def calculate_total_amount(price_range_min, guest_count: int) -> Decimal:
    """Flat per-guest charge at the venue's floor rate."""
    return (Decimal(str(price_range_min)) * guest_count).quantize(_CENT)


def generate_confirmation_code() -> str:
    """Human-facing booking reference, e.g. BB4K9Z2Q. Not a security token."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(CONFIRMATION_CODE_LENGTH))
    return CONFIRMATION_CODE_PREFIX + suffix
