"""Queue 'payment due' notifications for upcoming unpaid bookings.

Run this script periodically (e.g. once an hour) from the backend environment.
Each qualifying booking gets a single payment_reminder notification; the
booking's reminder_sent_at marker prevents duplicates.

Env:
  - DATABASE_URL (read through bbparty.core.config)
  - PAYMENT_REMINDER_DAYS: how many days ahead to look (default from settings)
  - DRY_RUN=1 logs matches without writing anything
"""

from __future__ import annotations

import logging
import os
from datetime import date

from bbparty.core.config import settings
from bbparty.core.db import SessionLocal
from bbparty.services.notifications import queue_payment_reminders

DRY_RUN = os.getenv("DRY_RUN", "").strip() in ("1", "true", "yes")

log = logging.getLogger("bbparty.payment_reminders")


def main() -> int:
    with SessionLocal() as db:
        return queue_payment_reminders(
            db,
            today=date.today(),
            days_ahead=settings.PAYMENT_REMINDER_DAYS,
            dry_run=DRY_RUN,
        )


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    n = main()
    log.info("queued=%s", n)
