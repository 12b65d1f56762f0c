from datetime import datetime, timedelta, timezone
import re
from typing import Optional

import attrs


# "7-day refund window", "3 day notice", ...
_REFUND_WINDOW_PATTERN = re.compile(r'(\d+)[\s-]day', re.IGNORECASE)


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@attrs.define
class Event:
    name: str
    venue: str
    starts_at: datetime
    cancellation_policy: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def refund_window_days(self, *, default_days: int) -> int:
        if self.cancellation_policy:
            match = _REFUND_WINDOW_PATTERN.search(self.cancellation_policy)
            if match:
                return int(match.group(1))
        return default_days

    def refund_deadline(self, *, default_days: int) -> datetime:
        """Last moment a refund may be requested: the window measured back from the start time"""
        return as_utc(self.starts_at) - timedelta(
            days=self.refund_window_days(default_days=default_days)
        )

    def is_refund_window_open(self, *, now: datetime, default_days: int) -> bool:
        return as_utc(now) <= self.refund_deadline(default_days=default_days)
