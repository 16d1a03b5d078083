# stars/utils/time_utils.py

from datetime import date, datetime
from typing import Optional, Union

import pytz


UTC = pytz.utc


def utc_now() -> datetime:
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        return UTC.localize(value)
    return value.astimezone(UTC)


def to_datetime(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return ensure_utc(value)
    return UTC.localize(datetime(value.year, value.month, value.day))


def to_iso(value: Optional[datetime]) -> Optional[str]:
    return ensure_utc(value).isoformat() if value else None


def from_iso(text: Optional[str]) -> Optional[datetime]:
    if not text:
        return None
    return ensure_utc(datetime.fromisoformat(text))
