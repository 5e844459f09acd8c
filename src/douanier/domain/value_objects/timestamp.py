"""
UTC timestamp helpers.

All domain timestamps are timezone-aware UTC datetimes; the HTTP layer
exposes them as integer epoch milliseconds.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_epoch_ms(moment: datetime) -> int:
    """
    Convert an aware datetime to integer epoch milliseconds.

    Uses integer timedelta division, so no float rounding is involved.
    """
    return (moment - EPOCH) // timedelta(milliseconds=1)


def from_epoch_ms(epoch_ms: int) -> datetime:
    """Convert integer epoch milliseconds back to an aware UTC datetime."""
    return EPOCH + timedelta(milliseconds=epoch_ms)
