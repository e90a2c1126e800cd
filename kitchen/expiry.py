"""
Expiry classification for fridge items.

An item is expired once its expiry is in the past, expiring soon while the
expiry falls inside the look-ahead window (inclusive at both ends), and
fresh otherwise:

    expiry < now                          -> EXPIRED
    now <= expiry <= now + window_days    -> EXPIRING_SOON
    expiry > now + window_days            -> FRESH
"""

import logging
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, Tuple, Union

from kitchen.data.models import FridgeItem

logger = logging.getLogger(__name__)

EXPIRING_SOON_DAYS = 3

DateLike = Union[date, datetime]


class ExpiryStatus(str, Enum):
    """Derived freshness of a fridge item."""
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring_soon"
    FRESH = "fresh"

    @property
    def colour(self) -> str:
        """Status dot colour shown next to the item."""
        return _COLOURS[self]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


_COLOURS = {
    ExpiryStatus.EXPIRED: "red",
    ExpiryStatus.EXPIRING_SOON: "yellow",
    ExpiryStatus.FRESH: "green",
}


def _align(expiry: DateLike, now: DateLike) -> Tuple[DateLike, DateLike]:
    """Bring both values to the same granularity.

    Two datetimes compare as instants. If either side is a plain date,
    both are reduced to calendar dates.
    """
    if isinstance(expiry, datetime) and isinstance(now, datetime):
        return expiry, now
    if isinstance(expiry, datetime):
        expiry = expiry.date()
    if isinstance(now, datetime):
        now = now.date()
    return expiry, now


def classify_expiry(
    expiry: DateLike,
    now: DateLike,
    window_days: int = EXPIRING_SOON_DAYS,
) -> ExpiryStatus:
    """
    Classify an expiry date relative to a reference time.

    Args:
        expiry: Item expiry (date or datetime)
        now: Reference "now" (date or datetime)
        window_days: Length of the expiring-soon window in days

    Returns:
        Exactly one ExpiryStatus
    """
    expiry, now = _align(expiry, now)
    if expiry < now:
        return ExpiryStatus.EXPIRED
    if expiry <= now + timedelta(days=window_days):
        return ExpiryStatus.EXPIRING_SOON
    return ExpiryStatus.FRESH


def is_expiring_soon(
    expiry: DateLike,
    now: DateLike,
    window_days: int = EXPIRING_SOON_DAYS,
) -> bool:
    """True only inside the window; an expired item is not expiring soon."""
    return classify_expiry(expiry, now, window_days) is ExpiryStatus.EXPIRING_SOON


def count_expiring_soon(
    items: Iterable[FridgeItem],
    now: DateLike,
    window_days: int = EXPIRING_SOON_DAYS,
) -> int:
    """Count fridge items inside the expiring-soon window."""
    count = sum(1 for item in items if is_expiring_soon(item.expiry, now, window_days))
    logger.debug(f"{count} item(s) expiring within {window_days} days of {now}")
    return count
