"""
Datetime utility functions

Clocks are plain callables returning an aware UTC datetime, so services can
take ``clock=utcnow`` in production and a ``FixedClock`` in tests.
"""
from datetime import datetime, timedelta, timezone
from typing import Callable
import logging

logger = logging.getLogger(__name__)

# Same pattern the newsroom frontend has always displayed
DISPLAY_DATE_FORMAT = "%d.%m.%Y %H:%M:%S"

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def format_display_date(dt: datetime, fmt: str = DISPLAY_DATE_FORMAT) -> str:
    """
    Format a timestamp for display.

    Pure function of its input: naive datetimes are taken as UTC, aware
    ones are converted to UTC first, so the same instant always renders
    the same text.

    Args:
        dt: Timestamp to format
        fmt: strftime pattern (defaults to dd.MM.yyyy HH:mm:ss)

    Returns:
        Formatted date string
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(fmt)


class FixedClock:
    """Clock that returns a fixed instant until advanced"""

    def __init__(self, now: datetime):
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> datetime:
        """Move the clock forward, e.g. ``clock.advance(minutes=5)``"""
        self.now = self.now + timedelta(**delta)
        logger.debug(f"Clock advanced to {self.now.isoformat()}")
        return self.now
