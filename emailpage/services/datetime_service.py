"""Datetime helpers for page metadata."""

from __future__ import annotations

from datetime import UTC, datetime

import pendulum

# Human-readable date shown on rendered pages, e.g. "October 17, 2026"
DISPLAY_FORMAT = "MMMM D, YYYY"


def now_utc() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(UTC)


def format_display_date(dt: datetime, tz: str = "UTC") -> str:
    """Format a datetime for display on a page."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return pendulum.instance(dt).in_timezone(tz).format(DISPLAY_FORMAT)
