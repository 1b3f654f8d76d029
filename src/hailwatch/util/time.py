"""
Time helpers used for demo payloads and logging.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


def hour_stamp(moment: Optional[datetime] = None) -> str:
    """
    Truncate a datetime to the hour and format it like Open-Meteo hourly times.

    Naive values are assumed to be UTC. The result has no offset suffix,
    e.g. ``2026-01-15T18:00:00``.
    """
    value = moment or utc_now()
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:00:00")
