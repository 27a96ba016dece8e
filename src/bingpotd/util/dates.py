"""Calendar helpers used to name downloaded pictures."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Literal

Clock = Literal["utc", "local"]


def today(clock: Clock = "utc") -> date:
    """Return the current calendar date on the UTC or local clock."""
    if clock == "local":
        return date.today()
    if clock == "utc":
        return datetime.now(UTC).date()
    raise ValueError(f"Unknown clock {clock!r}; expected 'utc' or 'local'.")


def picture_date(day: date) -> str:
    """Format `day` as ``YYYY-M-D`` without zero padding (``2024-5-3``)."""
    return f"{day.year}-{day.month}-{day.day}"


__all__ = ["Clock", "picture_date", "today"]
