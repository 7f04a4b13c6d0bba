"""Small shared utility helpers used across backend modules."""

import math
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current timezone-aware UTC timestamp."""

    return datetime.now(timezone.utc)


def utc_iso_now() -> str:
    """Return current UTC timestamp as ISO-8601 string."""

    return utc_now().isoformat()


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties going away from zero."""

    rounded = math.floor(abs(value) + 0.5)
    return int(rounded) if value >= 0 else -int(rounded)
