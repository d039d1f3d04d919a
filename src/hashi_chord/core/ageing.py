"""
Age presentation helpers: the humanized "~ N units ago" text and the
ribbon opacity step function.
"""

from typing import List, Tuple

from ..config import FALLBACK_OPACITY, OPACITY_STEPS

# (unit, exclusive upper limit for the floored value)
_UNITS: List[Tuple[str, int]] = [
    ("second", 60),
    ("minute", 60),
    ("hour", 24),
    ("day", 7),
    ("week", 5),
    ("month", 12),
]


def _format(n: int, unit: str) -> str:
    return f"~ {n} {unit}{'s' if n != 1 else ''} ago"


def humanize_age(ms: int) -> str:
    """
    Reduce a millisecond duration to its coarsest fitting unit.

    Months are 30 days and years 365 days.

    >>> humanize_age(59_000)
    '~ 59 seconds ago'
    >>> humanize_age(60_000)
    '~ 1 minute ago'
    """
    seconds = int(ms // 1000)
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    values = {
        "second": seconds,
        "minute": minutes,
        "hour": hours,
        "day": days,
        "week": days // 7,
        "month": days // 30,
    }
    for unit, limit in _UNITS:
        if values[unit] < limit:
            return _format(values[unit], unit)
    return _format(days // 365, "year")


def opacity_for_age(age_ms: int) -> float:
    """Ribbon fill opacity: newer links are drawn more solid."""
    for upper_bound, opacity in OPACITY_STEPS:
        if age_ms <= upper_bound:
            return opacity
    return FALLBACK_OPACITY
