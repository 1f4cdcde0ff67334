# File: timesheets/durations.py
# Version: 1.0.0
# Modified: 2026-10-19

"""
Shift length arithmetic.

Times are wall-clock values without a timezone. A shift whose end is not after
its start runs past midnight, so 22:00-06:00 is eight hours and 09:00-09:00 is
a full 24 hour shift.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal, ROUND_HALF_UP

# both ends are pinned to this day before subtracting
ANCHOR_DAY = date(2000, 1, 1)

MINUTES_PER_DAY = 24 * 60


def minutes_to_hhmm(minutes: int) -> str:
    """Format minutes → 'H:MM' (handles negative)."""
    sign = "-" if minutes < 0 else ""
    m = abs(int(minutes))
    h, mm = divmod(m, 60)
    return f"{sign}{h}:{mm:02d}"


def parse_time_value(value) -> time:
    """
    Accept a datetime.time or an 'HH:MM' / 'HH:MM:SS' string.
    Raises ValueError for anything else.
    """
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        raw = value.strip()
        for fmt in ("%H:%M", "%H:%M:%S"):
            try:
                return datetime.strptime(raw, fmt).time()
            except ValueError:
                continue
    raise ValueError(f"Not a time of day: {value!r}")


def duration_minutes(start: time, end: time) -> int:
    """Length of a shift in whole minutes, always within (0, 1440]."""
    start_dt = datetime.combine(ANCHOR_DAY, start.replace(second=0, microsecond=0))
    end_dt = datetime.combine(ANCHOR_DAY, end.replace(second=0, microsecond=0))
    if end_dt <= start_dt:
        end_dt += timedelta(days=1)
    return int((end_dt - start_dt).total_seconds() // 60)


def duration_hours(start: time, end: time) -> Decimal:
    """Shift length in hours as an exact Decimal (minutes / 60)."""
    return Decimal(duration_minutes(start, end)) / Decimal(60)


def minutes_to_hours(minutes: int, places: str = "0.01") -> Decimal:
    """Rounded hours for display and statistics."""
    return (Decimal(int(minutes)) / Decimal(60)).quantize(Decimal(places), rounding=ROUND_HALF_UP)
