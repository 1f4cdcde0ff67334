# File: timesheets/statistics.py
# Version: 1.0.0
# Modified: 2026-10-19

from __future__ import annotations

import calendar
from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from .durations import minutes_to_hhmm, minutes_to_hours
from .models import DayEntry


def leave_type_label(entry_type: str) -> str:
    """'annual_leave_halfday' → 'Annual Leave Halfday'"""
    return " ".join(part.capitalize() for part in str(entry_type).split("_") if part)


def month_name(month: int) -> str:
    return calendar.month_name[int(month)]


@dataclass(frozen=True)
class TimesheetStats:
    total_entries: int = 0
    working_days: int = 0
    leave_days: int = 0
    total_minutes: int = 0
    leave_breakdown: dict = field(default_factory=dict)

    @property
    def total_hours(self) -> Decimal:
        return minutes_to_hours(self.total_minutes)

    @property
    def total_hhmm(self) -> str:
        return minutes_to_hhmm(self.total_minutes)


def calculate_stats(entries: Iterable[DayEntry]) -> TimesheetStats:
    """
    Aggregate a month's entries. Half days count as one leave entry,
    the breakdown is keyed by readable type label.
    """
    total = working = minutes = 0
    leave = Counter()
    for e in entries:
        total += 1
        if e.entry_type == DayEntry.EntryType.WORKING_HOURS:
            working += 1
            minutes += e.minutes
        else:
            leave[leave_type_label(e.entry_type)] += 1

    return TimesheetStats(
        total_entries=total,
        working_days=working,
        leave_days=sum(leave.values()),
        total_minutes=minutes,
        leave_breakdown=dict(leave),
    )
