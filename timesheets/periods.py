# File: timesheets/periods.py
# Version: 1.1.0
# Modified: 2026-10-19

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date

from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _


def month_days(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def previous_month(year: int, month: int) -> tuple[int, int]:
    """(year, month) of the calendar month before; January wraps to December."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


@dataclass(frozen=True)
class Period:
    """
    Key of a monthly timesheet: one employee, one calendar month.
    Not stored on its own; TimesheetVersion rows and DayEntry dates hang off it.
    """
    employee_id: int
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= int(self.month) <= 12:
            raise ValidationError(
                {"month": [_("Month must be between 1 and 12, got {value}.").format(value=self.month)]},
                code="invalid",
            )

    @classmethod
    def from_date(cls, employee_id: int, day: date) -> "Period":
        return cls(employee_id, day.year, day.month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, month_days(self.year, self.month))

    @property
    def label(self) -> str:
        return f"{self.year}-{self.month:02d}"

    def __str__(self) -> str:
        return f"{self.label} (employee #{self.employee_id})"
