# File: timesheets/policy.py
# Version: 1.0.0
# Modified: 2026-10-19

"""
Submission window rules.

A month can be submitted while it is running, and the month before it can
still be submitted during the first days of the next one (10 by default,
TIMESHEET_SUBMISSION_GRACE_DAYS). All functions take `today` explicitly.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from django.conf import settings
from django.utils.translation import gettext_lazy as _

from .models import TimesheetVersion
from .periods import previous_month

Status = TimesheetVersion.Status

EDITABLE_STATUSES = (Status.DRAFT, Status.REJECTED)


def grace_days() -> int:
    return int(getattr(settings, "TIMESHEET_SUBMISSION_GRACE_DAYS", 10))


def is_current_month(today: date, year: int, month: int) -> bool:
    return (today.year, today.month) == (year, month)


def is_previous_month(today: date, year: int, month: int) -> bool:
    return previous_month(today.year, today.month) == (year, month)


def can_submit(today: date, year: int, month: int) -> bool:
    if is_current_month(today, year, month):
        return True
    if is_previous_month(today, year, month):
        return today.day <= grace_days()
    return False


def can_resubmit(status: Optional[str], today: date, year: int, month: int) -> bool:
    return status == Status.REJECTED and can_submit(today, year, month)


def can_edit(status: Optional[str]) -> bool:
    """No version yet counts as editable."""
    return status is None or status in EDITABLE_STATUSES


def submission_deadline_message(today: date, year: int, month: int) -> str:
    if is_previous_month(today, year, month):
        return str(_(
            "Previous month timesheet can only be submitted within the first {days} days of the current month"
        ).format(days=grace_days()))
    return str(_("This timesheet cannot be submitted at this time"))


def open_months(today: date) -> list[tuple[int, int]]:
    """
    (year, month) pairs currently inside the submission window, oldest first.
    """
    out = []
    if today.day <= grace_days():
        out.append(previous_month(today.year, today.month))
    out.append((today.year, today.month))
    return out
