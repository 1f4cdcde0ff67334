# File: timesheets/services.py
# Version: 1.1.0
# Modified: 2026-10-19

"""
Operations offered to views, the admin and other callers.

Each public function runs in its own transaction; a failure leaves nothing
half written. Time-dependent functions accept `today`/`now` so callers and
tests can pin the clock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from people.models import Person

from . import documents, workflow
from .durations import parse_time_value
from .exceptions import NotEligible, NotFound, PeriodLocked
from .models import DayEntry, TimesheetVersion, WorkingHoursPreset
from .periods import Period
from .policy import can_edit, open_months
from .statistics import TimesheetStats, calculate_stats, month_name
from .validation import CleanedEntry, EntryInput, validate_entry

logger = logging.getLogger("timesheets")

Status = TimesheetVersion.Status


@dataclass(frozen=True)
class PeriodSnapshot:
    version: TimesheetVersion
    entries: list
    stats: TimesheetStats

    @property
    def can_edit(self) -> bool:
        return can_edit(self.version.status)


def snapshot(version: TimesheetVersion) -> PeriodSnapshot:
    entries = list(workflow.period_entries(version.period).prefetch_related("documents"))
    return PeriodSnapshot(version=version, entries=entries, stats=calculate_stats(entries))


def _ensure_editable(version: Optional[TimesheetVersion]) -> None:
    if version is not None and not can_edit(version.status):
        raise PeriodLocked()


def period_is_locked(period: Period) -> bool:
    current = workflow.get_current(period)
    return current is not None and not can_edit(current.status)


def lock_for_edit(periods: Iterable[Period]) -> list[Period]:
    """
    Row-lock the current version of every period about to receive entry
    writes, oldest month first. Must run inside a transaction.
    Raises PeriodLocked if any of them is submitted or approved.
    """
    ordered = sorted(set(periods), key=lambda p: (p.employee_id, p.year, p.month))
    for period in ordered:
        _ensure_editable(workflow.get_or_create_current(period, lock=True))
    return ordered


# ------------------------------
# Periods
# ------------------------------

def get_period(employee: Person, year: int, month: int) -> PeriodSnapshot:
    """Current version of the month with its entries; opens a draft on first access."""
    period = Period(employee.pk, year, month)
    with transaction.atomic():
        version = workflow.get_or_create_current(period)
    return snapshot(version)


def submit_period(
    employee: Person,
    year: int,
    month: int,
    *,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> PeriodSnapshot:
    period = Period(employee.pk, year, month)
    with transaction.atomic():
        version = workflow.submit(period, employee, today=today, now=now)
    return snapshot(version)


def withdraw_period(employee: Person, year: int, month: int) -> TimesheetVersion:
    """Take back a submission that has not been decided yet."""
    period = Period(employee.pk, year, month)
    with transaction.atomic():
        current = workflow.get_current(period, lock=True)
        if current is None or not workflow.withdraw_if_pending(current):
            raise NotEligible(_("Only a submitted timesheet awaiting approval can be withdrawn"))
    return current


def timesheet_history(employee: Person) -> QuerySet:
    """Every version that left draft, newest month and version first."""
    return (
        TimesheetVersion.objects
        .filter(employee=employee)
        .exclude(status=Status.DRAFT)
        .select_related("approver")
        .order_by("-year", "-month", "-version")
    )


def available_months(employee: Person, *, today: Optional[date] = None) -> list[dict]:
    """
    Months the employee can work on right now. The previous month only shows
    up inside the grace window and while it can still be edited.
    """
    today = today or timezone.localdate()
    out = []
    for year, month in open_months(today):
        current = workflow.get_current(Period(employee.pk, year, month))
        status = current.status if current else None
        is_current_month = (year, month) == (today.year, today.month)
        if not is_current_month and not can_edit(status):
            continue
        out.append({
            "year": year,
            "month": month,
            "month_name": month_name(month),
            "status": status,
            "is_current_month": is_current_month,
            "is_submitted": status in (Status.SUBMITTED, Status.APPROVED),
        })
    return out


# ------------------------------
# Entries
# ------------------------------

def _write_entry(employee: Person, cleaned: CleanedEntry) -> DayEntry:
    entry = (
        DayEntry.objects
        .select_for_update()
        .filter(employee=employee, date=cleaned.date)
        .first()
    )
    created = entry is None
    if created:
        entry = DayEntry(employee=employee, date=cleaned.date)
    cleaned.apply_to(entry)
    entry.save()

    if cleaned.documents is not None:
        documents.replace_documents(entry, cleaned.documents)

    logger.info(
        f"{'Created' if created else 'Updated'} {cleaned.entry_type} entry {cleaned.date} "
        f"for employee #{employee.pk}"
    )
    return entry


def save_entry(employee: Person, data: EntryInput) -> DayEntry:
    """
    Create or replace the employee's entry for data.date.
    Raises ValidationError for bad fields, PeriodLocked once the month is
    submitted or approved.
    """
    cleaned = validate_entry(data)
    period = Period.from_date(employee.pk, cleaned.date)
    with transaction.atomic():
        lock_for_edit([period])
        entry = _write_entry(employee, cleaned)
        workflow.record_entry_change(period)
    return entry


def save_entries(employee: Person, items: Iterable[EntryInput]) -> list[DayEntry]:
    """
    Bulk variant of save_entry: all entries are validated and all affected
    months checked before the first write.
    """
    cleaned_items = []
    errors = {}
    for index, item in enumerate(items):
        try:
            cleaned_items.append(validate_entry(item))
        except ValidationError as exc:
            errors[f"entries[{index}]"] = exc.messages
    if errors:
        raise ValidationError(errors)

    saved = []
    with transaction.atomic():
        periods = lock_for_edit(Period.from_date(employee.pk, c.date) for c in cleaned_items)
        for cleaned in cleaned_items:
            saved.append(_write_entry(employee, cleaned))
        for period in periods:
            workflow.record_entry_change(period)
    return saved


def get_entry(employee: Person, day: date) -> DayEntry:
    entry = DayEntry.objects.filter(employee=employee, date=day).prefetch_related("documents").first()
    if entry is None:
        raise NotFound(f"No entry on {day} for employee #{employee.pk}")
    return entry


def delete_entry(employee: Person, day: date) -> None:
    period = Period.from_date(employee.pk, day)
    with transaction.atomic():
        _ensure_editable(workflow.get_current(period, lock=True))
        entry = DayEntry.objects.select_for_update().filter(employee=employee, date=day).first()
        if entry is None:
            raise NotFound(f"No entry on {day} for employee #{employee.pk}")
        documents.discard_documents(entry)
        entry.delete()
        workflow.record_entry_change(period)
    logger.info(f"Deleted entry {day} for employee #{employee.pk}")


# ------------------------------
# Working hours presets
# ------------------------------

def list_presets(employee: Person) -> QuerySet:
    return WorkingHoursPreset.objects.filter(employee=employee).order_by("-is_default", "created_at", "id")


def save_preset(
    employee: Person,
    name: str,
    start_time,
    end_time,
    *,
    is_default: bool = False,
    preset_id: Optional[int] = None,
) -> WorkingHoursPreset:
    errors = {}
    name = (name or "").strip()
    if not name:
        errors["name"] = [_("Preset name is required.")]
    parsed = {}
    for field_name, raw in (("start_time", start_time), ("end_time", end_time)):
        try:
            parsed[field_name] = parse_time_value(raw).replace(second=0, microsecond=0)
        except ValueError:
            errors[field_name] = [_("Enter a valid time (HH:MM).")]
    if errors:
        raise ValidationError(errors)

    with transaction.atomic():
        if preset_id is not None:
            preset = WorkingHoursPreset.objects.select_for_update().filter(pk=preset_id, employee=employee).first()
            if preset is None:
                raise NotFound(f"Preset #{preset_id} not found")
        else:
            preset = WorkingHoursPreset(employee=employee)

        if WorkingHoursPreset.objects.filter(employee=employee, name=name).exclude(pk=preset.pk).exists():
            raise ValidationError({"name": [_("A preset with this name already exists.")]})

        if is_default:
            WorkingHoursPreset.objects.filter(employee=employee, is_default=True).exclude(pk=preset.pk).update(is_default=False)

        preset.name = name
        preset.start_time = parsed["start_time"]
        preset.end_time = parsed["end_time"]
        preset.is_default = is_default
        preset.save()
    return preset


def delete_preset(employee: Person, preset_id: int) -> None:
    deleted, _unused = WorkingHoursPreset.objects.filter(pk=preset_id, employee=employee).delete()
    if not deleted:
        raise NotFound(f"Preset #{preset_id} not found")
