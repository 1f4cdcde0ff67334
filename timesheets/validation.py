# File: timesheets/validation.py
# Version: 1.0.0
# Modified: 2026-10-19

"""
Entry validation.

`validate_entry` takes a proposed day entry as the client sent it (dates and
times may still be strings) and returns a normalised `CleanedEntry` or raises
a ValidationError keyed by field. Nothing here touches the database.
"""

from __future__ import annotations

import base64
import binascii
import os
from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Callable, Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.utils.dateparse import parse_date
from django.utils.translation import gettext_lazy as _

from .durations import duration_minutes, parse_time_value
from .exceptions import DocumentRejected
from .models import DayEntry

EntryType = DayEntry.EntryType
HalfDayPeriod = DayEntry.HalfDayPeriod

HALF_DAY_TYPES = frozenset({
    EntryType.ANNUAL_LEAVE_HALFDAY.value,
    EntryType.CHILDCARE_LEAVE_HALFDAY.value,
    EntryType.NOPAY_LEAVE_HALFDAY.value,
})

DEFAULT_DOCUMENT_EXTENSIONS = ("pdf", "jpg", "jpeg", "png", "doc", "docx")


def min_shift_minutes() -> int:
    return int(getattr(settings, "TIMESHEET_MIN_SHIFT_MINUTES", 30))


def max_document_bytes() -> int:
    return int(getattr(settings, "TIMESHEET_MAX_DOCUMENT_BYTES", 5 * 1024 * 1024))


def allowed_document_extensions() -> tuple[str, ...]:
    exts = getattr(settings, "TIMESHEET_DOCUMENT_EXTENSIONS", DEFAULT_DOCUMENT_EXTENSIONS)
    return tuple(e.lower().lstrip(".") for e in exts)


# ------------------------------
# Inputs
# ------------------------------

@dataclass
class DocumentUpload:
    name: str
    content: Optional[bytes]
    mime_type: str = ""
    size: Optional[int] = None

    @classmethod
    def from_base64(cls, name: str, data: str, mime_type: str = "", size: Optional[int] = None) -> "DocumentUpload":
        try:
            content = base64.b64decode(data or "", validate=True)
        except (binascii.Error, ValueError):
            raise DocumentRejected(name, _("Document content is not valid base64"))
        return cls(name=name, content=content, mime_type=mime_type, size=size)

    @property
    def extension(self) -> str:
        return os.path.splitext(self.name or "")[1].lower().lstrip(".")


@dataclass
class EntryInput:
    """
    A day entry as proposed by a client.

    documents=None leaves stored documents alone; a list (also an empty one)
    replaces them.
    """
    date: Any
    entry_type: str
    start_time: Any = None
    end_time: Any = None
    half_day_period: Any = None
    date_earned: Any = None
    notes: str = ""
    primary_document_day: Any = None
    is_primary_document: bool = False
    documents: Optional[list[DocumentUpload]] = None


@dataclass(frozen=True)
class CleanedEntry:
    date: date
    entry_type: str
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    half_day_period: Optional[str] = None
    date_earned: Optional[date] = None
    notes: str = ""
    primary_document_day: Optional[date] = None
    is_primary_document: bool = False
    documents: Optional[tuple[DocumentUpload, ...]] = field(default=None, compare=False)

    @property
    def minutes(self) -> int:
        if self.start_time is None or self.end_time is None:
            return 0
        return duration_minutes(self.start_time, self.end_time)

    def as_fields(self) -> dict:
        """Model field values, ready for DayEntry(**fields) or an update."""
        return {
            "entry_type": self.entry_type,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "half_day_period": self.half_day_period or "",
            "date_earned": self.date_earned,
            "notes": self.notes or "",
            "primary_document_day": self.primary_document_day,
            "is_primary_document": bool(self.is_primary_document),
        }

    def apply_to(self, entry: DayEntry) -> DayEntry:
        for name, value in self.as_fields().items():
            setattr(entry, name, value)
        return entry


# ------------------------------
# Field parsing
# ------------------------------

def _parse_day(value, field_name: str, errors: dict) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    try:
        parsed = parse_date(str(value))
    except ValueError:
        parsed = None
    if parsed is None:
        errors.setdefault(field_name, []).append(_("Enter a valid date (YYYY-MM-DD)."))
    return parsed


def _parse_time(value, field_name: str, errors: dict) -> Optional[time]:
    if value in (None, ""):
        return None
    try:
        return parse_time_value(value).replace(second=0, microsecond=0)
    except ValueError:
        errors.setdefault(field_name, []).append(_("Enter a valid time (HH:MM)."))
        return None


# ------------------------------
# Per-type rules
# ------------------------------

def _working_hours(data: EntryInput, day: date, errors: dict) -> dict:
    if data.start_time in (None, "") or data.end_time in (None, ""):
        msg = _("Both start and end times are required for working hours")
        if data.start_time in (None, ""):
            errors.setdefault("start_time", []).append(msg)
        if data.end_time in (None, ""):
            errors.setdefault("end_time", []).append(msg)
        return {}

    start = _parse_time(data.start_time, "start_time", errors)
    end = _parse_time(data.end_time, "end_time", errors)
    if start is None or end is None:
        return {}

    minimum = min_shift_minutes()
    minutes = duration_minutes(start, end)
    if minutes <= 0 or minutes < minimum:
        errors.setdefault("end_time", []).append(
            _("Working hours must be at least {n} minutes").format(n=minimum)
        )
    return {"start_time": start, "end_time": end}


def _off_in_lieu(data: EntryInput, day: date, errors: dict) -> dict:
    if data.date_earned in (None, ""):
        errors.setdefault("date_earned", []).append(_("Date earned is required for off-in-lieu"))
        return {}
    earned = _parse_day(data.date_earned, "date_earned", errors)
    if earned is not None and earned > day:
        errors.setdefault("date_earned", []).append(_("Date earned cannot be after the off-in-lieu date"))
    return {"date_earned": earned}


def _half_day(data: EntryInput, day: date, errors: dict) -> dict:
    raw = (data.half_day_period or "").strip().upper() if isinstance(data.half_day_period, str) else data.half_day_period
    if not raw:
        errors.setdefault("half_day_period", []).append(_("Half day period (AM/PM) is required for half-day leave"))
        return {}
    if raw not in HalfDayPeriod.values:
        errors.setdefault("half_day_period", []).append(_("Invalid half day period. Must be AM or PM"))
        return {}
    return {"half_day_period": raw}


def _full_day(data: EntryInput, day: date, errors: dict) -> dict:
    return {}


def _validator_for(entry_type: str) -> Callable[[EntryInput, date, dict], dict]:
    if entry_type == EntryType.WORKING_HOURS:
        return _working_hours
    if entry_type == EntryType.OFF_IN_LIEU:
        return _off_in_lieu
    if str(entry_type) in HALF_DAY_TYPES:
        return _half_day
    return _full_day


# closed mapping: every entry type has exactly one rule set
VALIDATORS: dict[str, Callable[[EntryInput, date, dict], dict]] = {
    t.value: _validator_for(t) for t in EntryType
}


# ------------------------------
# Public API
# ------------------------------

def validate_document(doc: DocumentUpload) -> DocumentUpload:
    if not (doc.name or "").strip():
        raise DocumentRejected(doc.name, _("Document name is required"))
    if not doc.content:
        raise DocumentRejected(doc.name, _("Document content is required"))

    size = len(doc.content) if doc.size is None else doc.size
    if size <= 0:
        raise DocumentRejected(doc.name, _("Invalid document size"))
    if size > max_document_bytes() or len(doc.content) > max_document_bytes():
        raise DocumentRejected(doc.name, _("Document size cannot exceed {mb}MB").format(
            mb=max_document_bytes() // (1024 * 1024)
        ))

    allowed = allowed_document_extensions()
    if doc.extension not in allowed:
        raise DocumentRejected(doc.name, _("Invalid file type. Allowed: {types}").format(
            types=", ".join(e.upper() for e in allowed)
        ))
    return doc


def validate_entry(data: EntryInput) -> CleanedEntry:
    """
    Check a proposed entry and return its normalised form.

    Fields that do not belong to the entry type are dropped, so a leave day
    never keeps stale shift times. Raises ValidationError({field: [...]}) on
    the first pass of field checks, DocumentRejected for a bad attachment.
    """
    errors: dict = {}

    day = _parse_day(data.date, "date", errors)
    if day is None and "date" not in errors:
        errors["date"] = [_("Date is required.")]

    entry_type = data.entry_type.value if isinstance(data.entry_type, EntryType) else data.entry_type
    rules = VALIDATORS.get(entry_type)
    if rules is None:
        errors.setdefault("entry_type", []).append(
            _("Unknown entry type: {value}").format(value=entry_type)
        )

    specific = rules(data, day, errors) if (rules is not None and day is not None) else {}

    primary_day = _parse_day(data.primary_document_day, "primary_document_day", errors)

    if errors:
        raise ValidationError(errors)

    documents = None
    if data.documents is not None:
        documents = tuple(validate_document(doc) for doc in data.documents)

    return CleanedEntry(
        date=day,
        entry_type=entry_type,
        notes=(data.notes or "").strip(),
        primary_document_day=primary_day,
        is_primary_document=bool(data.is_primary_document),
        documents=documents,
        **specific,
    )
