# File: timesheets/models.py
# Version: 1.0.0
# Modified: 2026-10-19

from __future__ import annotations

import calendar
import os
import uuid
from decimal import Decimal
from typing import Optional

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from simple_history.models import HistoricalRecords
from concurrency.fields import AutoIncVersionField

# External app references
from people.models import Person

from .durations import duration_minutes, minutes_to_hhmm
from .periods import Period


# ------------------------------
# Monthly versions
# ------------------------------

class TimesheetVersion(models.Model):
    """
    One approval round of an employee's month.

    Every period keeps its complete version chain; exactly one row per period
    carries is_current=True. Entries are not attached to versions, they belong
    to the (employee, date) pair and are read through the current version.
    """

    class Status(models.TextChoices):
        DRAFT = "draft", _("Draft")
        SUBMITTED = "submitted", _("Submitted")
        APPROVED = "approved", _("Approved")
        REJECTED = "rejected", _("Rejected")

    employee = models.ForeignKey(
        Person, on_delete=models.PROTECT, related_name="timesheet_versions", verbose_name=_("Employee")
    )
    year = models.PositiveIntegerField(_("Year"), validators=[MinValueValidator(2000), MaxValueValidator(9999)])
    month = models.PositiveSmallIntegerField(_("Month"), validators=[MinValueValidator(1), MaxValueValidator(12)])

    version = models.PositiveIntegerField(_("Version"), default=1)
    previous_version = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="next_versions",
        verbose_name=_("Previous version"),
    )
    is_current = models.BooleanField(_("Current"), default=True)

    status = models.CharField(_("Status"), max_length=10, choices=Status.choices, default=Status.DRAFT, db_index=True)
    submitted_at = models.DateTimeField(_("Submitted at"), null=True, blank=True)

    approver = models.ForeignKey(
        Person,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_timesheets",
        verbose_name=_("Approver"),
        help_text=_("Supervisor the submission was routed to."),
    )
    approved_at = models.DateTimeField(_("Decided at"), null=True, blank=True)
    approval_comments = models.TextField(_("Approval comments"), blank=True)

    created_at = models.DateTimeField(_("Created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated at"), auto_now=True)

    history = HistoricalRecords()

    class Meta:
        verbose_name = _("Timesheet version")
        verbose_name_plural = _("Timesheet versions")
        ordering = ("-year", "-month", "-version")
        indexes = [
            models.Index(fields=["employee", "year", "month"], name="ts_version_period_idx"),
            models.Index(fields=["approver", "status"], name="ts_version_approver_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["employee", "year", "month", "version"],
                name="uq_tsversion_period_version",
            ),
            models.UniqueConstraint(
                fields=["employee", "year", "month"],
                condition=models.Q(is_current=True),
                name="uq_tsversion_single_current",
            ),
            models.CheckConstraint(
                condition=models.Q(month__gte=1, month__lte=12),
                name="ck_tsversion_month_range",
            ),
            models.CheckConstraint(
                condition=models.Q(version__gte=1),
                name="ck_tsversion_version_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.employee} — {self.year}-{self.month:02d} v{self.version} ({self.get_status_display()})"

    @property
    def period(self) -> Period:
        return Period(self.employee_id, self.year, self.month)

    @property
    def month_name(self) -> str:
        return calendar.month_name[self.month]

    @property
    def approval_hours(self) -> Optional[Decimal]:
        """Time between submission and decision, in hours."""
        if not (self.submitted_at and self.approved_at):
            return None
        seconds = Decimal(int((self.approved_at - self.submitted_at).total_seconds()))
        return seconds / Decimal(3600)

    def clean(self):
        errors = {}

        if self.previous_version_id:
            prev = self.previous_version
            if (prev.employee_id, prev.year, prev.month) != (self.employee_id, self.year, self.month):
                errors["previous_version"] = _("Previous version must belong to the same employee and month.")
            elif prev.version != self.version - 1:
                errors["previous_version"] = _("Previous version must be version {n}.").format(n=self.version - 1)

        if self.status == self.Status.REJECTED and not (self.approval_comments or "").strip():
            errors["approval_comments"] = _("Comments are required when rejecting a timesheet.")

        if errors:
            raise ValidationError(errors)


# ------------------------------
# Day entries
# ------------------------------

class DayEntry(models.Model):
    """One record per employee and calendar day: worked hours or a kind of leave."""

    class EntryType(models.TextChoices):
        WORKING_HOURS = "working_hours", _("Working hours")
        ANNUAL_LEAVE = "annual_leave", _("Annual leave")
        ANNUAL_LEAVE_HALFDAY = "annual_leave_halfday", _("Annual leave (half day)")
        MEDICAL_LEAVE = "medical_leave", _("Medical leave")
        OFF_IN_LIEU = "off_in_lieu", _("Off in lieu")
        CHILDCARE_LEAVE = "childcare_leave", _("Childcare leave")
        CHILDCARE_LEAVE_HALFDAY = "childcare_leave_halfday", _("Childcare leave (half day)")
        SHARED_PARENTAL_LEAVE = "shared_parental_leave", _("Shared parental leave")
        NOPAY_LEAVE = "nopay_leave", _("No-pay leave")
        NOPAY_LEAVE_HALFDAY = "nopay_leave_halfday", _("No-pay leave (half day)")
        HOSPITALIZATION_LEAVE = "hospitalization_leave", _("Hospitalization leave")
        RESERVIST = "reservist", _("Reservist")
        PATERNITY_LEAVE = "paternity_leave", _("Paternity leave")
        COMPASSIONATE_LEAVE = "compassionate_leave", _("Compassionate leave")
        MATERNITY_LEAVE = "maternity_leave", _("Maternity leave")
        DAY_OFF = "day_off", _("Day off")

    class HalfDayPeriod(models.TextChoices):
        AM = "AM", _("Morning")
        PM = "PM", _("Afternoon")

    employee = models.ForeignKey(
        Person, on_delete=models.CASCADE, related_name="day_entries", verbose_name=_("Employee")
    )
    date = models.DateField(_("Date"))
    entry_type = models.CharField(
        _("Type"), max_length=32, choices=EntryType.choices, default=EntryType.WORKING_HOURS
    )

    start_time = models.TimeField(_("Start"), null=True, blank=True)
    end_time = models.TimeField(_("End"), null=True, blank=True)
    half_day_period = models.CharField(_("Half day"), max_length=2, choices=HalfDayPeriod.choices, blank=True)
    date_earned = models.DateField(_("Date earned"), null=True, blank=True, help_text=_("Day the off-in-lieu was worked."))

    # several days of one leave can share the documents uploaded on the first of them
    primary_document_day = models.DateField(_("Document day"), null=True, blank=True)
    is_primary_document = models.BooleanField(_("Holds documents"), default=False)

    notes = models.TextField(_("Notes"), blank=True)

    created_at = models.DateTimeField(_("Created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated at"), auto_now=True)

    history = HistoricalRecords()
    version = AutoIncVersionField()

    class Meta:
        verbose_name = _("Day entry")
        verbose_name_plural = _("Day entries")
        ordering = ("date", "id")
        constraints = [
            models.UniqueConstraint(fields=["employee", "date"], name="uq_dayentry_employee_date"),
        ]
        indexes = [
            models.Index(fields=["employee", "date"], name="ts_dayentry_emp_date_idx"),
        ]

    def __str__(self) -> str:
        if self.is_working:
            return f"{self.date.isoformat()} — {self.get_entry_type_display()} ({minutes_to_hhmm(self.minutes)})"
        return f"{self.date.isoformat()} — {self.get_entry_type_display()}"

    @property
    def is_working(self) -> bool:
        return self.entry_type == self.EntryType.WORKING_HOURS

    @property
    def minutes(self) -> int:
        if not (self.is_working and self.start_time and self.end_time):
            return 0
        return duration_minutes(self.start_time, self.end_time)

    @property
    def period(self) -> Period:
        return Period.from_date(self.employee_id, self.date)

    def clean(self):
        super().clean()
        from .validation import EntryInput, validate_entry

        cleaned = validate_entry(EntryInput(
            date=self.date,
            entry_type=self.entry_type,
            start_time=self.start_time,
            end_time=self.end_time,
            half_day_period=self.half_day_period,
            date_earned=self.date_earned,
            notes=self.notes,
            primary_document_day=self.primary_document_day,
            is_primary_document=self.is_primary_document,
        ))
        cleaned.apply_to(self)


# ------------------------------
# Supporting documents
# ------------------------------

def document_upload_to(instance: "DayEntryDocument", filename: str) -> str:
    """timesheets/documents/user_<id>/<yyyy>/<m>/<uuid>.<ext>"""
    entry = instance.day_entry
    ext = os.path.splitext(filename)[1].lower()
    return f"timesheets/documents/user_{entry.employee_id}/{entry.date.year}/{entry.date.month}/{uuid.uuid4().hex}{ext}"


class DayEntryDocument(models.Model):
    day_entry = models.ForeignKey(
        DayEntry, on_delete=models.CASCADE, related_name="documents", verbose_name=_("Day entry")
    )
    original_filename = models.CharField(_("Original file name"), max_length=255)
    file = models.FileField(_("File"), upload_to=document_upload_to, max_length=255)
    mime_type = models.CharField(_("MIME type"), max_length=100, blank=True)
    file_size = models.PositiveIntegerField(_("Size (bytes)"))
    uploaded_at = models.DateTimeField(_("Uploaded at"), auto_now_add=True)

    class Meta:
        verbose_name = _("Supporting document")
        verbose_name_plural = _("Supporting documents")
        ordering = ("uploaded_at", "id")

    def __str__(self) -> str:
        return self.original_filename

    @property
    def stored_filename(self) -> str:
        return os.path.basename(self.file.name) if self.file else ""


# ------------------------------
# Working hours presets
# ------------------------------

class WorkingHoursPreset(models.Model):
    """Named start/end pair an employee can apply to working days."""
    employee = models.ForeignKey(
        Person, on_delete=models.CASCADE, related_name="working_hours_presets", verbose_name=_("Employee")
    )
    name = models.CharField(_("Name"), max_length=80)
    start_time = models.TimeField(_("Start"))
    end_time = models.TimeField(_("End"))
    is_default = models.BooleanField(_("Default"), default=False)

    created_at = models.DateTimeField(_("Created at"), auto_now_add=True)

    class Meta:
        verbose_name = _("Working hours preset")
        verbose_name_plural = _("Working hours presets")
        ordering = ("created_at", "id")
        constraints = [
            models.UniqueConstraint(fields=["employee", "name"], name="uq_preset_employee_name"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.start_time:%H:%M}–{self.end_time:%H:%M})"

    @property
    def minutes(self) -> int:
        return duration_minutes(self.start_time, self.end_time)
