# File: timesheets/workflow.py
# Version: 1.0.0
# Modified: 2026-10-19

"""
Version state machine of a monthly timesheet.

    draft ──submit──▶ submitted ──decide──▶ approved
      ▲                  │    └────decide──▶ rejected
      └────withdraw──────┘                      │
                                   resubmit: new version N+1 (submitted)

Every mutating function expects to run inside transaction.atomic() and takes
the period lock by selecting the current version row FOR UPDATE.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import QuerySet
from django.utils import timezone

from people.models import Person
from people.utils import supervisor_of

from .exceptions import EmptyTimesheet, NoSupervisor, NotEligible
from .models import DayEntry, TimesheetVersion
from .periods import Period
from .policy import can_resubmit, can_submit, submission_deadline_message

logger = logging.getLogger("timesheets")

Status = TimesheetVersion.Status

# rejected → submitted happens only through a new version (see resubmit)
TRANSITIONS = {
    Status.DRAFT.value: frozenset({Status.SUBMITTED.value}),
    Status.SUBMITTED.value: frozenset({Status.DRAFT.value, Status.APPROVED.value, Status.REJECTED.value}),
    Status.APPROVED.value: frozenset(),
    Status.REJECTED.value: frozenset(),
}


def _check_transition(version: TimesheetVersion, target: str) -> None:
    if str(target) not in TRANSITIONS.get(str(version.status), frozenset()):
        raise NotEligible(
            f"Cannot move timesheet {version.year}-{version.month:02d} v{version.version} "
            f"from {version.status} to {target}"
        )


# ------------------------------
# Lookup
# ------------------------------

def period_versions(period: Period) -> QuerySet:
    return TimesheetVersion.objects.filter(
        employee_id=period.employee_id, year=period.year, month=period.month
    )


def version_chain(period: Period) -> list[TimesheetVersion]:
    """All versions of the period, oldest first."""
    return list(period_versions(period).order_by("version"))


def period_entries(period: Period) -> QuerySet:
    return DayEntry.objects.filter(
        employee_id=period.employee_id,
        date__gte=period.first_day,
        date__lte=period.last_day,
    ).order_by("date")


def get_current(period: Period, *, lock: bool = False) -> Optional[TimesheetVersion]:
    qs = period_versions(period).filter(is_current=True)
    if lock:
        qs = qs.select_for_update()
    return qs.first()


def get_or_create_current(period: Period, *, lock: bool = False) -> TimesheetVersion:
    """
    Current version of the period; a fresh draft v1 if the period is new.
    Two writers racing on a new period meet at uq_tsversion_single_current,
    the loser re-reads the winner's row.
    """
    version = get_current(period, lock=lock)
    if version is not None:
        return version

    try:
        with transaction.atomic():
            version = TimesheetVersion.objects.create(
                employee_id=period.employee_id,
                year=period.year,
                month=period.month,
                version=1,
                status=Status.DRAFT,
                is_current=True,
            )
    except IntegrityError:
        version = get_current(period, lock=lock)
        if version is None:
            raise
        return version

    logger.info(f"Opened timesheet {period.label} for employee #{period.employee_id} (draft v1)")
    return version


# ------------------------------
# Transitions
# ------------------------------

def withdraw_if_pending(version: TimesheetVersion) -> bool:
    """submitted → draft. Returns False (and changes nothing) for any other status."""
    if version.status != Status.SUBMITTED:
        return False
    _check_transition(version, Status.DRAFT)
    version.status = Status.DRAFT
    version.submitted_at = None
    version.save()
    logger.info(
        f"Withdrew pending submission of {version.year}-{version.month:02d} v{version.version} "
        f"for employee #{version.employee_id}"
    )
    return True


def record_entry_change(period: Period) -> bool:
    """Entry of `period` was written or deleted: a pending submission goes back to draft."""
    current = get_current(period, lock=True)
    if current is None:
        return False
    return withdraw_if_pending(current)


def _resubmit(current: TimesheetVersion, supervisor: Person, now: datetime) -> TimesheetVersion:
    # retire first, the partial unique index allows only one current row
    current.is_current = False
    current.save()

    new = TimesheetVersion.objects.create(
        employee_id=current.employee_id,
        year=current.year,
        month=current.month,
        version=current.version + 1,
        previous_version=current,
        is_current=True,
        status=Status.SUBMITTED,
        submitted_at=now,
        approver=supervisor,
        approved_at=None,
        approval_comments="",
    )
    logger.info(
        f"Resubmitted {new.year}-{new.month:02d} for employee #{new.employee_id}: "
        f"v{current.version} (rejected) superseded by v{new.version}, approver #{supervisor.pk}"
    )
    return new


def submit(
    period: Period,
    employee: Person,
    *,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> TimesheetVersion:
    """
    Submit the period for approval, or resubmit it after a rejection.

    Raises NotEligible (window or status), EmptyTimesheet, NoSupervisor.
    """
    now = now or timezone.now()
    today = today or timezone.localdate(now)

    current = get_or_create_current(period, lock=True)
    status = current.status

    if status == Status.REJECTED:
        eligible = can_resubmit(status, today, period.year, period.month)
    else:
        eligible = can_submit(today, period.year, period.month)
    if not eligible:
        raise NotEligible(submission_deadline_message(today, period.year, period.month))

    if status == Status.SUBMITTED:
        raise NotEligible("Timesheet has already been submitted and is awaiting approval")
    if status == Status.APPROVED:
        raise NotEligible("Timesheet has already been approved")

    if not period_entries(period).exists():
        raise EmptyTimesheet()

    supervisor = supervisor_of(employee)
    if supervisor is None:
        raise NoSupervisor()

    if status == Status.REJECTED:
        return _resubmit(current, supervisor, now)

    _check_transition(current, Status.SUBMITTED)
    current.status = Status.SUBMITTED
    current.submitted_at = now
    current.approver = supervisor
    current.save()
    logger.info(
        f"Submitted {period.label} v{current.version} for employee #{period.employee_id} "
        f"to approver #{supervisor.pk}"
    )
    return current


def finalize_decision(
    version: TimesheetVersion,
    decision: str,
    comments: str = "",
    *,
    now: Optional[datetime] = None,
) -> TimesheetVersion:
    """submitted → approved | rejected on the same version row."""
    _check_transition(version, decision)
    version.status = decision
    version.approved_at = now or timezone.now()
    version.approval_comments = comments or ""
    version.save()
    logger.info(
        f"Timesheet {version.year}-{version.month:02d} v{version.version} of employee "
        f"#{version.employee_id} {decision} by approver #{version.approver_id}"
    )
    return version
