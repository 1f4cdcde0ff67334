# File: timesheets/approvals.py
# Version: 1.0.0
# Modified: 2026-10-19

"""
Supervisor side of the workflow: approval queues, decisions and the
dashboard summary. Decisions lock the version row so they cannot interleave
with a withdrawal or resubmission of the same version.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from people.models import Person

from . import workflow
from .exceptions import CommentsRequired, NotFound, Unauthorized
from .models import TimesheetVersion
from .services import PeriodSnapshot, snapshot

logger = logging.getLogger("timesheets.approvals")

Status = TimesheetVersion.Status

DECISIONS = (Status.APPROVED.value, Status.REJECTED.value)
FILTER_ALL = "all"
FILTER_PENDING = "pending"


def _assigned(supervisor: Person) -> QuerySet:
    return TimesheetVersion.objects.filter(approver=supervisor).select_related("employee")


def list_pending(supervisor: Person) -> QuerySet:
    """Current submissions waiting for `supervisor`, oldest submission first."""
    return (
        _assigned(supervisor)
        .filter(is_current=True, status=Status.SUBMITTED)
        .order_by("submitted_at", "id")
    )


def list_for_approval(supervisor: Person, status_filter: str = FILTER_ALL) -> QuerySet:
    """
    all      → every version ever routed to the supervisor, superseded ones included
    pending  → same as list_pending
    <status> → current versions in that status
    """
    key = (status_filter or FILTER_ALL).strip().lower()
    if key == FILTER_ALL:
        return _assigned(supervisor).order_by("-year", "-month", "-version")
    if key == FILTER_PENDING:
        return list_pending(supervisor)
    if key in Status.values:
        return (
            _assigned(supervisor)
            .filter(is_current=True, status=key)
            .order_by("-year", "-month", "-version")
        )
    raise ValidationError({"status": [_("Unknown status filter: {value}").format(value=status_filter)]})


def _get_version(version_id: int, *, lock: bool = False) -> TimesheetVersion:
    qs = TimesheetVersion.objects.filter(pk=version_id)
    if lock:
        qs = qs.select_for_update()
    version = qs.first()
    if version is None:
        raise NotFound(f"Timesheet version #{version_id} not found")
    return version


def get_for_approval(version_id: int, supervisor: Person) -> PeriodSnapshot:
    """Version with its entries and statistics, for the assigned approver only."""
    version = _get_version(version_id)
    if supervisor is None or version.approver_id != supervisor.pk:
        raise Unauthorized(_("You are not authorized to review this timesheet."))
    return snapshot(version)


def decide(
    version_id: int,
    supervisor: Person,
    decision: str,
    comments: str = "",
    *,
    now: Optional[datetime] = None,
) -> TimesheetVersion:
    """
    Approve or reject a submitted version.

    Raises NotFound, Unauthorized (not the assigned approver, or the version is
    not awaiting a decision) and CommentsRequired for a rejection without text.
    """
    decision = str(decision or "").strip().lower()
    if decision not in DECISIONS:
        raise ValidationError({"decision": [_("Decision must be 'approved' or 'rejected'.")]})
    comments = (comments or "").strip()

    with transaction.atomic():
        version = _get_version(version_id, lock=True)

        if supervisor is None or version.approver_id != supervisor.pk:
            logger.warning(
                f"Person #{getattr(supervisor, 'pk', None)} tried to decide timesheet version "
                f"#{version.pk} assigned to #{version.approver_id}"
            )
            raise Unauthorized(_("You are not the assigned approver of this timesheet."))
        if version.status != Status.SUBMITTED:
            raise Unauthorized(_("This timesheet is not awaiting approval."))
        if decision == Status.REJECTED and not comments:
            raise CommentsRequired()

        workflow.finalize_decision(version, decision, comments, now=now)
    return version


def _month_bounds(now: datetime) -> tuple[datetime, datetime]:
    local = timezone.localtime(now)
    start = local.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def summary(supervisor: Person, *, now: Optional[datetime] = None) -> dict:
    """
    Dashboard numbers: pending queue length, approvals in the running
    calendar month and the mean hours from submission to decision.
    """
    now = now or timezone.now()
    start, end = _month_bounds(now)

    approved_this_month = _assigned(supervisor).filter(
        status=Status.APPROVED, approved_at__gte=start, approved_at__lt=end,
    ).count()

    decided = (
        TimesheetVersion.objects
        .filter(approver=supervisor, status__in=DECISIONS,
                submitted_at__isnull=False, approved_at__isnull=False)
        .only("submitted_at", "approved_at")
    )
    hours = [v.approval_hours for v in decided]
    average = None
    if hours:
        average = (sum(hours, Decimal(0)) / Decimal(len(hours))).quantize(Decimal("0.1"))

    return {
        "pending_count": list_pending(supervisor).count(),
        "approved_this_month": approved_this_month,
        "average_approval_hours": average,
    }
