"""
Tests for the submission window.

Covers:
- can_submit for current, previous (grace window) and older months
- December → January wrap
- can_resubmit / can_edit status rules
- deadline messages and open months
"""
from datetime import date

from django.test import SimpleTestCase, override_settings

from timesheets.models import TimesheetVersion
from timesheets.policy import (
    can_edit,
    can_resubmit,
    can_submit,
    open_months,
    submission_deadline_message,
)

Status = TimesheetVersion.Status


class CanSubmitTest(SimpleTestCase):

    def test_current_month_any_day(self):
        for day in (1, 10, 11, 31):
            self.assertTrue(can_submit(date(2025, 5, day), 2025, 5))

    def test_previous_month_within_grace(self):
        self.assertTrue(can_submit(date(2025, 6, 1), 2025, 5))
        self.assertTrue(can_submit(date(2025, 6, 10), 2025, 5))

    def test_previous_month_after_grace(self):
        self.assertFalse(can_submit(date(2025, 6, 11), 2025, 5))
        self.assertFalse(can_submit(date(2025, 6, 30), 2025, 5))

    def test_two_months_back_never(self):
        self.assertFalse(can_submit(date(2025, 6, 1), 2025, 4))

    def test_future_month_never(self):
        self.assertFalse(can_submit(date(2025, 6, 1), 2025, 7))

    def test_december_wraps_into_january(self):
        self.assertTrue(can_submit(date(2025, 1, 5), 2024, 12))
        self.assertFalse(can_submit(date(2025, 1, 11), 2024, 12))
        self.assertFalse(can_submit(date(2025, 1, 5), 2025, 12))

    @override_settings(TIMESHEET_SUBMISSION_GRACE_DAYS=3)
    def test_grace_days_configurable(self):
        self.assertTrue(can_submit(date(2025, 6, 3), 2025, 5))
        self.assertFalse(can_submit(date(2025, 6, 4), 2025, 5))


class StatusRulesTest(SimpleTestCase):

    def test_resubmit_requires_rejection(self):
        today = date(2025, 6, 5)
        self.assertTrue(can_resubmit(Status.REJECTED, today, 2025, 5))
        for status in (Status.DRAFT, Status.SUBMITTED, Status.APPROVED, None):
            self.assertFalse(can_resubmit(status, today, 2025, 5))

    def test_resubmit_respects_window(self):
        self.assertFalse(can_resubmit(Status.REJECTED, date(2025, 6, 11), 2025, 5))

    def test_can_edit(self):
        self.assertTrue(can_edit(None))
        self.assertTrue(can_edit(Status.DRAFT))
        self.assertTrue(can_edit(Status.REJECTED))
        self.assertTrue(can_edit("rejected"))
        self.assertFalse(can_edit(Status.SUBMITTED))
        self.assertFalse(can_edit(Status.APPROVED))


class MessagesTest(SimpleTestCase):

    def test_previous_month_message(self):
        msg = submission_deadline_message(date(2025, 6, 11), 2025, 5)
        self.assertEqual(
            msg,
            "Previous month timesheet can only be submitted within the first 10 days of the current month",
        )

    def test_generic_message(self):
        msg = submission_deadline_message(date(2025, 6, 11), 2025, 3)
        self.assertEqual(msg, "This timesheet cannot be submitted at this time")

    def test_open_months(self):
        self.assertEqual(open_months(date(2025, 1, 4)), [(2024, 12), (2025, 1)])
        self.assertEqual(open_months(date(2025, 1, 20)), [(2025, 1)])
