"""
Tests for the admin screens.

Covers:
- approving from the change page and who sees the button
- day entries cannot be added, changed, moved or deleted in a locked month
- totals on the version page
"""
from datetime import date

from concurrency.forms import get_signer
from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.messages.storage.fallback import FallbackStorage
from django.test import RequestFactory, TestCase
from django.urls import reverse

from timesheets import services, workflow
from timesheets.models import DayEntry, TimesheetVersion
from timesheets.periods import Period

from .mixins import TimesheetTestMixin, at

User = get_user_model()
Status = TimesheetVersion.Status


class AdminTest(TimesheetTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.supervisor_user.is_staff = True
        self.supervisor_user.is_superuser = True
        self.supervisor_user.save()

        self.other_user = User.objects.create_superuser("other", password="test123")
        self.other_supervisor.user = self.other_user
        self.other_supervisor.save()

        self.client.force_login(self.supervisor_user)

    def submit_may(self):
        self.save_work(date(2025, 5, 5))
        now = at(2025, 5, 20, 9)
        return services.submit_period(self.employee, 2025, 5, today=now.date(), now=now).version

    def entry_payload(self, day, **overrides):
        data = {
            "employee": self.employee.pk,
            "date": day.isoformat(),
            "entry_type": DayEntry.EntryType.WORKING_HOURS,
            "start_time": "09:00",
            "end_time": "17:00",
            "half_day_period": "",
            "date_earned": "",
            "primary_document_day": "",
            "notes": "",
            "version": "",
            "documents-TOTAL_FORMS": "0",
            "documents-INITIAL_FORMS": "0",
            "documents-MIN_NUM_FORMS": "0",
            "documents-MAX_NUM_FORMS": "1000",
        }
        data.update(overrides)
        return data

    def approve_url(self, version):
        return reverse("admin:timesheets_timesheetversion_actions", args=[version.pk, "approve_version"])

    # ---- versions ----
    def test_approver_approves_from_change_page(self):
        version = self.submit_may()
        change_url = reverse("admin:timesheets_timesheetversion_change", args=[version.pk])

        response = self.client.get(change_url)
        self.assertEqual(response.status_code, 200)
        self.assertIn("approve_version", [a["name"] for a in response.context["objectactions"]])

        response = self.client.post(self.approve_url(version))
        self.assertRedirects(response, change_url, fetch_redirect_response=False)
        version.refresh_from_db()
        self.assertEqual(version.status, Status.APPROVED)

    def test_approve_requires_post(self):
        version = self.submit_may()
        response = self.client.get(self.approve_url(version))
        self.assertEqual(response.status_code, 405)
        version.refresh_from_db()
        self.assertEqual(version.status, Status.SUBMITTED)

    def test_other_supervisor_cannot_approve(self):
        version = self.submit_may()
        self.client.force_login(self.other_user)

        response = self.client.get(reverse("admin:timesheets_timesheetversion_change", args=[version.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertNotIn("approve_version", [a["name"] for a in response.context["objectactions"]])

        response = self.client.post(self.approve_url(version))
        self.assertEqual(response.status_code, 302)
        version.refresh_from_db()
        self.assertEqual(version.status, Status.SUBMITTED)
        self.assertIsNone(version.approved_at)

    def test_version_list_and_totals(self):
        version = self.submit_may()
        version_admin = admin.site._registry[TimesheetVersion]
        self.assertEqual(version_admin.period_label(version), "May 2025")
        self.assertEqual(
            str(version_admin.totals_preview(version)),
            "1 entries · 1 working days (8:00 = 8.00 h) · 0 leave days",
        )
        response = self.client.get(reverse("admin:timesheets_timesheetversion_changelist"))
        self.assertContains(response, "May 2025")

    # ---- day entries ----
    def test_add_in_locked_month_refused(self):
        version = self.submit_may()
        response = self.client.post(reverse("admin:timesheets_dayentry_add"), self.entry_payload(date(2025, 5, 6)))

        self.assertEqual(response.status_code, 200)
        self.assertIn("date", response.context["adminform"].form.errors)
        self.assertFalse(DayEntry.objects.filter(date=date(2025, 5, 6)).exists())
        version.refresh_from_db()
        self.assertEqual(version.status, Status.SUBMITTED)

    def test_add_in_open_month_opens_draft(self):
        response = self.client.post(reverse("admin:timesheets_dayentry_add"), self.entry_payload(date(2025, 6, 3)))

        self.assertEqual(response.status_code, 302)
        entry = DayEntry.objects.get(employee=self.employee, date=date(2025, 6, 3))
        self.assertEqual(entry.minutes, 480)
        current = workflow.get_current(Period(self.employee.pk, 2025, 6))
        self.assertEqual(current.status, Status.DRAFT)

    def test_change_in_locked_month_forbidden(self):
        self.submit_may()
        entry = DayEntry.objects.get(date=date(2025, 5, 5))
        response = self.client.post(
            reverse("admin:timesheets_dayentry_change", args=[entry.pk]),
            self.entry_payload(date(2025, 5, 5), end_time="18:00", version=get_signer().sign(str(entry.version))),
        )
        self.assertEqual(response.status_code, 403)
        entry.refresh_from_db()
        self.assertEqual(entry.minutes, 480)

    def test_move_into_locked_month_refused(self):
        self.submit_may()
        entry = self.save_work(date(2025, 6, 3))
        response = self.client.post(
            reverse("admin:timesheets_dayentry_change", args=[entry.pk]),
            self.entry_payload(date(2025, 5, 6), version=get_signer().sign(str(entry.version))),
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn("date", response.context["adminform"].form.errors)
        entry.refresh_from_db()
        self.assertEqual(entry.date, date(2025, 6, 3))

    def test_delete_in_locked_month_forbidden(self):
        self.submit_may()
        entry = DayEntry.objects.get(date=date(2025, 5, 5))
        response = self.client.post(reverse("admin:timesheets_dayentry_delete", args=[entry.pk]), {"post": "yes"})
        self.assertEqual(response.status_code, 403)
        self.assertTrue(DayEntry.objects.filter(pk=entry.pk).exists())

    def test_delete_in_open_month(self):
        entry = self.save_work(date(2025, 6, 3))
        response = self.client.post(reverse("admin:timesheets_dayentry_delete", args=[entry.pk]), {"post": "yes"})
        self.assertEqual(response.status_code, 302)
        self.assertFalse(DayEntry.objects.filter(pk=entry.pk).exists())

    def test_bulk_delete_keeps_locked_entries(self):
        self.submit_may()
        self.save_work(date(2025, 6, 3))

        request = RequestFactory().post("/")
        request.user = self.supervisor_user
        request.session = {}
        request._messages = FallbackStorage(request)
        admin.site._registry[DayEntry].delete_queryset(request, DayEntry.objects.all())

        self.assertEqual(list(DayEntry.objects.values_list("date", flat=True)), [date(2025, 5, 5)])
        self.assertIn("1 entry in a submitted or approved month was kept.", [str(m) for m in request._messages])
