# File: timesheets/tests/mixins.py
# Version: 1.0.0
# Modified: 2026-10-19

from datetime import datetime

from django.contrib.auth import get_user_model
from django.utils import timezone

from people.models import Person
from timesheets import services
from timesheets.models import DayEntry
from timesheets.validation import EntryInput

User = get_user_model()


def at(*args) -> datetime:
    """Aware datetime in the project timezone."""
    return timezone.make_aware(datetime(*args))


class TimesheetTestMixin:
    """Mixin providing an employee, their supervisor and a person without one."""

    def setUp(self):
        super().setUp()

        self.supervisor_user = User.objects.create_user("boss", password="test123")
        self.supervisor = Person.objects.create(
            first_name="Sabine",
            last_name="Boss",
            employee_id="EMP-0001",
            user=self.supervisor_user,
        )

        self.employee_user = User.objects.create_user("worker", password="test123")
        self.employee = Person.objects.create(
            first_name="Walter",
            last_name="Worker",
            employee_id="EMP-0002",
            user=self.employee_user,
            supervisor=self.supervisor,
        )

        self.other_supervisor = Person.objects.create(first_name="Otto", last_name="Other")
        self.loner = Person.objects.create(first_name="Lena", last_name="Lone")

    # ---- entry helpers ----
    def work(self, day, start="09:00", end="17:00", **kwargs) -> EntryInput:
        return EntryInput(
            date=day,
            entry_type=DayEntry.EntryType.WORKING_HOURS,
            start_time=start,
            end_time=end,
            **kwargs,
        )

    def leave(self, day, entry_type=DayEntry.EntryType.ANNUAL_LEAVE, **kwargs) -> EntryInput:
        return EntryInput(date=day, entry_type=entry_type, **kwargs)

    def save_work(self, day, start="09:00", end="17:00", person=None, **kwargs) -> DayEntry:
        return services.save_entry(person or self.employee, self.work(day, start, end, **kwargs))
