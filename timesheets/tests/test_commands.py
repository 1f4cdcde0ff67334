"""Tests for the bootstrap_presets management command."""
import tempfile
from io import StringIO
from pathlib import Path

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from timesheets.models import WorkingHoursPreset

from .mixins import TimesheetTestMixin


class BootstrapPresetsTest(TimesheetTestMixin, TestCase):

    def run_command(self, *args):
        out = StringIO()
        call_command("bootstrap_presets", *args, stdout=out)
        return out.getvalue()

    def test_creates_defaults_for_active_people(self):
        self.loner.is_active = False
        self.loner.save()
        self.run_command()
        self.assertEqual(WorkingHoursPreset.objects.filter(employee=self.employee).count(), 4)
        self.assertFalse(WorkingHoursPreset.objects.filter(employee=self.loner).exists())
        default = WorkingHoursPreset.objects.get(employee=self.employee, is_default=True)
        self.assertEqual(default.name, "Office day")

    def test_idempotent(self):
        self.run_command()
        count = WorkingHoursPreset.objects.count()
        out = self.run_command()
        self.assertEqual(WorkingHoursPreset.objects.count(), count)
        self.assertIn("unchanged", out)

    def test_keeps_existing_default(self):
        WorkingHoursPreset.objects.create(
            employee=self.employee, name="Mine", start_time="07:00", end_time="15:00", is_default=True,
        )
        self.run_command("--person", "EMP-0002")
        defaults = WorkingHoursPreset.objects.filter(employee=self.employee, is_default=True)
        self.assertEqual([p.name for p in defaults], ["Mine"])
        self.assertFalse(WorkingHoursPreset.objects.filter(employee=self.supervisor).exists())

    def test_dry_run(self):
        out = self.run_command("--dry-run")
        self.assertIn("[DRY]", out)
        self.assertFalse(WorkingHoursPreset.objects.exists())

    def test_unknown_person(self):
        with self.assertRaises(CommandError):
            self.run_command("--person", "EMP-9999")

    def test_invalid_file_changes_nothing(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "presets.yaml"
            path.write_text("presets:\n  - name: Ok\n    start: '08:00'\n    end: '16:00'\n  - name: Bad\n    start: 'soon'\n    end: '16:00'\n")
            with self.assertRaises(CommandError):
                self.run_command("--file", str(path))
        self.assertFalse(WorkingHoursPreset.objects.exists())
