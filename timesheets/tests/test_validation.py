"""
Tests for day entry validation.

Covers:
- working hours: required times, minimum shift, overnight shifts
- off-in-lieu: date earned required and not after the day
- half-day leave: AM/PM required, case normalised
- unknown types, string inputs, dropped fields
- supporting document checks
"""
import base64
from datetime import date, time

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase, override_settings

from timesheets.exceptions import DocumentRejected
from timesheets.models import DayEntry
from timesheets.validation import (
    VALIDATORS,
    DocumentUpload,
    EntryInput,
    validate_document,
    validate_entry,
)

EntryType = DayEntry.EntryType
DAY = date(2025, 5, 5)


class WorkingHoursValidationTest(SimpleTestCase):

    def _errors(self, **kwargs):
        data = EntryInput(date=DAY, entry_type=EntryType.WORKING_HOURS, **kwargs)
        with self.assertRaises(ValidationError) as ctx:
            validate_entry(data)
        return ctx.exception.message_dict

    def test_regular_shift(self):
        cleaned = validate_entry(EntryInput(
            date=DAY, entry_type=EntryType.WORKING_HOURS, start_time="09:00", end_time="17:00",
        ))
        self.assertEqual(cleaned.start_time, time(9))
        self.assertEqual(cleaned.end_time, time(17))
        self.assertEqual(cleaned.minutes, 480)

    def test_overnight_shift_is_valid(self):
        cleaned = validate_entry(EntryInput(
            date=DAY, entry_type=EntryType.WORKING_HOURS, start_time="22:00", end_time="06:00",
        ))
        self.assertEqual(cleaned.minutes, 480)

    def test_shift_below_minimum(self):
        errors = self._errors(start_time="09:00", end_time="09:29")
        self.assertIn("end_time", errors)
        self.assertIn("at least 30 minutes", errors["end_time"][0])

    def test_shift_at_minimum(self):
        cleaned = validate_entry(EntryInput(
            date=DAY, entry_type=EntryType.WORKING_HOURS, start_time="09:00", end_time="09:30",
        ))
        self.assertEqual(cleaned.minutes, 30)

    @override_settings(TIMESHEET_MIN_SHIFT_MINUTES=60)
    def test_minimum_is_configurable(self):
        errors = self._errors(start_time="09:00", end_time="09:45")
        self.assertIn("at least 60 minutes", errors["end_time"][0])

    def test_missing_end_time(self):
        errors = self._errors(start_time="09:00")
        self.assertEqual(list(errors), ["end_time"])
        self.assertIn("Both start and end times are required", errors["end_time"][0])

    def test_missing_both_times(self):
        errors = self._errors()
        self.assertIn("start_time", errors)
        self.assertIn("end_time", errors)

    def test_unparseable_time(self):
        errors = self._errors(start_time="nine", end_time="17:00")
        self.assertIn("start_time", errors)


class LeaveValidationTest(SimpleTestCase):

    def test_off_in_lieu_needs_date_earned(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_entry(EntryInput(date=DAY, entry_type=EntryType.OFF_IN_LIEU))
        self.assertIn("date_earned", ctx.exception.message_dict)

    def test_off_in_lieu_earned_after_day(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_entry(EntryInput(
                date=DAY, entry_type=EntryType.OFF_IN_LIEU, date_earned=date(2025, 5, 6),
            ))
        self.assertIn("cannot be after", ctx.exception.message_dict["date_earned"][0])

    def test_off_in_lieu_same_day_ok(self):
        cleaned = validate_entry(EntryInput(
            date=DAY, entry_type=EntryType.OFF_IN_LIEU, date_earned="2025-05-05",
        ))
        self.assertEqual(cleaned.date_earned, DAY)

    def test_half_day_requires_period(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_entry(EntryInput(date=DAY, entry_type=EntryType.ANNUAL_LEAVE_HALFDAY))
        self.assertIn("half_day_period", ctx.exception.message_dict)

    def test_half_day_rejects_unknown_period(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_entry(EntryInput(
                date=DAY, entry_type=EntryType.CHILDCARE_LEAVE_HALFDAY, half_day_period="noon",
            ))
        self.assertIn("Must be AM or PM", ctx.exception.message_dict["half_day_period"][0])

    def test_half_day_period_is_normalised(self):
        cleaned = validate_entry(EntryInput(
            date=DAY, entry_type=EntryType.NOPAY_LEAVE_HALFDAY, half_day_period="pm",
        ))
        self.assertEqual(cleaned.half_day_period, "PM")

    def test_full_day_leave_drops_foreign_fields(self):
        """Stale shift times and leave details never stick to a medical leave day."""
        cleaned = validate_entry(EntryInput(
            date=DAY,
            entry_type=EntryType.MEDICAL_LEAVE,
            start_time="09:00",
            end_time="17:00",
            half_day_period="AM",
            date_earned="2025-05-01",
        ))
        self.assertIsNone(cleaned.start_time)
        self.assertIsNone(cleaned.end_time)
        self.assertIsNone(cleaned.half_day_period)
        self.assertIsNone(cleaned.date_earned)
        self.assertEqual(cleaned.as_fields()["half_day_period"], "")

    def test_every_entry_type_has_rules(self):
        self.assertEqual(set(VALIDATORS), set(EntryType.values))
        self.assertEqual(len(VALIDATORS), 16)

    def test_unknown_entry_type(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_entry(EntryInput(date=DAY, entry_type="gardening_leave"))
        self.assertIn("entry_type", ctx.exception.message_dict)

    def test_missing_and_invalid_date(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_entry(EntryInput(date=None, entry_type=EntryType.DAY_OFF))
        self.assertIn("date", ctx.exception.message_dict)
        with self.assertRaises(ValidationError) as ctx:
            validate_entry(EntryInput(date="2025-02-30", entry_type=EntryType.DAY_OFF))
        self.assertIn("date", ctx.exception.message_dict)

    def test_notes_are_stripped(self):
        cleaned = validate_entry(EntryInput(
            date="2025-05-05", entry_type=EntryType.DAY_OFF, notes="  Labour day  ",
        ))
        self.assertEqual(cleaned.date, DAY)
        self.assertEqual(cleaned.notes, "Labour day")


class DayEntryCleanTest(SimpleTestCase):

    def test_model_clean_applies_rules(self):
        entry = DayEntry(employee_id=1, date=DAY, entry_type=EntryType.WORKING_HOURS,
                         start_time=time(9), end_time=time(9, 10))
        with self.assertRaises(ValidationError):
            entry.clean()

    def test_model_clean_normalises(self):
        entry = DayEntry(employee_id=1, date=DAY, entry_type=EntryType.ANNUAL_LEAVE,
                         start_time=time(9), end_time=time(17), is_primary_document=True)
        entry.clean()
        self.assertIsNone(entry.start_time)
        self.assertTrue(entry.is_primary_document)


class DocumentValidationTest(SimpleTestCase):

    def test_valid_pdf(self):
        doc = DocumentUpload(name="sick-note.PDF", content=b"%PDF-1.4 ...")
        self.assertIs(validate_document(doc), doc)

    def test_disallowed_extension(self):
        with self.assertRaises(DocumentRejected) as ctx:
            validate_document(DocumentUpload(name="run.exe", content=b"MZ"))
        self.assertEqual(ctx.exception.filename, "run.exe")
        self.assertIn("Invalid file type", ctx.exception.message_dict["documents"][0])

    def test_empty_content(self):
        with self.assertRaises(DocumentRejected):
            validate_document(DocumentUpload(name="a.pdf", content=b""))

    def test_declared_size_must_be_positive(self):
        with self.assertRaises(DocumentRejected) as ctx:
            validate_document(DocumentUpload(name="a.pdf", content=b"x", size=0))
        self.assertIn("Invalid document size", ctx.exception.message_dict["documents"][0])

    @override_settings(TIMESHEET_MAX_DOCUMENT_BYTES=1024 * 1024)
    def test_too_large(self):
        with self.assertRaises(DocumentRejected) as ctx:
            validate_document(DocumentUpload(name="scan.png", content=b"x" * (1024 * 1024 + 1)))
        self.assertIn("cannot exceed 1MB", ctx.exception.message_dict["documents"][0])

    def test_from_base64(self):
        doc = DocumentUpload.from_base64("a.pdf", base64.b64encode(b"hello").decode())
        self.assertEqual(doc.content, b"hello")
        with self.assertRaises(DocumentRejected):
            DocumentUpload.from_base64("a.pdf", "***not base64***")

    def test_entry_with_bad_document(self):
        with self.assertRaises(DocumentRejected):
            validate_entry(EntryInput(
                date=DAY, entry_type=EntryType.MEDICAL_LEAVE,
                documents=[DocumentUpload(name="note.txt", content=b"hi")],
            ))
