import concurrency.fields
import django.core.validators
import django.db.models.deletion
import simple_history.models
import timesheets.models
from django.conf import settings
from django.db import migrations, models


ENTRY_TYPE_CHOICES = [
    ("working_hours", "Working hours"),
    ("annual_leave", "Annual leave"),
    ("annual_leave_halfday", "Annual leave (half day)"),
    ("medical_leave", "Medical leave"),
    ("off_in_lieu", "Off in lieu"),
    ("childcare_leave", "Childcare leave"),
    ("childcare_leave_halfday", "Childcare leave (half day)"),
    ("shared_parental_leave", "Shared parental leave"),
    ("nopay_leave", "No-pay leave"),
    ("nopay_leave_halfday", "No-pay leave (half day)"),
    ("hospitalization_leave", "Hospitalization leave"),
    ("reservist", "Reservist"),
    ("paternity_leave", "Paternity leave"),
    ("compassionate_leave", "Compassionate leave"),
    ("maternity_leave", "Maternity leave"),
    ("day_off", "Day off"),
]

STATUS_CHOICES = [
    ("draft", "Draft"),
    ("submitted", "Submitted"),
    ("approved", "Approved"),
    ("rejected", "Rejected"),
]

HALF_DAY_CHOICES = [("AM", "Morning"), ("PM", "Afternoon")]

HISTORY_TYPE_CHOICES = [("+", "Created"), ("~", "Changed"), ("-", "Deleted")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("people", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="TimesheetVersion",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("year", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(2000), django.core.validators.MaxValueValidator(9999)], verbose_name="Year")),
                ("month", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)], verbose_name="Month")),
                ("version", models.PositiveIntegerField(default=1, verbose_name="Version")),
                ("is_current", models.BooleanField(default=True, verbose_name="Current")),
                ("status", models.CharField(choices=STATUS_CHOICES, db_index=True, default="draft", max_length=10, verbose_name="Status")),
                ("submitted_at", models.DateTimeField(blank=True, null=True, verbose_name="Submitted at")),
                ("approved_at", models.DateTimeField(blank=True, null=True, verbose_name="Decided at")),
                ("approval_comments", models.TextField(blank=True, verbose_name="Approval comments")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("approver", models.ForeignKey(blank=True, help_text="Supervisor the submission was routed to.", null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="assigned_timesheets", to="people.person", verbose_name="Approver")),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="timesheet_versions", to="people.person", verbose_name="Employee")),
                ("previous_version", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="next_versions", to="timesheets.timesheetversion", verbose_name="Previous version")),
            ],
            options={
                "verbose_name": "Timesheet version",
                "verbose_name_plural": "Timesheet versions",
                "ordering": ("-year", "-month", "-version"),
                "indexes": [
                    models.Index(fields=["employee", "year", "month"], name="ts_version_period_idx"),
                    models.Index(fields=["approver", "status"], name="ts_version_approver_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("employee", "year", "month", "version"), name="uq_tsversion_period_version"),
                    models.UniqueConstraint(condition=models.Q(("is_current", True)), fields=("employee", "year", "month"), name="uq_tsversion_single_current"),
                    models.CheckConstraint(condition=models.Q(("month__gte", 1), ("month__lte", 12)), name="ck_tsversion_month_range"),
                    models.CheckConstraint(condition=models.Q(("version__gte", 1)), name="ck_tsversion_version_positive"),
                ],
            },
        ),
        migrations.CreateModel(
            name="HistoricalTimesheetVersion",
            fields=[
                ("id", models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID")),
                ("year", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(2000), django.core.validators.MaxValueValidator(9999)], verbose_name="Year")),
                ("month", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)], verbose_name="Month")),
                ("version", models.PositiveIntegerField(default=1, verbose_name="Version")),
                ("is_current", models.BooleanField(default=True, verbose_name="Current")),
                ("status", models.CharField(choices=STATUS_CHOICES, db_index=True, default="draft", max_length=10, verbose_name="Status")),
                ("submitted_at", models.DateTimeField(blank=True, null=True, verbose_name="Submitted at")),
                ("approved_at", models.DateTimeField(blank=True, null=True, verbose_name="Decided at")),
                ("approval_comments", models.TextField(blank=True, verbose_name="Approval comments")),
                ("created_at", models.DateTimeField(blank=True, editable=False, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(blank=True, editable=False, verbose_name="Updated at")),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                ("history_type", models.CharField(choices=HISTORY_TYPE_CHOICES, max_length=1)),
                ("approver", models.ForeignKey(blank=True, db_constraint=False, help_text="Supervisor the submission was routed to.", null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name="+", to="people.person", verbose_name="Approver")),
                ("employee", models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name="+", to="people.person", verbose_name="Employee")),
                ("history_user", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
                ("previous_version", models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name="+", to="timesheets.timesheetversion", verbose_name="Previous version")),
            ],
            options={
                "verbose_name": "historical Timesheet version",
                "verbose_name_plural": "historical Timesheet versions",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name="DayEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField(verbose_name="Date")),
                ("entry_type", models.CharField(choices=ENTRY_TYPE_CHOICES, default="working_hours", max_length=32, verbose_name="Type")),
                ("start_time", models.TimeField(blank=True, null=True, verbose_name="Start")),
                ("end_time", models.TimeField(blank=True, null=True, verbose_name="End")),
                ("half_day_period", models.CharField(blank=True, choices=HALF_DAY_CHOICES, max_length=2, verbose_name="Half day")),
                ("date_earned", models.DateField(blank=True, help_text="Day the off-in-lieu was worked.", null=True, verbose_name="Date earned")),
                ("primary_document_day", models.DateField(blank=True, null=True, verbose_name="Document day")),
                ("is_primary_document", models.BooleanField(default=False, verbose_name="Holds documents")),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("version", concurrency.fields.AutoIncVersionField(default=0, help_text="record revision number")),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="day_entries", to="people.person", verbose_name="Employee")),
            ],
            options={
                "verbose_name": "Day entry",
                "verbose_name_plural": "Day entries",
                "ordering": ("date", "id"),
                "indexes": [
                    models.Index(fields=["employee", "date"], name="ts_dayentry_emp_date_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("employee", "date"), name="uq_dayentry_employee_date"),
                ],
            },
        ),
        migrations.CreateModel(
            name="HistoricalDayEntry",
            fields=[
                ("id", models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID")),
                ("date", models.DateField(verbose_name="Date")),
                ("entry_type", models.CharField(choices=ENTRY_TYPE_CHOICES, default="working_hours", max_length=32, verbose_name="Type")),
                ("start_time", models.TimeField(blank=True, null=True, verbose_name="Start")),
                ("end_time", models.TimeField(blank=True, null=True, verbose_name="End")),
                ("half_day_period", models.CharField(blank=True, choices=HALF_DAY_CHOICES, max_length=2, verbose_name="Half day")),
                ("date_earned", models.DateField(blank=True, help_text="Day the off-in-lieu was worked.", null=True, verbose_name="Date earned")),
                ("primary_document_day", models.DateField(blank=True, null=True, verbose_name="Document day")),
                ("is_primary_document", models.BooleanField(default=False, verbose_name="Holds documents")),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                ("created_at", models.DateTimeField(blank=True, editable=False, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(blank=True, editable=False, verbose_name="Updated at")),
                ("version", concurrency.fields.AutoIncVersionField(default=0, help_text="record revision number")),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                ("history_type", models.CharField(choices=HISTORY_TYPE_CHOICES, max_length=1)),
                ("employee", models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name="+", to="people.person", verbose_name="Employee")),
                ("history_user", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "historical Day entry",
                "verbose_name_plural": "historical Day entries",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name="DayEntryDocument",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("original_filename", models.CharField(max_length=255, verbose_name="Original file name")),
                ("file", models.FileField(max_length=255, upload_to=timesheets.models.document_upload_to, verbose_name="File")),
                ("mime_type", models.CharField(blank=True, max_length=100, verbose_name="MIME type")),
                ("file_size", models.PositiveIntegerField(verbose_name="Size (bytes)")),
                ("uploaded_at", models.DateTimeField(auto_now_add=True, verbose_name="Uploaded at")),
                ("day_entry", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="documents", to="timesheets.dayentry", verbose_name="Day entry")),
            ],
            options={
                "verbose_name": "Supporting document",
                "verbose_name_plural": "Supporting documents",
                "ordering": ("uploaded_at", "id"),
            },
        ),
        migrations.CreateModel(
            name="WorkingHoursPreset",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=80, verbose_name="Name")),
                ("start_time", models.TimeField(verbose_name="Start")),
                ("end_time", models.TimeField(verbose_name="End")),
                ("is_default", models.BooleanField(default=False, verbose_name="Default")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="working_hours_presets", to="people.person", verbose_name="Employee")),
            ],
            options={
                "verbose_name": "Working hours preset",
                "verbose_name_plural": "Working hours presets",
                "ordering": ("created_at", "id"),
                "constraints": [
                    models.UniqueConstraint(fields=("employee", "name"), name="uq_preset_employee_name"),
                ],
            },
        ),
    ]
