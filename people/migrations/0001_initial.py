import concurrency.fields
import django.core.validators
import django.db.models.deletion
import simple_history.models
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Person",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("uuid", models.UUIDField(default=uuid.uuid4, editable=False, help_text="Stable system identifier.", unique=True, verbose_name="UUID")),
                ("first_name", models.CharField(max_length=80, verbose_name="First name")),
                ("last_name", models.CharField(max_length=80, verbose_name="Last name")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="Email")),
                ("employee_id", models.CharField(blank=True, help_text="Payroll / HR reference, e.g. EMP-0042.", max_length=20, null=True, validators=[django.core.validators.RegexValidator(message="Letters, digits and hyphens only (max. 20).", regex="^[A-Za-z0-9\\-]{1,20}$")], verbose_name="Employee ID")),
                ("position", models.CharField(blank=True, max_length=120, verbose_name="Position")),
                ("project_site", models.CharField(blank=True, max_length=120, verbose_name="Project site")),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                ("is_active", models.BooleanField(default=True, verbose_name="Active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("version", concurrency.fields.AutoIncVersionField(default=0, help_text="record revision number")),
                ("supervisor", models.ForeignKey(blank=True, help_text="Approves this person's monthly timesheets.", null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="subordinates", to="people.person", verbose_name="Supervisor")),
                ("user", models.OneToOneField(blank=True, help_text="Link to a Django user account (optional).", null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="person", to=settings.AUTH_USER_MODEL, verbose_name="Account")),
            ],
            options={
                "verbose_name": "Person",
                "verbose_name_plural": "People",
                "ordering": ["last_name", "first_name"],
                "indexes": [
                    models.Index(fields=["last_name", "first_name"], name="people_person_name_idx"),
                    models.Index(fields=["supervisor"], name="people_person_supervisor_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(condition=models.Q(("employee_id__isnull", False)), fields=("employee_id",), name="uq_person_employee_id"),
                ],
            },
        ),
        migrations.CreateModel(
            name="HistoricalPerson",
            fields=[
                ("id", models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID")),
                ("uuid", models.UUIDField(db_index=True, default=uuid.uuid4, editable=False, help_text="Stable system identifier.", verbose_name="UUID")),
                ("first_name", models.CharField(max_length=80, verbose_name="First name")),
                ("last_name", models.CharField(max_length=80, verbose_name="Last name")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="Email")),
                ("employee_id", models.CharField(blank=True, help_text="Payroll / HR reference, e.g. EMP-0042.", max_length=20, null=True, validators=[django.core.validators.RegexValidator(message="Letters, digits and hyphens only (max. 20).", regex="^[A-Za-z0-9\\-]{1,20}$")], verbose_name="Employee ID")),
                ("position", models.CharField(blank=True, max_length=120, verbose_name="Position")),
                ("project_site", models.CharField(blank=True, max_length=120, verbose_name="Project site")),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                ("is_active", models.BooleanField(default=True, verbose_name="Active")),
                ("created_at", models.DateTimeField(blank=True, editable=False, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(blank=True, editable=False, verbose_name="Updated at")),
                ("version", concurrency.fields.AutoIncVersionField(default=0, help_text="record revision number")),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                ("history_type", models.CharField(choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")], max_length=1)),
                ("history_user", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
                ("supervisor", models.ForeignKey(blank=True, db_constraint=False, help_text="Approves this person's monthly timesheets.", null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name="+", to="people.person", verbose_name="Supervisor")),
                ("user", models.ForeignKey(blank=True, db_constraint=False, help_text="Link to a Django user account (optional).", null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Account")),
            ],
            options={
                "verbose_name": "historical Person",
                "verbose_name_plural": "historical People",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
