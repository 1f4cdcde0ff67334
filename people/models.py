# people/models.py
import uuid
from django.conf import settings
from django.db import models
from django.core.validators import RegexValidator
from django.utils.translation import gettext_lazy as _
from simple_history.models import HistoricalRecords
from django.core.exceptions import ValidationError
from concurrency.fields import AutoIncVersionField


class Person(models.Model):
    # --- Identity ------------------------------------------------------------
    uuid = models.UUIDField(
        _("UUID"),
        default=uuid.uuid4,
        editable=False,
        unique=True,
        help_text=_("Stable system identifier."),
    )
    first_name = models.CharField(_("First name"), max_length=80)
    last_name  = models.CharField(_("Last name"),  max_length=80)

    email = models.EmailField(_("Email"), blank=True)

    employee_id = models.CharField(
        _("Employee ID"),
        max_length=20,
        blank=True,
        null=True,
        validators=[
            RegexValidator(
                regex=r"^[A-Za-z0-9\-]{1,20}$",
                message=_("Letters, digits and hyphens only (max. 20)."),
            )
        ],
        help_text=_("Payroll / HR reference, e.g. EMP-0042."),
    )
    position = models.CharField(_("Position"), max_length=120, blank=True)
    project_site = models.CharField(_("Project site"), max_length=120, blank=True)

    notes = models.TextField(_("Notes"), blank=True)

    # Link to Django account (optional)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="person",
        verbose_name=_("Account"),
        help_text=_("Link to a Django user account (optional)."),
    )

    # --- Hierarchy -----------------------------------------------------------
    supervisor = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="subordinates",
        verbose_name=_("Supervisor"),
        help_text=_("Approves this person's monthly timesheets."),
    )

    # --- Lifecycle / flags ---------------------------------------------------
    is_active   = models.BooleanField(_("Active"), default=True)

    created_at = models.DateTimeField(_("Created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated at"), auto_now=True)

    history = HistoricalRecords()
    version = AutoIncVersionField()

    class Meta:
        ordering = ["last_name", "first_name"]
        verbose_name = _("Person")
        verbose_name_plural = _("People")
        indexes = [
            models.Index(fields=["last_name", "first_name"], name="people_person_name_idx"),
            models.Index(fields=["supervisor"], name="people_person_supervisor_idx"),
        ]
        # Only enforce uniqueness when a value is present
        constraints = [
            models.UniqueConstraint(
                fields=["employee_id"],
                name="uq_person_employee_id",
                condition=models.Q(employee_id__isnull=False),
            ),
        ]

    def __str__(self):
        return f"{self.last_name}, {self.first_name}"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def supervisor_chain(self):
        """
        Walk upwards through the supervisor links, nearest first.
        Stops at the first repeated person so a broken tree cannot loop forever.
        """
        seen = {self.pk}
        node = self.supervisor
        while node is not None and node.pk not in seen:
            yield node
            seen.add(node.pk)
            node = node.supervisor

    def clean(self):
        super().clean()
        errors = {}

        if self.employee_id == "":
            self.employee_id = None

        if self.supervisor_id:
            if self.pk and self.supervisor_id == self.pk:
                errors.setdefault("supervisor", []).append(_("A person cannot supervise themselves."))
            elif self.pk:
                # the new supervisor must not report (transitively) to this person
                node = self.supervisor
                seen = set()
                while node is not None and node.pk not in seen:
                    if node.supervisor_id == self.pk:
                        errors.setdefault("supervisor", []).append(
                            _("This assignment would create a supervision cycle.")
                        )
                        break
                    seen.add(node.pk)
                    node = node.supervisor

        if errors:
            raise ValidationError(errors)
