# File: timesheets/admin.py
# Version: 1.1.0
# Modified: 2026-10-19

from django.contrib import admin, messages
from django.core.exceptions import PermissionDenied
from django.db import transaction
from django.utils.translation import gettext_lazy as _, ngettext
from django_object_actions import DjangoObjectActions
from simple_history.admin import SimpleHistoryAdmin
from concurrency.admin import ConcurrentModelAdmin
from concurrency.forms import ConcurrentForm

from core.admin_mixins import safe_admin_action, log_deletions
from people.utils import resolve_person

from . import approvals, services, workflow
from .durations import minutes_to_hhmm
from .exceptions import PeriodLocked, TimesheetError
from .models import TimesheetVersion, DayEntry, DayEntryDocument, WorkingHoursPreset
from .periods import Period


# =========================
# Timesheet versions
# =========================

@admin.register(TimesheetVersion)
class TimesheetVersionAdmin(DjangoObjectActions, SimpleHistoryAdmin):
    """
    Versions change only through the workflow; the admin shows them and lets
    the assigned supervisor approve a pending one.
    """
    list_display = ("employee", "period_label", "version", "status", "is_current", "approver", "submitted_at", "approved_at")
    list_display_links = ("employee",)
    list_filter = ("status", "is_current", "year", "month")
    search_fields = ("employee__last_name", "employee__first_name", "employee__employee_id")
    readonly_fields = (
        "employee", "year", "month", "version", "previous_version", "is_current",
        "status", "submitted_at", "approver", "approved_at", "approval_comments",
        "totals_preview", "created_at", "updated_at",
    )
    fieldsets = (
        (_("Scope"), {"fields": ("employee", "year", "month", "totals_preview")}),
        (_("Workflow"), {"fields": ("status", "submitted_at", "approver", "approved_at", "approval_comments")}),
        (_("Versioning"), {"fields": ("version", "previous_version", "is_current")}),
        (_("System"), {"fields": ("created_at", "updated_at")}),
    )
    change_actions = ("approve_version",)
    action_user_errors = (TimesheetError,)

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description=_("Period"), ordering="year")
    def period_label(self, obj):
        return f"{obj.month_name} {obj.year}"

    @admin.display(description=_("Totals"))
    def totals_preview(self, obj):
        if not obj or not obj.pk:
            return "—"
        stats = services.snapshot(obj).stats
        return _("{entries} entries · {work} working days ({hhmm} = {hours} h) · {leave} leave days").format(
            entries=stats.total_entries,
            work=stats.working_days,
            hhmm=stats.total_hhmm,
            hours=stats.total_hours,
            leave=stats.leave_days,
        )

    def get_change_actions(self, request, object_id, form_url):
        actions = list(super().get_change_actions(request, object_id, form_url))
        obj = self.get_object(request, object_id)
        person = resolve_person(request.user)
        if not obj or obj.status != TimesheetVersion.Status.SUBMITTED or not person or obj.approver_id != person.pk:
            actions = [a for a in actions if a != "approve_version"]
        return actions

    # the action URL is reachable even when the button is hidden; decide() checks the approver
    @safe_admin_action
    def approve_version(self, request, obj):
        approvals.decide(obj.pk, resolve_person(request.user), TimesheetVersion.Status.APPROVED)
        messages.success(request, _("Timesheet approved."))
    approve_version.label = _("Approve")
    approve_version.short_description = _("Approve this submitted timesheet")
    approve_version.methods = ("POST",)
    approve_version.button_type = "form"
    approve_version.attrs = {"class": "btn btn-block btn-success", "style": "margin-bottom: 1rem;"}


# =========================
# Day entries
# =========================

class DayEntryAdminForm(ConcurrentForm):
    """Refuses entries that would land in, or move out of, a submitted or approved month."""

    class Meta:
        model = DayEntry
        fields = "__all__"

    periods = frozenset()

    def clean(self):
        cleaned_data = super().clean()
        periods = set()
        employee, day = cleaned_data.get("employee"), cleaned_data.get("date")
        if employee is not None and day is not None:
            periods.add(Period.from_date(employee.pk, day))
        # instance still holds the stored values here
        if self.instance.pk:
            periods.add(self.instance.period)
        self.periods = frozenset(periods)

        if any(services.period_is_locked(p) for p in self.periods):
            self.add_error("date", PeriodLocked.default_message)
        return cleaned_data


class DayEntryDocumentInline(admin.TabularInline):
    model = DayEntryDocument
    extra = 0
    fields = ("original_filename", "stored_filename", "mime_type", "file_size", "uploaded_at")
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@log_deletions
@admin.register(DayEntry)
class DayEntryAdmin(SimpleHistoryAdmin, ConcurrentModelAdmin):
    form = DayEntryAdminForm
    list_display = ("date", "employee", "entry_type", "start_time", "end_time", "half_day_period", "duration")
    list_filter = ("entry_type",)
    search_fields = ("employee__last_name", "employee__first_name")
    date_hierarchy = "date"
    autocomplete_fields = ("employee",)
    inlines = [DayEntryDocumentInline]
    readonly_fields = ("created_at", "updated_at")
    fieldsets = (
        (_("Day"), {"fields": ("employee", "date", "entry_type", "notes")}),
        (_("Working hours"), {"fields": ("start_time", "end_time")}),
        (_("Leave details"), {"fields": ("half_day_period", "date_earned", "primary_document_day", "is_primary_document")}),
        (_("System"), {"fields": ("version", "created_at", "updated_at")}),
    )

    def _locked(self, obj) -> bool:
        return services.period_is_locked(obj.period)

    def has_change_permission(self, request, obj=None):
        if obj is not None and self._locked(obj):
            return False
        return super().has_change_permission(request, obj)

    def has_delete_permission(self, request, obj=None):
        if obj is not None and self._locked(obj):
            return False
        return super().has_delete_permission(request, obj)

    def save_model(self, request, obj, form, change):
        try:
            with transaction.atomic():
                periods = services.lock_for_edit(form.periods)
                super().save_model(request, obj, form, change)
                for period in periods:
                    workflow.record_entry_change(period)
        except PeriodLocked as e:
            # submitted between form validation and save
            raise PermissionDenied(str(e))

    def delete_model(self, request, obj):
        try:
            services.delete_entry(obj.employee, obj.date)
        except PeriodLocked as e:
            raise PermissionDenied(str(e))

    def delete_queryset(self, request, queryset):
        skipped = 0
        for entry in queryset.select_related("employee"):
            try:
                services.delete_entry(entry.employee, entry.date)
            except PeriodLocked:
                skipped += 1
        if skipped:
            self.message_user(
                request,
                ngettext(
                    "%(count)d entry in a submitted or approved month was kept.",
                    "%(count)d entries in submitted or approved months were kept.",
                    skipped,
                ) % {"count": skipped},
                level=messages.WARNING,
            )

    @admin.display(description=_("Duration"))
    def duration(self, obj):
        return minutes_to_hhmm(obj.minutes) if obj.is_working else "—"


@log_deletions
@admin.register(WorkingHoursPreset)
class WorkingHoursPresetAdmin(admin.ModelAdmin):
    list_display = ("employee", "name", "start_time", "end_time", "is_default")
    list_filter = ("is_default",)
    search_fields = ("name", "employee__last_name", "employee__first_name")
    autocomplete_fields = ("employee",)
