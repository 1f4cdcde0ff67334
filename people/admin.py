# File: people/admin.py
# Version: 1.2.0
# Modified: 2026-10-19

from django.contrib import admin
from django.db.models import Count
from django.utils.translation import gettext_lazy as _
from simple_history.admin import SimpleHistoryAdmin
from concurrency.admin import ConcurrentModelAdmin

from core.admin_mixins import log_deletions
from .models import Person


class SubordinateInline(admin.TabularInline):
    model = Person
    fk_name = "supervisor"
    extra = 0
    fields = ("last_name", "first_name", "employee_id", "position", "is_active")
    readonly_fields = fields
    can_delete = False
    show_change_link = True
    verbose_name = _("Direct report")
    verbose_name_plural = _("Direct reports")

    def has_add_permission(self, request, obj=None):
        return False


@log_deletions
@admin.register(Person)
class PersonAdmin(SimpleHistoryAdmin, ConcurrentModelAdmin):
    list_display = (
        "last_name",
        "first_name",
        "employee_id",
        "position",
        "supervisor",
        "reports",
        "is_active",
        "updated_at",
    )
    list_filter = ("is_active", "project_site")
    search_fields = ("first_name", "last_name", "email", "employee_id")
    autocomplete_fields = ("user", "supervisor")
    readonly_fields = ("uuid", "reporting_line", "created_at", "updated_at")
    inlines = [SubordinateInline]

    fieldsets = (
        (_("Identity & Status"), {
            "fields": (("first_name"), ("last_name"), "uuid", "notes", "is_active"),
        }),
        (_("Employment"), {
            "fields": ("employee_id", "position", "project_site", "email"),
        }),
        (_("Hierarchy"), {
            "fields": ("supervisor", "reporting_line"),
        }),
        (_("Account link"), {
            "fields": ("user",),
        }),
        (_("System"), {
            "fields": (("version"), ("created_at"), ("updated_at"),),
        }),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("supervisor").annotate(_reports=Count("subordinates"))

    @admin.display(description=_("Reports"), ordering="_reports")
    def reports(self, obj):
        return obj._reports

    @admin.display(description=_("Reporting line"))
    def reporting_line(self, obj):
        if not obj or not obj.pk:
            return "—"
        return " → ".join(p.full_name for p in obj.supervisor_chain()) or "—"
