# File: core/apps.py
# Version: 1.0.0
# Modified: 2026-10-19

from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
    verbose_name = "Core"

    def ready(self):
        import core.signals  # noqa: F401
