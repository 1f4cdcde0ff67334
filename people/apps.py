# File: people/apps.py
# Version: 1.1.0
# Modified: 2026-10-19

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class PeopleConfig(AppConfig):
    """Staff directory: employees, their accounts and supervisor links."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'people'
    verbose_name = _('Staff')
