# File: core/admin_mixins.py
# Version: 1.1.0
# Modified: 2026-10-19

from functools import wraps
import logging

from django.contrib import messages
from django.core.exceptions import PermissionDenied, ValidationError
from django.http import HttpResponseRedirect
from django.urls import reverse

admin_logger = logging.getLogger('unihanko.admin')


def _change_url(model_admin, obj) -> str:
    opts = model_admin.model._meta
    return reverse(f'admin:{opts.app_label}_{opts.model_name}_change', args=[obj.pk])


def safe_admin_action(func):
    """
    Decorator to add consistent error handling to admin object actions.

    - PermissionDenied, ValidationError and any exception class listed in the
      admin's `action_user_errors` are shown to the user as an error message
    - everything else is logged with traceback and reported generically
    - returns to the change page if the action returns None
    """
    @wraps(func)
    def wrapper(self, request, obj):
        user_errors = (PermissionDenied, ValidationError) + tuple(getattr(self, "action_user_errors", ()))
        try:
            result = func(self, request, obj)
            if result is None:
                return HttpResponseRedirect(_change_url(self, obj))
            return result
        except user_errors as e:
            text = "; ".join(e.messages) if isinstance(e, ValidationError) else str(e)
            self.message_user(request, text, level=messages.ERROR)
            return HttpResponseRedirect(_change_url(self, obj))
        except Exception as e:
            self.message_user(request, f"An error occurred: {e}", level=messages.ERROR)
            admin_logger.exception(
                f"Error in {self.__class__.__name__}.{func.__name__} "
                f"for object {obj.pk}: {e}"
            )
            return HttpResponseRedirect(_change_url(self, obj))
    return wrapper


def log_deletions(admin_class):
    """Decorator to add deletion logging to any ModelAdmin"""

    original_delete_model = admin_class.delete_model
    original_delete_queryset = admin_class.delete_queryset

    @wraps(original_delete_model)
    def delete_model_with_logging(self, request, obj):
        admin_logger.warning(
            f"User '{request.user.username}' deleted {obj._meta.verbose_name} "
            f"#{obj.pk}: {str(obj)[:100]}"
        )
        return original_delete_model(self, request, obj)

    @wraps(original_delete_queryset)
    def delete_queryset_with_logging(self, request, queryset):
        model_name = queryset.model._meta.verbose_name_plural
        count = queryset.count()
        admin_logger.warning(
            f"User '{request.user.username}' bulk deleted {count} {model_name}"
        )
        return original_delete_queryset(self, request, queryset)

    admin_class.delete_model = delete_model_with_logging
    admin_class.delete_queryset = delete_queryset_with_logging

    return admin_class
