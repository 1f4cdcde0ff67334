# File: timesheets/exceptions.py
# Version: 1.0.0
# Modified: 2026-10-19

"""
Error taxonomy of the timesheet engine.

Field-level problems are plain django ValidationErrors keyed by field name.
Business-rule rejections derive from TimesheetError and carry a readable
message. Authorization and lookup failures reuse Django's own base classes so
admin and view code already knows how to render them.
"""

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied, ValidationError
from django.utils.translation import gettext_lazy as _


class TimesheetError(Exception):
    default_message = _("The timesheet operation was rejected.")

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(str(self.message))


class NotEligible(TimesheetError):
    default_message = _("This timesheet cannot be submitted at this time")


class PeriodLocked(NotEligible):
    default_message = _("Cannot edit submitted or approved timesheet")


class EmptyTimesheet(TimesheetError):
    default_message = _("Cannot submit empty timesheet")


class NoSupervisor(TimesheetError):
    default_message = _("Cannot submit timesheet: No supervisor assigned")


class Unauthorized(PermissionDenied):
    pass


class NotFound(ObjectDoesNotExist):
    pass


class CommentsRequired(ValidationError):
    def __init__(self, message=None):
        super().__init__(
            {"comments": [message or _("Comments are required when rejecting a timesheet.")]},
            code="required",
        )


class DocumentRejected(ValidationError):
    def __init__(self, filename, message):
        self.filename = filename
        super().__init__(
            {"documents": [_("{name}: {reason}").format(name=filename or _("(unnamed)"), reason=message)]},
            code="invalid_document",
        )
