"""
Typed failures raised by the services and the authorization gate.

The routes turn these into response envelopes, so each class carries the
HTTP status it maps to and a message that is safe to show the caller.
"""

from typing import Any, Optional


class ServiceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Any = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class UnauthenticatedError(ServiceError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(ServiceError):
    status_code = 403
    default_message = "Forbidden"


class ValidationFailedError(ServiceError):
    status_code = 400
    default_message = "Validation failed"


class ConflictError(ServiceError):
    status_code = 400
    default_message = "Conflict"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Not found"
