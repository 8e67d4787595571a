from fastapi import status
from .base import build_response
from utils.exceptions import ServiceError


def bad_request_error(error: str = "Bad request", errors=None):
    return build_response(
        status.HTTP_400_BAD_REQUEST,
        False,
        message=error,
        errors=errors,
    )


def internal_server_error(error: str = "Internal server error"):
    return build_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        False,
        message=error,
    )


def service_error_response(exc: ServiceError):
    """Render a typed service failure with the status it maps to."""
    return build_response(
        exc.status_code,
        False,
        message=exc.message,
        errors=exc.errors,
    )


def group_field_errors(errors) -> dict:
    """Group pydantic error entries by field name."""
    field_errors = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        field_errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return field_errors


def validation_error_response(errors):
    return bad_request_error("Validation failed", errors=group_field_errors(errors))
