"""
common.exceptions
~~~~~~~~~~~~~~~~~
Centralised DRF exception handler and custom exception classes.

Every failure leaves the API as a plain-text message so that CLI users
piping YAML in and out get a readable line instead of a JSON envelope.
"""
import structlog
from django.http import HttpResponse
from rest_framework import status
from rest_framework.exceptions import APIException

logger = structlog.get_logger(__name__)

PLAIN_TEXT = "text/plain; charset=utf-8"


class AppError(Exception):
    """Base application error.  Subclass to define domain-specific errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_code: str = "error"
    default_detail: str = "An error occurred."

    def __init__(self, detail: str | None = None, code: str | None = None) -> None:
        self.detail = detail or self.default_detail
        self.code = code or self.default_code
        super().__init__(self.detail)

    def __str__(self) -> str:
        return self.detail


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "not_found"
    default_detail = "The requested resource was not found."


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "bad_request"
    default_detail = "Validation failed."


class BackendError(AppError):
    """The GraphQL store could not be reached or rejected a request."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = "backend_error"
    default_detail = "The configuration backend failed."


def _plain_text(detail: str, status_code: int) -> HttpResponse:
    """Render *detail* as a single line, folding multi-line parser messages."""
    line = " ".join(str(detail).split())
    return HttpResponse(f"{line}\n", status=status_code, content_type=PLAIN_TEXT)


def flatten_detail(detail) -> str:
    """Collapse a DRF ``ErrorDetail`` structure into a single line."""
    if isinstance(detail, dict):
        return "; ".join(f"{key}: {flatten_detail(value)}" for key, value in detail.items())
    if isinstance(detail, list):
        return "; ".join(flatten_detail(item) for item in detail)
    return str(detail)


def custom_exception_handler(exc: Exception, context: dict) -> HttpResponse | None:
    """
    Global DRF exception handler.
    Converts AppError subclasses to plain-text responses and lets DRF map its
    own exceptions (parse errors, 405s, ...) before flattening them the same
    way.  Anything else propagates as an unhandled 500.
    """
    if isinstance(exc, AppError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "app_error",
            code=exc.code,
            detail=exc.detail,
            status_code=exc.status_code,
        )
        return _plain_text(exc.detail, exc.status_code)

    # rest_framework.views loads the configured renderers, which import this module.
    from rest_framework.views import exception_handler as drf_exception_handler

    response = drf_exception_handler(exc, context)
    if response is None:
        logger.exception("unhandled_exception", exc_info=exc)
        return None

    detail = flatten_detail(exc.detail) if isinstance(exc, APIException) else str(exc)
    logger.warning(
        "drf_error",
        detail=detail,
        status_code=response.status_code,
    )
    plain = _plain_text(detail, response.status_code)
    for header in ("Allow", "Retry-After", "WWW-Authenticate"):
        if header in response:
            plain[header] = response[header]
    return plain
