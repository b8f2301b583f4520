"""DRF exception handler producing the uniform error envelope.

Every failure leaves the API as ``{"errorMessage": "<text>"}``:

- ``DomainError`` subclasses carry their own status code and message.
- DRF ``APIException``s (malformed JSON, unsupported method, ...) keep
  their status code; their detail is flattened to a single message.
- Anything else is logged with its traceback and answered with 500.

Registered through ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal server error occurred."


class DomainError(Exception):
    """Business-rule failure that maps to a fixed HTTP status."""

    status_code = 400
    default_message = "Invalid request."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


def error_body(message: str) -> Dict[str, str]:
    return {"errorMessage": message}


def _first_detail(detail: Any) -> str:
    """Reduce a DRF ``detail`` (str, list or dict of those) to one message."""
    if isinstance(detail, dict):
        for key, value in detail.items():
            message = _first_detail(value)
            return message if key == "detail" else f"{key}: {message}"
        return ""
    if isinstance(detail, (list, tuple)):
        return _first_detail(detail[0]) if detail else ""
    return str(detail)


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else None

    if isinstance(exc, DomainError):
        logger.info(
            "api.domain_error",
            error=type(exc).__name__,
            status_code=exc.status_code,
            view=view_name,
        )
        return Response(error_body(exc.message), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        detail = exc.detail if isinstance(exc, APIException) else response.data
        response.data = error_body(_first_detail(detail))
        return response

    logger.exception("api.unhandled_error", error=type(exc).__name__, view=view_name)
    return Response(
        error_body(INTERNAL_ERROR_MESSAGE),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
