# common/api.py

"""
API ERROR NORMALIZATION

Every failure leaves the API in one shape:

    {"error": {"code": "<MACHINE_CODE>", "message": "<human readable>"}}

- ShopError subclasses carry their own code + status.
- DRF's own exceptions (serializer validation, auth, throttling, 404) are
  wrapped into the same envelope; field errors are kept under error.details.

Wired through REST_FRAMEWORK["EXCEPTION_HANDLER"].
"""

from __future__ import annotations

import logging

from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from common.exceptions import ShopError

logger = logging.getLogger(__name__)


def error_response(*, code: str, message: str, http_status: int, details=None):
    payload = {"code": code, "message": message}
    if details is not None:
        payload["details"] = details
    return Response({"error": payload}, status=http_status)


def _message_from_detail(data) -> str:
    if isinstance(data, dict) and "detail" in data:
        return str(data["detail"])
    if isinstance(data, list) and data:
        return str(data[0])
    return "Invalid request."


def exception_handler(exc, context):
    if isinstance(exc, ShopError):
        view = context.get("view")
        logger.info(
            "Domain error",
            extra={
                "code": exc.code,
                "view": view.__class__.__name__ if view else None,
            },
        )
        return error_response(
            code=exc.code,
            message=exc.message,
            http_status=exc.http_status,
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        # Unhandled -> Django's 500 handling (and Sentry, when configured).
        return None

    if isinstance(exc, drf_exceptions.ValidationError):
        response.data = {
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request.",
                "details": response.data,
            }
        }
        return response

    code = getattr(exc, "default_code", None) or "error"
    if response.status_code == status.HTTP_404_NOT_FOUND:
        code = "not_found"

    response.data = {
        "error": {
            "code": str(code).upper(),
            "message": _message_from_detail(response.data),
        }
    }
    return response
