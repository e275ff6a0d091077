"""
Project-wide DRF exception handler.

Every API failure is answered with a JSON body carrying a human readable
``message``. DRF's own errors (validation, parse errors, method not allowed)
keep their status codes but are reshaped; anything DRF does not recognise
becomes a 500 without leaking the exception to the client.
"""

import logging
from typing import Any

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error."


def flatten_error_detail(detail: Any) -> str:
    """Turn DRF error details into a single readable sentence."""
    if isinstance(detail, dict):
        if "detail" in detail:
            return flatten_error_detail(detail["detail"])
        return "; ".join(
            f"{field}: {flatten_error_detail(errors)}" for field, errors in detail.items()
        )
    if isinstance(detail, (list, tuple)):
        return " ".join(flatten_error_detail(item) for item in detail)
    return str(detail)


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(
            f"Unhandled error in {type(view).__name__ if view else 'unknown view'}"
        )
        set_rollback()
        return Response(
            {"message": INTERNAL_ERROR_MESSAGE},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    data = response.data
    body: dict[str, Any] = {"message": flatten_error_detail(data)}
    if isinstance(data, dict) and "detail" not in data:
        body["errors"] = data
    response.data = body
    return response
