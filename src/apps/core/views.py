"""JSON replacements for Django's HTML error pages."""

from typing import Any

from django.http import JsonResponse


def not_found(request: Any, exception: Exception | None = None) -> JsonResponse:
    """404 for URLs that match no route."""
    return JsonResponse({"message": "Not found."}, status=404)


def server_error(request: Any) -> JsonResponse:
    """500 for errors raised outside the API exception handler."""
    return JsonResponse({"message": "Internal server error."}, status=500)
