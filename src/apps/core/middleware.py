"""Custom middleware for the application."""

import logging
import re
import time
import uuid
from typing import Callable

from django.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


class RequestLoggingMiddleware:
    """Log every request with its status and duration, and tag it with an id.

    The id is taken from an incoming ``X-Request-ID`` header when the client
    sends a short token of safe characters, otherwise a short random id is
    generated. It is echoed back on the response. 5xx responses log at
    ERROR, 4xx at WARNING and the rest at INFO.
    """

    skip_paths = ("/static/", "/favicon.ico")

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = self._request_id(request)
        request.request_id = request_id  # type: ignore[attr-defined]
        started = time.perf_counter()

        response = self.get_response(request)

        response[REQUEST_ID_HEADER] = request_id
        if not request.path.startswith(self.skip_paths):
            self._log(request, response, started, request_id)
        return response

    def _request_id(self, request: HttpRequest) -> str:
        incoming = request.headers.get(REQUEST_ID_HEADER, "")
        if VALID_REQUEST_ID.fullmatch(incoming):
            return incoming
        return uuid.uuid4().hex[:8]

    def _log(
        self,
        request: HttpRequest,
        response: HttpResponse,
        started: float,
        request_id: str,
    ) -> None:
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        log_data = {
            "request_id": request_id,
            "method": request.method,
            "path": request.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
            "ip_address": self._get_client_ip(request),
        }

        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(
            level,
            f"{request.method} {request.path} -> {response.status_code} ({duration_ms}ms)",
            extra=log_data,
        )

    def _get_client_ip(self, request: HttpRequest) -> str:
        """Extract client IP address from request."""
        x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
        if x_forwarded_for:
            return x_forwarded_for.split(",")[0].strip()
        return request.META.get("REMOTE_ADDR", "unknown")
