"""
Health checks for the blog posts service.

Reports on the database connection, the configured post store and the
host's disk and memory, for load balancers and container orchestrators.
"""

import logging
import time
from typing import Any, Callable

import psutil
from django.conf import settings
from django.db import connection
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_http_methods

from src.apps.blog.store import get_post_store

logger = logging.getLogger(__name__)


class HealthCheckStatus:
    """Health check status constants."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


def _result(status: str, message: str, **details: Any) -> dict[str, Any]:
    return {
        "status": status,
        "message": message,
        **details,
        "timestamp": timezone.now().isoformat(),
    }


def _timed(probe: Callable[[], Any]) -> float:
    """Run `probe` and return how long it took in milliseconds."""
    started = time.perf_counter()
    probe()
    return (time.perf_counter() - started) * 1000


class HealthChecker:
    """Runs every component check and folds them into one status."""

    SLOW_DATABASE_MS = 1000
    SLOW_STORE_MS = 1000

    def __init__(self) -> None:
        self.checks: dict[str, Callable[[], dict[str, Any]]] = {
            "database": self._check_database,
            "post_store": self._check_post_store,
            "disk_space": self._check_disk_space,
            "memory": self._check_memory,
        }

    def run_all_checks(self) -> dict[str, Any]:
        """Run all health checks and return the aggregate report."""
        results: dict[str, Any] = {}
        overall = HealthCheckStatus.HEALTHY

        for name, check in self.checks.items():
            try:
                result = check()
            except Exception as e:
                logger.error(f"Health check '{name}' failed: {e}")
                result = _result(HealthCheckStatus.UNHEALTHY, "Check failed")
            results[name] = result

            if result["status"] == HealthCheckStatus.UNHEALTHY:
                overall = HealthCheckStatus.UNHEALTHY
            elif (
                result["status"] == HealthCheckStatus.DEGRADED
                and overall == HealthCheckStatus.HEALTHY
            ):
                overall = HealthCheckStatus.DEGRADED

        return {
            "status": overall,
            "timestamp": timezone.now().isoformat(),
            "version": getattr(settings, "VERSION", "1.0.0"),
            "environment": getattr(settings, "ENVIRONMENT", "unknown"),
            "checks": results,
        }

    def _check_database(self) -> dict[str, Any]:
        """Check database connectivity and response time."""

        def ping() -> None:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()

        try:
            elapsed = _timed(ping)
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return _result(HealthCheckStatus.UNHEALTHY, "Database connection failed")

        status = (
            HealthCheckStatus.DEGRADED
            if elapsed > self.SLOW_DATABASE_MS
            else HealthCheckStatus.HEALTHY
        )
        return _result(
            status,
            f"Database responded in {elapsed:.2f}ms",
            response_time_ms=round(elapsed, 2),
        )

    def _check_post_store(self) -> dict[str, Any]:
        """Check the configured post store answers a count query."""
        store = get_post_store()
        counted: list[int] = []

        try:
            elapsed = _timed(lambda: counted.append(store.count()))
        except Exception as e:
            logger.error(f"Post store health check failed: {e}")
            return _result(HealthCheckStatus.UNHEALTHY, "Post store unavailable")

        status = (
            HealthCheckStatus.DEGRADED
            if elapsed > self.SLOW_STORE_MS
            else HealthCheckStatus.HEALTHY
        )
        return _result(
            status,
            f"{type(store).__name__} responded in {elapsed:.2f}ms",
            post_count=counted[0],
            response_time_ms=round(elapsed, 2),
        )

    def _check_disk_space(self) -> dict[str, Any]:
        """Check available disk space."""
        disk = psutil.disk_usage("/")
        used_percent = (disk.used / disk.total) * 100
        max_usage = getattr(settings, "HEALTH_CHECK", {}).get("DISK_USAGE_MAX", 90)

        if used_percent >= max_usage:
            status, label = HealthCheckStatus.UNHEALTHY, "critical"
        elif used_percent >= max_usage - 10:
            status, label = HealthCheckStatus.DEGRADED, "high"
        else:
            status, label = HealthCheckStatus.HEALTHY, "normal"

        return _result(
            status,
            f"Disk usage {label}: {used_percent:.1f}%",
            disk_usage_percent=round(used_percent, 1),
            disk_free_gb=round(disk.free / (1024**3), 2),
        )

    def _check_memory(self) -> dict[str, Any]:
        """Check available memory."""
        memory = psutil.virtual_memory()
        available_mb = memory.available / (1024**2)
        min_memory = getattr(settings, "HEALTH_CHECK", {}).get("MEMORY_MIN", 100)

        if available_mb < min_memory:
            status, label = HealthCheckStatus.UNHEALTHY, "low"
        elif available_mb < min_memory * 2:
            status, label = HealthCheckStatus.DEGRADED, "high usage"
        else:
            status, label = HealthCheckStatus.HEALTHY, "normal"

        return _result(
            status,
            f"Memory {label}: {available_mb:.0f}MB available",
            memory_available_mb=round(available_mb),
            memory_usage_percent=round(memory.percent, 1),
        )


health_checker = HealthChecker()


@never_cache
@require_http_methods(["GET", "HEAD"])
def health_check_view(request: Any) -> JsonResponse:
    """Aggregate health report; 503 only when a component is unhealthy."""
    report = health_checker.run_all_checks()
    status_code = 503 if report["status"] == HealthCheckStatus.UNHEALTHY else 200
    return JsonResponse(report, status=status_code)


@never_cache
@require_http_methods(["GET"])
def readiness_check_view(request: Any) -> JsonResponse:
    """Ready once the database and post store both answer."""
    for name in ("database", "post_store"):
        try:
            result = health_checker.checks[name]()
        except Exception as e:
            logger.error(f"Readiness check '{name}' failed: {e}")
            result = _result(HealthCheckStatus.UNHEALTHY, "Check failed")
        if result["status"] == HealthCheckStatus.UNHEALTHY:
            return JsonResponse(
                {"status": "not_ready", "message": result["message"]}, status=503
            )

    return JsonResponse({"status": "ready", "timestamp": timezone.now().isoformat()})


@never_cache
@require_http_methods(["GET"])
def liveness_check_view(request: Any) -> JsonResponse:
    """Liveness check: the process is up and serving requests."""
    return JsonResponse(
        {
            "status": "alive",
            "timestamp": timezone.now().isoformat(),
            "version": getattr(settings, "VERSION", "1.0.0"),
        }
    )
