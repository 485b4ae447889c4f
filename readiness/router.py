# ============================================================================
# HEALTH CHECK ROUTER
# ============================================================================
# STATUS: API - FastAPI health endpoints
# PURPOSE: Serve readiness reports over HTTP
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Router

FastAPI router exposing a registry over HTTP.

Endpoints:
    GET /livez               - Liveness probe (no checks run)
    GET /health              - Full validation run, JSON report body
    GET /health/{check_id}   - Single check result

Response Codes:
    200 - HEALTHY or DEGRADED
    503 - FAILED (critical check not passing)
    404 - Unknown check id

Every health response carries X-Health-Status and is marked uncacheable.

Usage:
    app.include_router(create_health_router(registry))
"""

import json
from typing import Any, Dict, Optional

from fastapi import APIRouter
from fastapi.responses import Response

from __version__ import __version__, BUILD_DATE
from core.logging import get_logger, ComponentType
from readiness.core import OverallStatus, Severity
from readiness.executor import HealthCheckExecutor
from readiness.registry import CheckRegistry

logger = get_logger(__name__, ComponentType.API)

NO_CACHE = "no-cache, no-store, must-revalidate"


def _json_response(
    status_code: int,
    content: Dict[str, Any],
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """JSON response encoded like the report sink (non-JSON details as str)."""
    return Response(
        content=json.dumps(content, default=str),
        status_code=status_code,
        media_type="application/json",
        headers=headers,
    )


def _status_to_http_code(status: OverallStatus) -> int:
    """Map overall status to HTTP status code."""
    return {
        OverallStatus.HEALTHY: 200,
        OverallStatus.DEGRADED: 200,
        OverallStatus.FAILED: 503,
    }[status]


def create_health_router(registry: CheckRegistry) -> APIRouter:
    """
    Build a router bound to one registry.

    Args:
        registry: Checks served by /health

    Returns:
        APIRouter to mount on an application
    """
    router = APIRouter(tags=["Health"])
    executor = HealthCheckExecutor(registry)

    @router.get("/livez")
    async def liveness_probe():
        """Returns 200 while the process is responsive. Runs no checks."""
        return {"status": "alive", "version": __version__, "build_date": BUILD_DATE}

    @router.get("/health")
    async def full_health_check():
        """
        Run every registered check.

        Returns:
            200: HEALTHY or DEGRADED
            503: FAILED
        """
        report = await executor.execute_all()
        if report.overall is OverallStatus.FAILED:
            logger.warning(
                f"/health reporting FAILED: "
                f"{', '.join(r.id for r in report.critical_failures)}"
            )

        body = report.to_dict()
        body["version"] = __version__

        return _json_response(
            status_code=_status_to_http_code(report.overall),
            content=body,
            headers={
                "X-Health-Status": report.overall.value,
                "Cache-Control": NO_CACHE,
            },
        )

    @router.get("/health/{check_id}")
    async def single_health_check(check_id: str):
        """Run a single check by id."""
        result = await executor.execute_single(check_id)

        if result is None:
            return _json_response(
                status_code=404,
                content={"error": f"Health check not found: {check_id}"},
            )

        blocking = not result.passed and result.severity is Severity.CRITICAL
        return _json_response(
            status_code=503 if blocking else 200,
            content=result.to_dict(),
            headers={
                "X-Health-Status": result.status.value,
                "Cache-Control": NO_CACHE,
            },
        )

    return router


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "create_health_router",
]
