# ============================================================================
# HEALTH SERVICE APPLICATION
# ============================================================================
# STATUS: API - Standalone FastAPI application
# PURPOSE: Serve a registry's health endpoints as a long-running process
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Service Application

FastAPI application that mounts the health router for one registry.
Used by `launch-gate --serve` and by applications that want the
endpoints without building their own app.

Usage:
    app = create_app(registry)
    serve(registry, host="0.0.0.0", port=8000)
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from __version__ import __version__, BUILD_DATE
from core.logging import get_logger, ComponentType
from readiness.registry import CheckRegistry
from readiness.router import create_health_router

logger = get_logger(__name__, ComponentType.API)


def create_app(registry: CheckRegistry) -> FastAPI:
    """Build an application serving /livez, /health and /health/{check_id}."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"Starting health service v{__version__} (Build {BUILD_DATE}) "
            f"with {len(registry)} checks: {', '.join(registry.ids())}"
        )
        yield
        logger.info("Health service stopped")

    app = FastAPI(
        title="Launch Readiness",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(create_health_router(registry))

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": "Launch Readiness",
            "version": __version__,
            "build_date": BUILD_DATE,
            "checks": registry.ids(),
            "health": "/health",
        }

    return app


def serve(registry: CheckRegistry, host: str = "0.0.0.0", port: int = 8000) -> None:
    """Run the application with uvicorn until interrupted."""
    import uvicorn

    uvicorn.run(create_app(registry), host=host, port=port, log_config=None)


__all__ = [
    "create_app",
    "serve",
]
