# ============================================================================
# HEALTH CHECK ROUTER
# ============================================================================
# STATUS: Integration - FastAPI router for the health endpoint
# PURPOSE: include_router alternative to wrapping the application
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Router

For FastAPI applications that prefer routing over wrapping:

    app.include_router(create_health_router(registry, settings))

Serves the same report and status codes as the mounted endpoint
(GET and HEAD on settings.path).
"""

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import Response

from hcheck.config import HealthCheckSettings, get_settings
from hcheck.executor import HealthCheckExecutor
from hcheck.handler import HealthCheckEndpoint
from hcheck.registry import HealthCheckRegistry


def create_health_router(
    registry: Optional[HealthCheckRegistry] = None,
    settings: Optional[HealthCheckSettings] = None,
) -> APIRouter:
    """Create a router exposing the health endpoint. Freezes the registry."""
    registry = registry if registry is not None else HealthCheckRegistry()
    settings = settings or get_settings()
    registry.freeze()

    endpoint = HealthCheckEndpoint(HealthCheckExecutor(registry, settings), settings)
    router = APIRouter(tags=["Health"])

    async def health_check(request: Request) -> Response:
        """Run every registered health test and report the result."""
        return await endpoint.handle(request)

    router.add_api_route(
        settings.path,
        health_check,
        methods=["GET", "HEAD"],
        include_in_schema=True,
        response_class=Response,
    )
    return router


__all__ = [
    "create_health_router",
]
