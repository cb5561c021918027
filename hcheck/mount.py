# ============================================================================
# HEALTH CHECK MOUNT
# ============================================================================
# STATUS: Core - Composition with the wrapped application
# PURPOSE: Route the health path to the endpoint, everything else to the app
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Mount

Wraps any ASGI application with the health endpoint:

    app = FastAPI()
    registry = HealthCheckRegistry()
    registry.register("db", db_check)

    app = new_handler(app, registry=registry)
    # or, with middleware around the health endpoint only:
    app = new_handler_with_middleware(app, add_cache_headers, registry=registry)

Middleware are `ASGIApp -> ASGIApp` callables applied in order, so the last
one given is the outermost. They wrap the health endpoint only; the
application is forwarded untouched.
"""

from typing import Any, Awaitable, Callable, MutableMapping, Optional

from hcheck.config import HealthCheckSettings, get_settings
from hcheck.executor import HealthCheckExecutor
from hcheck.handler import HealthCheckEndpoint
from hcheck.logging import get_logger
from hcheck.registry import HealthCheckRegistry

logger = get_logger(__name__)

Scope = MutableMapping[str, Any]
ASGIApp = Callable[..., Awaitable[None]]
Middleware = Callable[[ASGIApp], ASGIApp]


class HealthCheckMount:
    """ASGI dispatcher: exact health path -> endpoint, rest -> app."""

    def __init__(self, app: ASGIApp, health_app: ASGIApp, path: str):
        self.app = app
        self.health_app = health_app
        self.path = path

    async def __call__(self, scope: Scope, receive, send) -> None:
        if scope["type"] == "http" and scope["path"] == self.path:
            await self.health_app(scope, receive, send)
            return
        await self.app(scope, receive, send)


def new_handler(
    app: ASGIApp,
    registry: Optional[HealthCheckRegistry] = None,
    settings: Optional[HealthCheckSettings] = None,
) -> HealthCheckMount:
    """Wrap `app` with the health endpoint."""
    return new_handler_with_middleware(app, registry=registry, settings=settings)


def new_handler_with_middleware(
    app: ASGIApp,
    *middleware: Middleware,
    registry: Optional[HealthCheckRegistry] = None,
    settings: Optional[HealthCheckSettings] = None,
) -> HealthCheckMount:
    """
    Wrap `app` with a health endpoint that is itself wrapped in `middleware`.

    Args:
        app: Application receiving every non-health request
        *middleware: Transforms applied to the health endpoint, in order
        registry: Tests to run (a registry with only "default" if None)
        settings: Path and timeout (read from the environment if None)

    Returns:
        The composed ASGI application. The registry is frozen.
    """
    registry = registry if registry is not None else HealthCheckRegistry()
    settings = settings or get_settings()
    registry.freeze()

    executor = HealthCheckExecutor(registry, settings)
    handler: ASGIApp = HealthCheckEndpoint(executor, settings)
    for mw in middleware:
        handler = mw(handler)

    logger.info(
        f"Health endpoint mounted at {settings.path} "
        f"({len(registry)} tests, timeout {settings.timeout_seconds}s)"
    )
    return HealthCheckMount(app, handler, settings.path)


__all__ = [
    "HealthCheckMount",
    "Middleware",
    "new_handler",
    "new_handler_with_middleware",
]
