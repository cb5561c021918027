# ============================================================================
# HCHECK
# ============================================================================
# STATUS: Package - Public API
# PURPOSE: Pluggable health-check endpoint for ASGI applications
# CREATED: 18 OCT 2026
# ============================================================================
"""
hcheck

Health-check endpoint that sits in front of any ASGI application:
- HealthCheckRegistry: named test functions, frozen before serving
- HealthCheckExecutor: runs all tests concurrently under one deadline
- HealthCheckEndpoint: answers with the JSON report (200 / 503 / 500)
- new_handler / new_handler_with_middleware: mount in front of an app
- create_health_router: FastAPI include_router alternative

Usage:
    from hcheck import HealthCheckRegistry, Status, new_handler

    registry = HealthCheckRegistry()

    @registry.test("db")
    async def db_check(ctx):
        return Status.AVAILABLE, None

    app = new_handler(app, registry=registry)
"""

from hcheck.__version__ import __version__
from hcheck.config import HealthCheckSettings, get_settings
from hcheck.context import CheckContext
from hcheck.core import (
    TIMEOUT_ERROR,
    DuplicateTestError,
    HealthCheck,
    HealthCheckConfigError,
    HealthCheckError,
    RegistryFrozenError,
    Status,
    TestFunc,
    TestResult,
)
from hcheck.executor import ExecutionOutcome, HealthCheckExecutor
from hcheck.handler import HealthCheckEndpoint
from hcheck.mount import HealthCheckMount, new_handler, new_handler_with_middleware
from hcheck.registry import HealthCheckRegistry
from hcheck.router import create_health_router

__all__ = [
    "__version__",
    # Core types
    "Status",
    "TestFunc",
    "TestResult",
    "HealthCheck",
    "CheckContext",
    "TIMEOUT_ERROR",
    # Errors
    "HealthCheckError",
    "HealthCheckConfigError",
    "DuplicateTestError",
    "RegistryFrozenError",
    # Configuration
    "HealthCheckSettings",
    "get_settings",
    # Engine
    "HealthCheckRegistry",
    "HealthCheckExecutor",
    "ExecutionOutcome",
    "HealthCheckEndpoint",
    # Mounting
    "HealthCheckMount",
    "new_handler",
    "new_handler_with_middleware",
    "create_health_router",
]
