# ============================================================================
# DEMO APPLICATION
# ============================================================================
# STATUS: Example - FastAPI app with the health endpoint mounted
# PURPOSE: Runnable example for local testing
# CREATED: 18 OCT 2026
# ============================================================================
"""
Demo Application

A small FastAPI app wrapped with the health endpoint. Besides "default" it
registers the process check and, when HCHECK_DEMO_UPSTREAM is set, an
upstream HTTP check against that URL.

Usage:
    python -m hcheck
    curl -i localhost:8000/_hcheck
"""

import os
from typing import Optional

from fastapi import FastAPI

from hcheck.__version__ import __version__, BUILD_DATE
from hcheck.checks import http_check, process_check
from hcheck.config import HealthCheckSettings, get_settings
from hcheck.mount import HealthCheckMount, new_handler
from hcheck.registry import HealthCheckRegistry


def create_demo_app(settings: Optional[HealthCheckSettings] = None) -> HealthCheckMount:
    """Build the demo application."""
    settings = settings or get_settings()

    app = FastAPI(title="hcheck demo", version=__version__)

    @app.get("/")
    async def root():
        return {
            "service": "hcheck demo",
            "version": __version__,
            "build_date": BUILD_DATE,
            "health": settings.path,
        }

    registry = HealthCheckRegistry()
    registry.register("process", process_check)

    upstream = os.environ.get("HCHECK_DEMO_UPSTREAM")
    if upstream:
        registry.register("upstream", http_check(upstream, degraded_after_ms=1000))

    return new_handler(app, registry=registry, settings=settings)
