# ============================================================================
# BUNDLED CHECKS + DEMO TESTS
# ============================================================================
# STATUS: Tests - Ready-made tests and the demo application
# PURPOSE: Verify http_check outcome mapping and the demo wiring
# CREATED: 18 OCT 2026
# ============================================================================
"""
Bundled Checks + Demo Tests

Uses httpx.MockTransport for the upstream probe, no real HTTP traffic.

Run with:
    pytest tests/test_checks.py -v
"""

import asyncio
import time

import httpx
from fastapi.testclient import TestClient

from hcheck.checks import http_check, process_check
from hcheck.config import HealthCheckSettings
from hcheck.context import CheckContext
from hcheck.core import Status
from hcheck.demo import create_demo_app

UPSTREAM = "http://billing.internal/_hcheck"


def _run(check, timeout=2.0):
    async def run():
        ctx = CheckContext(timeout)
        try:
            return await check(ctx)
        finally:
            ctx.cancel()

    return asyncio.run(run())


def _transport(handler):
    return httpx.MockTransport(handler)


# ============================================================================
# HTTP CHECK
# ============================================================================

class TestHttpCheck:

    def test_expected_status_is_available(self):
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, json={"status": "available"})

        status, error = _run(http_check(UPSTREAM, transport=_transport(handler)))

        assert status == Status.AVAILABLE
        assert error is None
        assert requested == [UPSTREAM]

    def test_unexpected_status_is_unavailable(self):
        check = http_check(UPSTREAM, transport=_transport(lambda r: httpx.Response(503)))

        status, error = _run(check)

        assert status == Status.UNAVAILABLE
        assert "503" in error

    def test_custom_expected_status(self):
        check = http_check(
            UPSTREAM,
            expected_status=204,
            transport=_transport(lambda r: httpx.Response(204)),
        )

        assert _run(check) == (Status.AVAILABLE, None)

    def test_connect_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        status, error = _run(http_check(UPSTREAM, transport=_transport(handler)))

        assert status == Status.UNAVAILABLE
        assert "Cannot connect" in error

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        status, error = _run(http_check(UPSTREAM, transport=_transport(handler)))

        assert status == Status.UNAVAILABLE
        assert "timed out" in error

    def test_slow_upstream_is_degraded(self):
        def handler(request):
            time.sleep(0.02)
            return httpx.Response(200)

        check = http_check(UPSTREAM, degraded_after_ms=5, transport=_transport(handler))

        status, error = _run(check)

        assert status == Status.DEGRADED
        assert "slow" in error


class TestProcessCheck:

    def test_available(self):
        assert _run(process_check) == (Status.AVAILABLE, None)


# ============================================================================
# DEMO APP
# ============================================================================

class TestDemoApp:

    def test_demo_routes(self, monkeypatch):
        monkeypatch.delenv("HCHECK_DEMO_UPSTREAM", raising=False)
        client = TestClient(create_demo_app(HealthCheckSettings()))

        root = client.get("/")
        health = client.get("/_hcheck")

        assert root.status_code == 200
        assert root.json()["health"] == "/_hcheck"
        assert health.status_code == 200
        assert set(health.json()["tests"]) == {"default", "process"}

    def test_demo_registers_upstream(self, monkeypatch):
        monkeypatch.setenv("HCHECK_DEMO_UPSTREAM", "http://127.0.0.1:9/_hcheck")
        client = TestClient(create_demo_app(HealthCheckSettings(timeout_seconds=2.0)))

        data = client.get("/_hcheck").json()

        assert "upstream" in data["tests"]
        assert data["tests"]["upstream"]["status"] == "unavailable"
