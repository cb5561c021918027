# ============================================================================
# UPSTREAM HTTP HEALTH TEST
# ============================================================================
# STATUS: Checks - Upstream dependency probe
# PURPOSE: Probe an HTTP dependency within the request deadline
# CREATED: 18 OCT 2026
# ============================================================================
"""
Upstream HTTP Health Test

Builds a test that GETs an upstream URL and maps the outcome:
- expected status, fast enough     -> available
- expected status, slower than threshold -> degraded
- any other status                 -> unavailable
- timeout / connection failure     -> unavailable

The request timeout is bounded by the time left on the CheckContext, so a
slow upstream never holds the test past the health deadline.

Usage:
    registry.register("billing", http_check("http://billing:8000/_hcheck"))
"""

import time
from typing import Optional

import httpx

from hcheck.context import CheckContext
from hcheck.core import Status, TestFunc, TestOutcome
from hcheck.logging import get_logger

logger = get_logger(__name__)


def http_check(
    url: str,
    expected_status: int = 200,
    degraded_after_ms: Optional[int] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TestFunc:
    """
    Create an async test probing `url`.

    Args:
        url: Upstream URL to GET
        expected_status: Status code counted as healthy
        degraded_after_ms: Report degraded when the call is slower than this
        transport: Optional httpx transport (mock transports in tests)
    """

    async def check(ctx: CheckContext) -> TestOutcome:
        timeout = ctx.remaining()
        if timeout <= 0:
            return Status.UNAVAILABLE, f"No time left to probe {url}"

        start = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
                response = await client.get(url)
        except httpx.TimeoutException:
            return Status.UNAVAILABLE, f"Upstream timed out: {url}"
        except httpx.ConnectError as e:
            return Status.UNAVAILABLE, f"Cannot connect to upstream: {e}"
        except httpx.HTTPError as e:
            logger.warning(f"Upstream probe failed for {url}: {e}")
            return Status.UNAVAILABLE, f"Upstream request failed: {e}"

        elapsed_ms = int((time.monotonic() - start) * 1000)

        if response.status_code != expected_status:
            return (
                Status.UNAVAILABLE,
                f"Upstream returned status {response.status_code} (expected {expected_status})",
            )

        if degraded_after_ms is not None and elapsed_ms > degraded_after_ms:
            return (
                Status.DEGRADED,
                f"Upstream slow: {elapsed_ms}ms (threshold {degraded_after_ms}ms)",
            )

        return Status.AVAILABLE, None

    check.__name__ = f"http_check[{url}]"
    return check


__all__ = [
    "http_check",
]
