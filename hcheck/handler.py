# ============================================================================
# HEALTH CHECK ENDPOINT
# ============================================================================
# STATUS: Core - Request handling for the health endpoint
# PURPOSE: Run the executor per request and answer with the report
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Endpoint

Request flow:
    started -> awaiting-results -> completed | timed-out -> responded

Response Codes:
    200 - available or degraded
    503 - any test unavailable, deadline exceeded, or client gone
    500 - the report could not be serialized

The endpoint is a plain ASGI application so it can sit behind any caller
middleware; handle() is shared with the FastAPI router.
"""

import asyncio
import time
import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import Request
from fastapi.responses import Response

from hcheck.config import HealthCheckSettings
from hcheck.context import CheckContext
from hcheck.core import HealthCheck, Status
from hcheck.executor import HealthCheckExecutor
from hcheck.logging import get_logger, log_context

logger = get_logger(__name__)

JSON_MEDIA_TYPE = "application/json"


def _status_to_http_code(status: Status) -> int:
    """Only unavailable lowers the HTTP status."""
    if status == Status.UNAVAILABLE:
        return 503
    return 200


class HealthCheckEndpoint:
    """ASGI application answering health requests."""

    def __init__(
        self,
        executor: HealthCheckExecutor,
        settings: Optional[HealthCheckSettings] = None,
    ):
        self.executor = executor
        self.settings = settings or executor.settings

    async def __call__(self, scope, receive, send) -> None:
        request = Request(scope, receive)
        response = await self.handle(request)
        await response(scope, receive, send)

    async def handle(self, request: Request) -> Response:
        """Run one full health evaluation for a request."""
        start = time.monotonic()
        report = HealthCheck(checked_at=datetime.now(timezone.utc))

        with log_context(request_id=uuid.uuid4().hex[:12], path=request.url.path):
            ctx = CheckContext(self.settings.timeout_seconds)
            watcher = asyncio.create_task(self._watch_disconnect(request, ctx))
            try:
                outcome = await self.executor.execute(ctx)
            finally:
                watcher.cancel()
                ctx.cancel()

            report.status = outcome.status
            report.tests = outcome.tests
            if outcome.timed_out:
                status_code = 503
                report.status = Status.UNAVAILABLE
            else:
                status_code = _status_to_http_code(report.status)

            return self._respond(report, status_code, start)

    def _respond(self, report: HealthCheck, status_code: int, start: float) -> Response:
        report.duration_ms = int((time.monotonic() - start) * 1000)
        try:
            body = report.to_json()
        except (TypeError, ValueError) as e:
            # pydantic serialization errors are ValueErrors
            logger.error(f"Failed to serialize health report: {e}")
            return Response(status_code=500, media_type=JSON_MEDIA_TYPE)

        logger.debug(
            f"Health check {report.status.value} -> {status_code} ({report.duration_ms}ms)"
        )
        return Response(content=body, status_code=status_code, media_type=JSON_MEDIA_TYPE)

    async def _watch_disconnect(self, request: Request, ctx: CheckContext) -> None:
        """Cancel the context when the client goes away."""
        while True:
            message = await request.receive()
            if message["type"] == "http.disconnect":
                logger.info("Client disconnected; abandoning health check")
                ctx.cancel()
                return


__all__ = [
    "HealthCheckEndpoint",
    "JSON_MEDIA_TYPE",
]
