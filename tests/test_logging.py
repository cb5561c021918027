# ============================================================================
# LOGGING TESTS
# ============================================================================
# STATUS: Tests - Structured logging helpers
# PURPOSE: Verify log context propagation and formatters
# CREATED: 18 OCT 2026
# ============================================================================
"""
Logging Tests

Run with:
    pytest tests/test_logging.py -v
"""

import asyncio
import json
import logging

from hcheck.logging import (
    HumanFormatter,
    StructuredFormatter,
    get_current_context,
    get_logger,
    log_context,
)


def _record(message="hello"):
    return logging.LogRecord(
        name="hcheck.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestLogContext:

    def test_nested_context_inherits(self):
        with log_context(request_id="req-1", path="/_hcheck"):
            with log_context(test_name="db"):
                ctx = get_current_context()
                assert ctx.request_id == "req-1"
                assert ctx.test_name == "db"
            assert get_current_context().test_name is None

        assert get_current_context().request_id is None

    def test_tasks_keep_separate_context(self):
        async def in_task(name):
            with log_context(test_name=name):
                await asyncio.sleep(0.01)
                return get_current_context().test_name

        async def run():
            return await asyncio.gather(in_task("a"), in_task("b"))

        assert asyncio.run(run()) == ["a", "b"]


class TestFormatters:

    def test_structured_formatter(self):
        formatter = StructuredFormatter()

        with log_context(request_id="req-9", test_name="cache"):
            line = formatter.format(_record("test slow"))

        data = json.loads(line)
        assert data["level"] == "WARNING"
        assert data["message"] == "test slow"
        assert data["context"] == {"request_id": "req-9", "test_name": "cache"}
        assert data["timestamp"].endswith("Z")

    def test_human_formatter(self):
        with log_context(request_id="req-9", test_name="cache"):
            line = HumanFormatter().format(_record("test slow"))

        assert "[req=req-9, test=cache]" in line
        assert line.endswith("hcheck.test [req=req-9, test=cache]: test slow")

    def test_context_logger_attaches_fields(self, caplog):
        logger = get_logger("hcheck.test")

        with caplog.at_level(logging.INFO, logger="hcheck.test"):
            with log_context(test_name="db"):
                logger.info("ran", extra={"duration_ms": 3})

        record = caplog.records[-1]
        assert record.extra == {"duration_ms": 3, "test_name": "db"}
