# ============================================================================
# HEALTH CHECK EXECUTOR
# ============================================================================
# STATUS: Core - Concurrent test execution and aggregation
# PURPOSE: Fan out all registered tests, fan in under one deadline
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Executor

Executes every registered test with:
- One task per test, all started together (no ordering between tests)
- One shared CheckContext carrying the deadline and cancellation
- A collection loop racing "next result" against "context done"
- 'Worst wins' reduction of the collected statuses

Execution Strategy:
1. Start one runner task per registered test
2. Each runner delivers exactly one TestResult onto a queue sized to the
   registry, so delivery never blocks
3. Wait for whichever comes first: the next result or the context ending
4. If the context ends first, drain what already arrived and synthesize
   an unavailable "test took too long" entry for every missing test; the
   overall status is unavailable no matter what was collected

Tests are never forcibly aborted. A test that ignores the context keeps
running after the deadline (async tests as orphaned tasks, plain tests in
their own daemon thread) until it returns on its own; its late result is
dropped. This leak is accepted: the response is never delayed by it.
"""

import asyncio
import contextvars
import inspect
import threading
import time
from dataclasses import dataclass
from typing import Dict, Optional, Set

from hcheck.config import HealthCheckSettings
from hcheck.context import CheckContext
from hcheck.core import Status, TestFunc, TestResult
from hcheck.logging import get_logger, log_context
from hcheck.registry import HealthCheckRegistry

logger = get_logger(__name__)


@dataclass
class ExecutionOutcome:
    """Result of one full evaluation of the registry."""
    status: Status
    tests: Dict[str, TestResult]
    timed_out: bool = False


class HealthCheckExecutor:
    """
    Runs all tests of a registry concurrently under one deadline.

    One executor serves every request of a mounted endpoint; per-request
    state (queue, tasks, results) lives inside execute().
    """

    def __init__(
        self,
        registry: HealthCheckRegistry,
        settings: Optional[HealthCheckSettings] = None,
    ):
        """
        Initialize executor.

        Args:
            registry: Tests to run (should be frozen before serving)
            settings: Timeout used for synthesized entries (defaults if None)
        """
        self.registry = registry
        self.settings = settings or HealthCheckSettings()
        # Strong references to tests still running after their request ended
        self._abandoned: Set[asyncio.Task] = set()

    @property
    def abandoned_count(self) -> int:
        """Number of tests still running after their request timed out."""
        return len(self._abandoned)

    async def execute(self, ctx: CheckContext) -> ExecutionOutcome:
        """
        Run every registered test and aggregate the results.

        Args:
            ctx: Shared deadline/cancellation for this evaluation

        Returns:
            ExecutionOutcome with one TestResult per registered test
        """
        tests = self.registry.items()
        results_queue: asyncio.Queue = asyncio.Queue(maxsize=len(tests))

        tasks = [
            asyncio.create_task(
                self._run_test(ctx, name, fn, results_queue),
                name=f"hcheck:{name}",
            )
            for name, fn in tests
        ]

        results: Dict[str, TestResult] = {}
        context_done = asyncio.ensure_future(ctx.wait())
        next_result: Optional[asyncio.Future] = None
        timed_out = False
        try:
            while len(results) < len(tests):
                next_result = asyncio.ensure_future(results_queue.get())
                done, _ = await asyncio.wait(
                    {next_result, context_done},
                    return_when=asyncio.FIRST_COMPLETED,
                )
                if next_result in done:
                    result = next_result.result()
                    results[result.name] = result
                    continue

                timed_out = True
                break
        finally:
            if next_result is not None and not next_result.done():
                next_result.cancel()
            context_done.cancel()

        if not timed_out:
            return ExecutionOutcome(
                status=Status.reduce(r.status for r in results.values()),
                tests=results,
            )

        # Results that were queued before the context ended still count
        while not results_queue.empty():
            result = results_queue.get_nowait()
            results[result.name] = result

        timeout_ms = self.settings.timeout_ms
        for name, _ in tests:
            if name not in results:
                results[name] = TestResult.timed_out(name, timeout_ms)

        self._abandon_pending(tasks)
        logger.warning(
            f"Health check ended before all tests reported ({ctx.reason}); "
            f"{sum(1 for t in tasks if not t.done())} test(s) still running"
        )

        return ExecutionOutcome(
            status=Status.UNAVAILABLE,
            tests=results,
            timed_out=True,
        )

    async def _run_test(
        self,
        ctx: CheckContext,
        name: str,
        fn: TestFunc,
        results_queue: asyncio.Queue,
    ) -> None:
        """Run one test and deliver exactly one result."""
        with log_context(test_name=name):
            start = time.monotonic()
            try:
                status, error = await self._invoke(ctx, name, fn)
                status = Status(status)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.exception(f"Health test {name} raised: {e}")
                status, error = Status.UNAVAILABLE, e

            result = TestResult(
                name=name,
                duration_ms=int((time.monotonic() - start) * 1000),
                status=status,
                error=str(error) if error is not None else None,
            )
            logger.debug(
                f"Health test {name}: {result.status.value} ({result.duration_ms}ms)"
            )
            results_queue.put_nowait(result)

    async def _invoke(self, ctx: CheckContext, name: str, fn: TestFunc):
        """Call a test; plain functions get a thread of their own."""
        if inspect.iscoroutinefunction(fn):
            return await fn(ctx)

        outcome = await self._run_in_thread(ctx, name, fn)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return outcome

    def _run_in_thread(
        self,
        ctx: CheckContext,
        name: str,
        fn: TestFunc,
    ) -> asyncio.Future:
        """
        Start a plain test on a new daemon thread.

        Every call gets its own thread, so a stuck plain test never holds up
        another test or a later request. Daemon threads do not block
        interpreter exit, so there is nothing to shut down.

        Returns:
            Future resolved on the event loop with the test's return value
            or exception
        """
        loop = asyncio.get_running_loop()
        future = loop.create_future()
        # Carries the log context (request id, test name) into the thread
        context = contextvars.copy_context()

        def deliver(outcome, error):
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(outcome)

        def target():
            outcome, error = None, None
            try:
                outcome = context.run(fn, ctx)
            except Exception as e:
                error = e
            try:
                loop.call_soon_threadsafe(deliver, outcome, error)
            except RuntimeError:
                # Loop already closed; nobody is waiting for this result
                logger.debug(f"Dropped late result of health test {name}")

        thread = threading.Thread(
            target=target,
            name=f"hcheck-test:{name}",
            daemon=True,
        )
        thread.start()
        return future

    def _abandon_pending(self, tasks) -> None:
        for task in tasks:
            if task.done():
                continue
            self._abandoned.add(task)
            task.add_done_callback(self._abandoned.discard)


__all__ = [
    "HealthCheckExecutor",
    "ExecutionOutcome",
]
