# ============================================================================
# HEALTH CHECK CORE TYPES
# ============================================================================
# STATUS: Core - Status, result types and errors
# PURPOSE: Types shared by the registry, executor and endpoint
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Core Types

Status Hierarchy (worst wins):
- available: test passed
- degraded: operational with warnings
- unavailable: critical failure (endpoint answers 503)

A test function receives a CheckContext and returns a (Status, error)
tuple. The error may be None, a string or an exception; only its message
ends up in the report.
"""

from datetime import datetime
from enum import Enum
from typing import Awaitable, Callable, Dict, Iterable, Optional, Tuple, Union

from pydantic import BaseModel, Field


# Attached to every test still outstanding when the deadline fires.
TIMEOUT_ERROR = "test took too long"


# ============================================================================
# ERRORS
# ============================================================================

class HealthCheckError(Exception):
    """Base class for hcheck errors."""


class HealthCheckConfigError(HealthCheckError):
    """Wiring mistake that must stop the process before it serves traffic."""


class DuplicateTestError(HealthCheckConfigError):
    """A test with the same name is already registered."""

    def __init__(self, name: str):
        super().__init__(f"Test already registered: {name}")
        self.name = name


class RegistryFrozenError(HealthCheckConfigError):
    """Registration attempted after the endpoint was built."""

    def __init__(self, name: str):
        super().__init__(
            f"Cannot register test '{name}': registry is frozen "
            "(register tests before serving)"
        )
        self.name = name


# ============================================================================
# STATUS
# ============================================================================

class Status(str, Enum):
    """Health status of a single test or of the whole check."""
    AVAILABLE = "available"
    DEGRADED = "degraded"
    UNAVAILABLE = "unavailable"

    @classmethod
    def reduce(cls, statuses: Iterable["Status"]) -> "Status":
        """
        Reduce statuses to one (worst wins).

        Unavailable short-circuits; otherwise any Degraded gives Degraded.
        An empty input is Available.
        """
        status = cls.AVAILABLE
        for s in statuses:
            if s == cls.UNAVAILABLE:
                return cls.UNAVAILABLE
            if s == cls.DEGRADED:
                status = cls.DEGRADED
        return status


# ============================================================================
# TEST FUNCTIONS
# ============================================================================

TestOutcome = Tuple[Status, Optional[Union[str, BaseException]]]

# Either `async def check(ctx)` or a plain `def check(ctx)`; plain functions
# run in a daemon thread of their own.
TestFunc = Callable[..., Union[TestOutcome, Awaitable[TestOutcome]]]


# ============================================================================
# REPORT DOCUMENT
# ============================================================================

class TestResult(BaseModel):
    """Outcome of one test for one request ("Test" in the report)."""
    __test__ = False  # not a pytest class

    name: str
    duration_ms: int = Field(default=0, ge=0)
    status: Status
    error: Optional[str] = None

    @classmethod
    def timed_out(cls, name: str, timeout_ms: int) -> "TestResult":
        """Synthesize the entry for a test that did not report in time."""
        return cls(
            name=name,
            duration_ms=timeout_ms,
            status=Status.UNAVAILABLE,
            error=TIMEOUT_ERROR,
        )


class HealthCheck(BaseModel):
    """The document served by the health endpoint."""
    checked_at: datetime
    duration_ms: int = Field(default=0, ge=0)
    status: Status = Status.AVAILABLE
    tests: Dict[str, TestResult] = Field(default_factory=dict)

    def to_json(self) -> bytes:
        """Serialize for the response body; absent errors are omitted."""
        return self.model_dump_json(exclude_none=True).encode("utf-8")


__all__ = [
    "TIMEOUT_ERROR",
    "HealthCheckError",
    "HealthCheckConfigError",
    "DuplicateTestError",
    "RegistryFrozenError",
    "Status",
    "TestOutcome",
    "TestFunc",
    "TestResult",
    "HealthCheck",
]
