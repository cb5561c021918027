# ============================================================================
# CONFIGURATION
# ============================================================================
# STATUS: Core - Endpoint configuration
# PURPOSE: Path and timeout defaults with env overrides
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Settings

Process-wide settings, fixed before the endpoint starts serving.

Design:
- Immutable dataclass for defaults
- Environment variable overrides via from_env()
- Validation at construction so bad wiring fails at startup
"""

import os
from dataclasses import dataclass

from hcheck.core import HealthCheckConfigError

DEFAULT_PREFIX = ""
DEFAULT_ENDPOINT = "/_hcheck"
DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class HealthCheckSettings:
    """
    Settings for the health endpoint.

    Attributes:
        prefix: Path prefix placed before the endpoint (e.g. "/api")
        endpoint: Endpoint path, must start with "/"
        timeout_seconds: Deadline for one full health evaluation
    """
    prefix: str = DEFAULT_PREFIX
    endpoint: str = DEFAULT_ENDPOINT
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self):
        if not self.endpoint.startswith("/"):
            raise HealthCheckConfigError(
                f"endpoint must start with '/': {self.endpoint!r}"
            )
        if self.prefix and not self.prefix.startswith("/"):
            raise HealthCheckConfigError(
                f"prefix must be empty or start with '/': {self.prefix!r}"
            )
        if self.timeout_seconds <= 0:
            raise HealthCheckConfigError(
                f"timeout_seconds must be positive: {self.timeout_seconds}"
            )

    @property
    def path(self) -> str:
        """Full request path served by the health endpoint."""
        return self.prefix + self.endpoint

    @property
    def timeout_ms(self) -> int:
        """Timeout in whole milliseconds, as reported for timed-out tests."""
        return int(round(self.timeout_seconds * 1000))

    @classmethod
    def from_env(cls) -> "HealthCheckSettings":
        """Create from environment variables."""
        try:
            return cls(
                prefix=os.getenv("HCHECK_PREFIX", DEFAULT_PREFIX),
                endpoint=os.getenv("HCHECK_ENDPOINT", DEFAULT_ENDPOINT),
                timeout_seconds=float(
                    os.getenv("HCHECK_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
                ),
            )
        except ValueError as e:
            raise HealthCheckConfigError(f"Invalid hcheck environment setting: {e}") from e


def get_settings() -> HealthCheckSettings:
    """Get settings from the environment."""
    return HealthCheckSettings.from_env()


__all__ = [
    "HealthCheckSettings",
    "get_settings",
    "DEFAULT_PREFIX",
    "DEFAULT_ENDPOINT",
    "DEFAULT_TIMEOUT_SECONDS",
]
