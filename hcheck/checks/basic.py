# ============================================================================
# BASIC HEALTH TESTS
# ============================================================================
# STATUS: Checks - Built-in tests
# PURPOSE: Always-available default test and process liveness test
# CREATED: 18 OCT 2026
# ============================================================================
"""
Basic Health Tests

- default_check: always available, registered in every registry
- process_check: always available if the process can run it
"""

import os
import platform
import sys

from hcheck.core import Status, TestOutcome
from hcheck.logging import get_logger

logger = get_logger(__name__)


async def default_check(ctx) -> TestOutcome:
    """Always available."""
    return Status.AVAILABLE, None


async def process_check(ctx) -> TestOutcome:
    """
    Process health test.

    Returning at all proves the event loop is responsive.
    """
    logger.debug(
        f"Process check: pid={os.getpid()} "
        f"python={sys.version.split()[0]} platform={platform.platform()}"
    )
    return Status.AVAILABLE, None


__all__ = [
    "default_check",
    "process_check",
]
