# ============================================================================
# BUNDLED HEALTH TESTS
# ============================================================================
# STATUS: Checks - Ready-made test functions
# PURPOSE: Reusable tests for registries
# CREATED: 18 OCT 2026
# ============================================================================
"""
Bundled Health Tests

- default_check: always available (registered automatically)
- process_check: event loop responsiveness
- http_check: upstream HTTP dependency probe (factory)
"""

from hcheck.checks.basic import default_check, process_check
from hcheck.checks.upstream import http_check

__all__ = [
    "default_check",
    "process_check",
    "http_check",
]
