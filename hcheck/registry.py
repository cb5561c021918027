# ============================================================================
# HEALTH CHECK REGISTRY
# ============================================================================
# STATUS: Core - Test registration
# PURPOSE: Name -> test function mapping, frozen before serving
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Registry

Holds the named test functions run on every health request.

Usage:
    registry = HealthCheckRegistry()

    # Manual registration
    registry.register("db", db_check)

    # Decorator registration
    @registry.test("cache")
    async def cache_check(ctx):
        return Status.AVAILABLE, None

    app = new_handler(app, registry=registry)   # freezes the registry

Register before serving: registration happens during startup and the
registry is frozen when the endpoint is built. Reads during request
handling take no lock because nothing writes after freeze().
"""

from typing import Callable, Dict, Iterator, List, Optional, Tuple

from hcheck.checks.basic import default_check
from hcheck.core import DuplicateTestError, RegistryFrozenError, TestFunc
from hcheck.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TEST_NAME = "default"


class HealthCheckRegistry:
    """
    Registry of health test functions.

    A "default" test that always reports available is registered on
    construction, so the endpoint is meaningful with no caller tests.
    There is no removal or replacement.
    """

    def __init__(self):
        self._tests: Dict[str, TestFunc] = {}
        self._frozen = False
        self.register(DEFAULT_TEST_NAME, default_check)

    def register(self, name: str, fn: TestFunc) -> None:
        """
        Register a test function under a unique name.

        Raises:
            DuplicateTestError: If a test with the same name is registered
            RegistryFrozenError: If the registry is already serving
        """
        if self._frozen:
            raise RegistryFrozenError(name)
        if name in self._tests:
            raise DuplicateTestError(name)
        if not callable(fn):
            raise TypeError(f"Test '{name}' is not callable: {fn!r}")

        self._tests[name] = fn
        logger.debug(f"Registered health test: {name}")

    register_test = register

    def test(self, name: Optional[str] = None) -> Callable[[TestFunc], TestFunc]:
        """
        Decorator form of register(); defaults the name to the function name.

        Example:
            @registry.test("db")
            async def db_check(ctx):
                ...
        """
        def decorator(fn: TestFunc) -> TestFunc:
            self.register(name or fn.__name__, fn)
            return fn

        return decorator

    def freeze(self) -> None:
        """End the registration phase."""
        if not self._frozen:
            self._frozen = True
            logger.debug(f"Health registry frozen with {len(self._tests)} tests")

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Optional[TestFunc]:
        return self._tests.get(name)

    def names(self) -> List[str]:
        return list(self._tests)

    def items(self) -> List[Tuple[str, TestFunc]]:
        """Snapshot of (name, fn) pairs."""
        return list(self._tests.items())

    def __len__(self) -> int:
        return len(self._tests)

    def __contains__(self, name: object) -> bool:
        return name in self._tests

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


__all__ = [
    "HealthCheckRegistry",
    "DEFAULT_TEST_NAME",
]
