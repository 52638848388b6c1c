"""Context-manager helper for per-test isolation, usable from pytest fixtures.

Example::

    @pytest.fixture
    def isolation(request):
        with isolation_context(request.node.name, seed=42) as coordinator:
            yield coordinator
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional

from ..driver.registry import InstanceRegistry
from .coordinator import TestIsolationCoordinator, create_test_isolation


@contextmanager
def isolation_context(
    test_name: str = "default",
    *,
    registry: Optional[InstanceRegistry] = None,
    **options: Any,
) -> Iterator[TestIsolationCoordinator]:
    """Yield a set-up coordinator and clean it up afterwards, even on failure."""
    coordinator = create_test_isolation(test_name, registry=registry, **options)
    coordinator.setup()
    try:
        yield coordinator
    finally:
        coordinator.cleanup()


__all__ = ["isolation_context"]
