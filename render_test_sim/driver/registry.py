"""Registry of live simulated browser managers.

Resource tracking reads the active-instance count from a registry instead of a
module global, so independent test runners can each hold their own. Managers
and trackers fall back to :data:`default_registry` when none is injected.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, List

logger = logging.getLogger(__name__)


class InstanceRegistry:
    """Set of initialized driver instances, keyed by identity."""

    def __init__(self, name: str = "default"):
        self.name = name
        self._instances: List[Any] = []
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"InstanceRegistry(name={self.name!r}, count={self.count()})"

    def __contains__(self, instance: Any) -> bool:
        with self._lock:
            return any(item is instance for item in self._instances)

    def __len__(self) -> int:
        return self.count()

    def add(self, instance: Any) -> None:
        with self._lock:
            if not any(item is instance for item in self._instances):
                self._instances.append(instance)

    def discard(self, instance: Any) -> None:
        with self._lock:
            self._instances = [item for item in self._instances if item is not instance]

    def count(self) -> int:
        with self._lock:
            return len(self._instances)

    def snapshot(self) -> List[Any]:
        with self._lock:
            return list(self._instances)

    def cleanup_all(self) -> int:
        """Call ``cleanup()`` on every registered instance; returns how many were cleaned.

        Instances remove themselves during cleanup; anything left behind is
        dropped so the registry ends empty.
        """
        instances = self.snapshot()
        for instance in instances:
            instance.cleanup()
        with self._lock:
            self._instances.clear()
        if instances:
            logger.debug("Registry %s cleaned up %d instance(s)", self.name, len(instances))
        return len(instances)


default_registry = InstanceRegistry()

__all__ = ["InstanceRegistry", "default_registry"]
