"""Offline test-isolation engine for rendering-dependent test suites."""

from __future__ import annotations

from typing import Dict, List

from typing_extensions import NotRequired, TypedDict

from .core import (
    DEFAULT_COMPLEXITY,
    DEFAULT_SEED,
    PACKAGE_NAME,
    PACKAGE_VERSION,
    Complexity,
    DataKind,
)
from .core.constants import (
    DEFAULT_TIMEOUT_MS,
    DEFAULT_VIEWPORT_HEIGHT,
    DEFAULT_VIEWPORT_WIDTH,
    LCG_INCREMENT,
    LCG_MODULUS,
    LCG_MULTIPLIER,
    MEMORY_PER_INSTANCE_MB,
    SUITE_PRESETS,
)
from .data import SceneDataGenerator, TestDataFactory, validate_dataset
from .driver import (
    InstanceRegistry,
    SimulatedBrowserManager,
    default_registry,
    reset_global_state,
    wait_for_condition,
)
from .gl import SimulatedCanvas, SimulatedGLContext
from .isolation import (
    IsolationOptions,
    TestIsolationCoordinator,
    create_test_isolation,
    isolation_context,
)
from .utils import RenderTestSimError, SeededGenerator


def get_package_info(
    *,
    include_defaults: bool = True,
    include_presets: bool = True,
    include_registry: bool = False,
) -> Dict[str, object]:
    """Return high-level package metadata for tooling and test reports."""

    info: Dict[str, object] = {
        "package_name": PACKAGE_NAME,
        "package_version": PACKAGE_VERSION,
    }

    if include_defaults:
        info["default_configuration"] = {
            "seed": DEFAULT_SEED,
            "complexity": DEFAULT_COMPLEXITY,
            "viewport": (DEFAULT_VIEWPORT_WIDTH, DEFAULT_VIEWPORT_HEIGHT),
            "timeout_ms": DEFAULT_TIMEOUT_MS,
            "memory_per_instance_mb": MEMORY_PER_INSTANCE_MB,
            "lcg": (LCG_MULTIPLIER, LCG_INCREMENT, LCG_MODULUS),
        }

    if include_presets:
        info["presets"] = sorted(SUITE_PRESETS)

    if include_registry:

        class RegistryDetails(TypedDict):
            name: str
            active_instances: int
            kinds: NotRequired[List[str]]

        details: RegistryDetails = {
            "name": default_registry.name,
            "active_instances": default_registry.count(),
        }
        if details["active_instances"]:
            details["kinds"] = sorted(
                {type(instance).__name__ for instance in default_registry.snapshot()}
            )
        info["registry"] = details

    return info


__all__ = [
    "PACKAGE_NAME",
    "PACKAGE_VERSION",
    "DEFAULT_SEED",
    "Complexity",
    "DataKind",
    "SeededGenerator",
    "SceneDataGenerator",
    "TestDataFactory",
    "validate_dataset",
    "SimulatedCanvas",
    "SimulatedGLContext",
    "InstanceRegistry",
    "default_registry",
    "SimulatedBrowserManager",
    "wait_for_condition",
    "reset_global_state",
    "IsolationOptions",
    "TestIsolationCoordinator",
    "create_test_isolation",
    "isolation_context",
    "RenderTestSimError",
    "get_package_info",
]

__version__ = PACKAGE_VERSION
