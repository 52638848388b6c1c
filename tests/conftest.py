"""
Shared fixtures for the render_test_sim test suite.

Every fixture that creates driver instances uses its own InstanceRegistry so tests
never observe each other's active-instance counts, and every fixture cleans up what
it created even when the test fails.
"""

import logging

import pytest

from render_test_sim.data import SceneDataGenerator
from render_test_sim.driver import InstanceRegistry, SimulatedBrowserManager
from render_test_sim.gl import SimulatedCanvas, SimulatedGLContext
from render_test_sim.isolation import TestIsolationCoordinator
from render_test_sim.utils.seeding import SeededGenerator

__all__ = [
    "REPRODUCIBILITY_SEEDS",
    "COMPLEXITY_LEVELS",
]

REPRODUCIBILITY_SEEDS = [0, 1, 42, 12345, 2**32 - 1]
COMPLEXITY_LEVELS = ["simple", "medium", "complex"]


@pytest.fixture(scope="session", autouse=True)
def _guard_logging():
    """Keep logging from printing handler errors during interpreter teardown."""
    logging.raiseExceptions = False
    yield


@pytest.fixture
def registry():
    """Fresh instance registry; anything left registered is cleaned up afterwards."""
    instances = InstanceRegistry(name="test")
    yield instances
    instances.cleanup_all()


@pytest.fixture
def seeded_generator():
    return SeededGenerator(12345)


@pytest.fixture
def scene_generator():
    return SceneDataGenerator(seed=12345)


@pytest.fixture
def gl_context():
    context = SimulatedGLContext(SimulatedCanvas(640, 480))
    yield context
    context.cleanup()


@pytest.fixture
def browser_manager(registry):
    manager = SimulatedBrowserManager({"width": 800, "height": 600}, registry=registry)
    manager.initialize()
    yield manager
    manager.cleanup()


@pytest.fixture
def page(browser_manager):
    return browser_manager.page


@pytest.fixture
def coordinator(registry):
    """Set-up coordinator with a fixed seed and performance tracking off."""
    isolation = TestIsolationCoordinator("fixture-test", {"seed": 42}, registry=registry)
    isolation.setup()
    yield isolation
    isolation.cleanup()
