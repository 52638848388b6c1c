"""Per-test isolation: coordinator, trackers, HTML template and validators."""

from .coordinator import (
    RESULT_PROPERTY,
    IsolationOptions,
    TestIsolationCoordinator,
    create_test_isolation,
)
from .fixtures import isolation_context
from .html import generate_test_html
from .trackers import PerformanceTracker, ResourceTracker
from .validators import validate_gl_context, validate_renderer, validate_scene

__all__ = [
    "IsolationOptions",
    "TestIsolationCoordinator",
    "create_test_isolation",
    "isolation_context",
    "RESULT_PROPERTY",
    "generate_test_html",
    "ResourceTracker",
    "PerformanceTracker",
    "validate_scene",
    "validate_renderer",
    "validate_gl_context",
]
