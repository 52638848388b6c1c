"""Test isolation coordinator.

A :class:`TestIsolationCoordinator` owns everything one isolated test needs: a
seeded :class:`SceneDataGenerator`, its own :class:`SimulatedWindow`, a
:class:`SimulatedBrowserManager` and a resource/performance tracker pair.
Two coordinators share nothing but the instance registry count.

Lifecycle::

    uninitialized --setup()--> set up --cleanup()--> uninitialized (reusable)
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from ..core.constants import (
    DEFAULT_COMPLEXITY,
    DEFAULT_LIBRARY_VERSION,
    SAMPLING_INTERVAL_MS,
    SEED_MAX_VALUE,
    SEED_MIN_VALUE,
)
from ..core.enums import DataKind
from ..core.types import IsolationResultRecord, SuiteConfig
from ..data.generator import SceneDataGenerator
from ..driver.intents import WindowPropertyRead
from ..driver.manager import BrowserOptions, SimulatedBrowserManager
from ..driver.registry import InstanceRegistry, default_registry
from ..driver.window import SimulatedWindow, install_simulation_globals
from ..logging import log_context
from ..utils.exceptions import (
    AlreadySetupError,
    ConfigurationError,
    NotInitializedError,
    UnknownDataKindError,
    ValidationError,
)
from ..utils.logging import ComponentType, get_component_logger
from ..utils.seeding import get_random_seed
from .html import generate_test_html
from .trackers import PerformanceTracker, ResourceTracker

RESULT_PROPERTY = "testIsolation"

# page-script spellings of the result record fields
_RESULT_KEY_ALIASES = {
    "testName": "test_name",
    "startTime": "start_time",
    "endTime": "end_time",
}


class IsolationOptions(BaseModel):
    """Options of one coordinator; ``seed`` defaults to a fresh random seed."""

    model_config = ConfigDict(extra="forbid")

    seed: int = Field(default_factory=get_random_seed, ge=SEED_MIN_VALUE, le=SEED_MAX_VALUE)
    auto_cleanup: bool = True
    enable_resource_tracking: bool = True
    enable_performance_tracking: bool = False
    performance_interval_ms: float = Field(default=SAMPLING_INTERVAL_MS, gt=0)


def _coerce_options(options: Any) -> IsolationOptions:
    if options is None:
        return IsolationOptions()
    if isinstance(options, IsolationOptions):
        return options
    try:
        return IsolationOptions.model_validate(dict(options))
    except PydanticValidationError as exc:
        raise ConfigurationError(
            f"Invalid isolation options: {exc.error_count()} field error(s)",
            config_parameter="options",
            parameter_value=dict(options),
        ) from exc


def _normalize_result(raw: Any) -> Optional[IsolationResultRecord]:
    if raw is None:
        return None
    record = {_RESULT_KEY_ALIASES.get(key, key): value for key, value in dict(raw).items()}
    for key in ("end_time", "duration", "error"):
        record.setdefault(key, None)
    record.setdefault("success", False)
    return record  # type: ignore[return-value]


class TestIsolationCoordinator:
    """Sets up and tears down one isolated, independently seeded test context.

    Args:
        test_name: Used in logs, the page title and the result record.
        options: :class:`IsolationOptions` or a mapping of its fields.
        registry: Instance registry shared by the driver and trackers.

    Example:
        >>> with TestIsolationCoordinator("cube", {"seed": 7}) as isolation:
        ...     scene = isolation.generate_test_data("scene", "simple")
        ...     len(scene["objects"]) <= 3
        True
    """

    __test__ = False

    def __init__(
        self,
        test_name: str = "default",
        options: Any = None,
        *,
        registry: Optional[InstanceRegistry] = None,
    ):
        self.test_name = test_name
        self.options = _coerce_options(options)
        self.registry = registry if registry is not None else default_registry
        self.data_generator = SceneDataGenerator(self.options.seed)
        self.window = SimulatedWindow()
        self.browser_manager: Optional[SimulatedBrowserManager] = None
        self.resource_tracker = ResourceTracker(self.registry)
        self.performance_tracker = PerformanceTracker(
            self.registry,
            interval_ms=self.options.performance_interval_ms,
            seed=self.options.seed,
        )
        self.suite_config: Optional[SuiteConfig] = None
        self._is_setup = False
        self.logger = get_component_logger(test_name, ComponentType.ISOLATION)

    def __repr__(self) -> str:
        return (
            f"TestIsolationCoordinator(test_name={self.test_name!r}, "
            f"seed={self.seed}, is_setup={self._is_setup})"
        )

    def __enter__(self) -> "TestIsolationCoordinator":
        return self.setup()

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.options.auto_cleanup:
            self.cleanup()

    @property
    def seed(self) -> int:
        return self.options.seed

    @property
    def is_setup(self) -> bool:
        return self._is_setup

    # ------------------------------------------------------------------
    # Lifecycle
    def setup(self) -> "TestIsolationCoordinator":
        if self._is_setup:
            raise AlreadySetupError(
                "TestIsolationCoordinator already setup",
                component_name=f"TestIsolationCoordinator[{self.test_name}]",
            )

        self.suite_config = self.data_generator.generate_test_suite_config(self.test_name)
        viewport = self.suite_config["viewport"]
        install_simulation_globals(
            self.window,
            viewport["width"],
            viewport["height"],
            self.suite_config["device_scale_factor"],
        )

        manager = SimulatedBrowserManager(
            BrowserOptions.from_mapping(viewport), window=self.window, registry=self.registry
        )
        manager.initialize()
        self.browser_manager = manager

        if self.options.enable_resource_tracking:
            self.resource_tracker.start_tracking()
        if self.options.enable_performance_tracking:
            self.performance_tracker.start_tracking()

        self._is_setup = True
        self.logger.info(
            "Isolation setup for %s with seed %d (viewport %dx%d)",
            self.test_name,
            self.seed,
            viewport["width"],
            viewport["height"],
        )
        return self

    def cleanup(self) -> None:
        """Stop trackers, release the driver and reset id counters.

        A no-op unless set up; the coordinator always ends not set up.
        """
        if not self._is_setup:
            return
        try:
            if self.options.enable_performance_tracking:
                self.performance_tracker.stop_tracking()
            if self.options.enable_resource_tracking:
                self.resource_tracker.stop_tracking()
            if self.browser_manager is not None:
                self.browser_manager.cleanup()
                self.browser_manager = None
            self.data_generator.reset_counters()
        finally:
            self._is_setup = False
        self.logger.debug("Isolation cleanup for %s complete", self.test_name)

    def _require_setup(self) -> None:
        if not self._is_setup:
            raise NotInitializedError(
                "TestIsolationCoordinator not setup. Call setup() first.",
                component_name=f"TestIsolationCoordinator[{self.test_name}]",
            )

    # ------------------------------------------------------------------
    # Test page
    def generate_test_html(
        self,
        script: str,
        *,
        title: Optional[str] = None,
        library_version: str = DEFAULT_LIBRARY_VERSION,
        auto_execute: bool = True,
        enable_webgl: bool = True,
    ) -> str:
        self._require_setup()
        return generate_test_html(
            script,
            test_name=self.test_name,
            seed=self.seed,
            title=title,
            library_version=library_version,
            auto_execute=auto_execute,
            enable_webgl=enable_webgl,
        )

    def load_test_page(self, script: str = "function() {}", **html_options: Any) -> str:
        """Render the test page and load it into the driver's page."""
        html = self.generate_test_html(script, **html_options)
        self.browser_manager.page.set_content(html)
        return html

    # ------------------------------------------------------------------
    # Data
    def generate_test_data(self, kind: Any, complexity: Any = DEFAULT_COMPLEXITY) -> Any:
        """Dispatch to the generator method for ``kind``.

        ``complexity`` applies to scenes only.

        Raises:
            UnknownDataKindError: For a kind outside :class:`DataKind`.
        """
        try:
            data_kind = DataKind(kind)
        except ValueError:
            raise UnknownDataKindError(kind, DataKind.values()) from None

        generator = self.data_generator
        dispatch: Dict[DataKind, Callable[[], Any]] = {
            DataKind.SCENE: lambda: generator.generate_scene_data(complexity),
            DataKind.MESH: generator.generate_mesh_data,
            DataKind.MATERIAL: generator.generate_material_data,
            DataKind.GEOMETRY: generator.generate_geometry_data,
            DataKind.LIGHT: generator.generate_light_data,
            DataKind.CAMERA: generator.generate_camera_data,
            DataKind.TEXTURE: generator.generate_texture_data,
            DataKind.PERFORMANCE: generator.generate_performance_test_data,
            DataKind.ERROR: generator.generate_error_test_data,
        }
        return dispatch[data_kind]()

    # ------------------------------------------------------------------
    # Script execution
    def execute_script(self, script: Any, *args: Any) -> Any:
        if self.browser_manager is None or self.browser_manager.page is None:
            raise NotInitializedError(
                "Browser manager not initialized",
                component_name=f"TestIsolationCoordinator[{self.test_name}]",
            )
        return self.browser_manager.page.evaluate(script, *args)

    def run_test_script(self, script: Callable[..., Any], *args: Any) -> IsolationResultRecord:
        """Run ``script`` the way the auto-executing test page would.

        Loads the test page when nothing is loaded yet, records the result
        under ``window.testIsolation`` and returns it. An exception raised by
        the script is captured in the record (``success`` False) rather than
        propagated.
        """
        self._require_setup()
        page = self.browser_manager.page
        if not page.content():
            self.load_test_page()

        start_time = time.perf_counter() * 1000.0
        record: Dict[str, Any] = {
            "test_name": self.test_name,
            "seed": self.seed,
            "start_time": start_time,
            "end_time": None,
            "duration": None,
            "success": False,
            "error": None,
        }
        self.window[RESULT_PROPERTY] = record
        try:
            with log_context(self.test_name, self.seed):
                self.execute_script(script, *args)
        except Exception as exc:
            record["error"] = str(exc)
            record["success"] = False
            self.logger.warning("Test script for %s failed: %s", self.test_name, exc)
        else:
            record["end_time"] = time.perf_counter() * 1000.0
            record["duration"] = record["end_time"] - start_time
            record["success"] = True
        return dict(record)  # type: ignore[return-value]

    def get_test_result(self) -> Optional[IsolationResultRecord]:
        return _normalize_result(self.execute_script(WindowPropertyRead(RESULT_PROPERTY)))

    def get_resource_usage(self) -> Dict[str, Any]:
        return self.resource_tracker.get_usage()

    def get_performance_info(self) -> Dict[str, Any]:
        return self.performance_tracker.get_info()

    def assert_test_state(
        self,
        should_succeed: bool = True,
        max_duration: Optional[float] = None,
        min_duration: Optional[float] = None,
    ) -> IsolationResultRecord:
        """Check the recorded result against the expectations and return it.

        Raises:
            ValidationError: No result was recorded, the run failed while
                ``should_succeed`` is true, or the duration is out of bounds.
        """
        result = self.get_test_result()
        if result is None:
            raise ValidationError(
                "No test result recorded",
                parameter_name=RESULT_PROPERTY,
                violations=["No test result recorded"],
            )

        if should_succeed and not result["success"]:
            message = f"Test failed: {result['error']}"
            raise ValidationError(message, parameter_name="success", violations=[message])

        duration = result["duration"]
        if (max_duration is not None or min_duration is not None) and duration is None:
            message = "Test result has no duration"
            raise ValidationError(message, parameter_name="duration", violations=[message])
        if max_duration is not None and duration > max_duration:
            message = f"Test took too long: {duration}ms > {max_duration}ms"
            raise ValidationError(
                message, parameter_name="max_duration", parameter_value=duration, violations=[message]
            )
        if min_duration is not None and duration < min_duration:
            message = f"Test completed too quickly: {duration}ms < {min_duration}ms"
            raise ValidationError(
                message, parameter_name="min_duration", parameter_value=duration, violations=[message]
            )
        return result


def create_test_isolation(
    test_name: str = "default",
    *,
    registry: Optional[InstanceRegistry] = None,
    **options: Any,
) -> TestIsolationCoordinator:
    """Build a coordinator; keyword options are :class:`IsolationOptions` fields."""
    return TestIsolationCoordinator(test_name, options, registry=registry)


__all__ = [
    "IsolationOptions",
    "TestIsolationCoordinator",
    "create_test_isolation",
    "RESULT_PROPERTY",
]
