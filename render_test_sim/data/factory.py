"""Preset-driven test-suite factory.

Presets are loaded from ``config/constants.yaml`` into :class:`SuitePreset`
models. A suite uses one generator for all of its test cases so ids stay unique
across the whole suite.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from ..core.constants import (
    DEFAULT_COMPLEXITY,
    DEFAULT_SUITE_PRESET,
    DEFAULT_SUITE_TEST_COUNT,
    SUITE_PRESETS,
)
from ..core.types import SuiteRecord
from ..utils.exceptions import ConfigurationError, ValidationError
from .generator import SceneDataGenerator

logger = logging.getLogger(__name__)

__all__ = ["SuitePreset", "TestDataFactory", "load_default_presets"]


class SuitePreset(BaseModel):
    """Named generation recipe for a test suite.

    ``object_count`` and ``light_count`` fix the size of every generated scene;
    left unset, the counts are drawn from the ``scene_complexity`` ranges.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    seed: int = Field(ge=0)
    scene_complexity: Literal["simple", "medium", "complex"] = DEFAULT_COMPLEXITY
    object_count: Optional[int] = Field(default=None, ge=0)
    light_count: Optional[int] = Field(default=None, ge=0)
    performance_types: List[str] = Field(default_factory=list)
    error_types: List[str] = Field(default_factory=list)

    @property
    def generates_performance_data(self) -> bool:
        return bool(self.performance_types)

    @property
    def generates_errors(self) -> bool:
        return bool(self.error_types)


def _to_preset(name: str, config: Union[SuitePreset, Mapping[str, Any]]) -> SuitePreset:
    if isinstance(config, SuitePreset):
        return config
    try:
        return SuitePreset.model_validate(dict(config))
    except PydanticValidationError as exc:
        raise ConfigurationError(
            f"Invalid preset '{name}': {exc.error_count()} field error(s)",
            config_parameter=name,
            parameter_value=dict(config),
        ) from exc


def load_default_presets() -> Dict[str, SuitePreset]:
    return {name: _to_preset(name, cfg) for name, cfg in SUITE_PRESETS.items()}


class TestDataFactory:
    """Registry of presets plus the generators created from them.

    Example:
        >>> factory = TestDataFactory()
        >>> suite = factory.generate_test_suite("minimal", test_count=2)
        >>> [t["name"] for t in suite["tests"]]
        ['minimal-test-1', 'minimal-test-2']
    """

    __test__ = False

    def __init__(self, presets: Optional[Mapping[str, Any]] = None):
        self.presets: Dict[str, SuitePreset] = load_default_presets()
        for name, config in (presets or {}).items():
            self.add_preset(name, config)
        self.generators: Dict[str, SceneDataGenerator] = {}

    def add_preset(self, name: str, config: Union[SuitePreset, Mapping[str, Any]]) -> SuitePreset:
        if not name or not isinstance(name, str):
            raise ValidationError(
                "Preset name must be a non-empty string",
                parameter_name="name",
                parameter_value=name,
            )
        preset = _to_preset(name, config)
        self.presets[name] = preset
        logger.debug("Registered preset %s (seed=%d)", name, preset.seed)
        return preset

    def get_available_presets(self) -> List[str]:
        return list(self.presets.keys())

    def get_preset(self, name: str) -> SuitePreset:
        try:
            return self.presets[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown preset '{name}'",
                config_parameter="preset",
                parameter_value=name,
                valid_options=self.get_available_presets(),
            ) from None

    def create_generator(
        self, preset_name: str = DEFAULT_SUITE_PRESET, custom_seed: Optional[int] = None
    ) -> SceneDataGenerator:
        """Create and remember a generator seeded from ``preset_name``.

        ``custom_seed`` overrides the preset seed, including an explicit ``0``.
        """
        preset = self.get_preset(preset_name)
        seed = preset.seed if custom_seed is None else custom_seed
        generator = SceneDataGenerator(seed)
        self.generators[f"{preset_name}-{seed}"] = generator
        return generator

    def generate_test_suite(
        self,
        preset_name: str = DEFAULT_SUITE_PRESET,
        test_count: int = DEFAULT_SUITE_TEST_COUNT,
    ) -> SuiteRecord:
        if test_count < 0:
            raise ValidationError(
                "test_count must be non-negative",
                parameter_name="test_count",
                parameter_value=test_count,
            )
        preset = self.get_preset(preset_name)
        generator = self.create_generator(preset_name)

        suite: Dict[str, Any] = {
            "id": generator.generate_unique_id("test-suite"),
            "name": preset_name,
            "config": generator.generate_test_suite_config(preset_name),
            "tests": [],
        }

        for index in range(test_count):
            case: Dict[str, Any] = {
                "id": generator.generate_unique_id("test"),
                "name": f"{preset_name}-test-{index + 1}",
                "scene": generator.generate_scene_data(
                    preset.scene_complexity,
                    object_count=preset.object_count,
                    light_count=preset.light_count,
                ),
                "data": {},
            }
            if preset.generates_performance_data:
                case["data"]["performance"] = [
                    generator.generate_performance_test_data(kind)
                    for kind in preset.performance_types
                ]
            if preset.generates_errors:
                case["data"]["errors"] = [
                    generator.generate_error_test_data(kind)
                    for kind in preset.error_types
                ]
            suite["tests"].append(case)

        logger.info(
            "Generated suite %s from preset %s with %d tests",
            suite["id"],
            preset_name,
            test_count,
        )
        return suite  # type: ignore[return-value]

    def cleanup_generators(self) -> None:
        self.generators.clear()
