"""Synthetic scene data: generator, suite factory and dataset validation."""

from .factory import SuitePreset, TestDataFactory, load_default_presets
from .generator import SceneDataGenerator
from .validation import (
    ensure_valid_dataset,
    validate_dataset,
    validate_test_data_integrity,
    validate_test_execution,
)

__all__ = [
    "SceneDataGenerator",
    "SuitePreset",
    "TestDataFactory",
    "load_default_presets",
    "ensure_valid_dataset",
    "validate_dataset",
    "validate_test_data_integrity",
    "validate_test_execution",
]
