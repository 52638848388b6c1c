"""Core constants, enumerations and record shapes for render_test_sim."""

from .constants import (
    DEFAULT_COMPLEXITY,
    DEFAULT_SEED,
    PACKAGE_NAME,
    PACKAGE_VERSION,
)
from .enums import (
    CameraType,
    Complexity,
    DataKind,
    ErrorScenarioType,
    GeometryType,
    LightType,
    MaterialType,
    PerformanceTestType,
    TextureType,
)
from .types import (
    CameraRecord,
    GeometryRecord,
    LightRecord,
    MaterialRecord,
    MeshRecord,
    SceneRecord,
    SuiteConfig,
    IsolationResultRecord,
    SuiteRecord,
)

__all__ = [
    "DEFAULT_COMPLEXITY",
    "DEFAULT_SEED",
    "PACKAGE_NAME",
    "PACKAGE_VERSION",
    "CameraType",
    "Complexity",
    "DataKind",
    "ErrorScenarioType",
    "GeometryType",
    "LightType",
    "MaterialType",
    "PerformanceTestType",
    "TextureType",
    "CameraRecord",
    "GeometryRecord",
    "LightRecord",
    "MaterialRecord",
    "MeshRecord",
    "SceneRecord",
    "SuiteConfig",
    "IsolationResultRecord",
    "SuiteRecord",
]
