"""String enumerations for the synthetic entity variants and dispatch keys."""

from __future__ import annotations

from enum import Enum
from typing import List


class _StrEnum(str, Enum):
    def __str__(self) -> str:
        return self.value

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class Complexity(_StrEnum):
    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"


class MaterialType(_StrEnum):
    BASIC = "basic"
    STANDARD = "standard"
    LAMBERT = "lambert"
    PHYSICAL = "physical"


class GeometryType(_StrEnum):
    BOX = "box"
    SPHERE = "sphere"
    PLANE = "plane"
    CYLINDER = "cylinder"


class LightType(_StrEnum):
    DIRECTIONAL = "directional"
    POINT = "point"
    SPOT = "spot"
    HEMISPHERE = "hemisphere"


class CameraType(_StrEnum):
    PERSPECTIVE = "perspective"
    ORTHOGRAPHIC = "orthographic"


class PerformanceTestType(_StrEnum):
    RENDER = "render"
    LOAD = "load"
    ANIMATION = "animation"
    PHYSICS = "physics"


class TextureType(_StrEnum):
    IMAGE = "image"
    CANVAS = "canvas"
    DATA = "data"
    CUBE = "cube"


class ErrorScenarioType(_StrEnum):
    WEBGL = "webgl"
    SHADER = "shader"
    TEXTURE = "texture"
    MEMORY = "memory"


class DataKind(_StrEnum):
    """Dispatch keys accepted by the isolation coordinator's data generation."""

    SCENE = "scene"
    MESH = "mesh"
    MATERIAL = "material"
    GEOMETRY = "geometry"
    LIGHT = "light"
    CAMERA = "camera"
    TEXTURE = "texture"
    PERFORMANCE = "performance"
    ERROR = "error"


# Iteration order of these tuples is part of the reproducible draw sequence.
SCENE_GEOMETRY_TYPES = (
    GeometryType.BOX,
    GeometryType.SPHERE,
    GeometryType.PLANE,
    GeometryType.CYLINDER,
)
SCENE_MATERIAL_TYPES = (
    MaterialType.BASIC,
    MaterialType.STANDARD,
    MaterialType.LAMBERT,
    MaterialType.PHYSICAL,
)
SCENE_LIGHT_TYPES = (
    LightType.DIRECTIONAL,
    LightType.POINT,
    LightType.SPOT,
    LightType.HEMISPHERE,
)


__all__ = [
    "Complexity",
    "MaterialType",
    "GeometryType",
    "LightType",
    "CameraType",
    "PerformanceTestType",
    "TextureType",
    "ErrorScenarioType",
    "DataKind",
    "SCENE_GEOMETRY_TYPES",
    "SCENE_MATERIAL_TYPES",
    "SCENE_LIGHT_TYPES",
]
