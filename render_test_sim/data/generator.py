"""Synthetic scene-data generator.

Every ``generate_*`` method allocates an id from the shared prefix counters and
then draws its randomized fields from one :class:`SeededGenerator` in a fixed
order per variant. That order is part of the reproducibility contract: the same
seed and the same sequence of calls always yields the same records. Composite
records (meshes, scenes, suite configs) call their sub-generators in document
order.

Unknown variant names produce the base record only, mirroring how fixtures for
an unsupported variant stay usable as generic entities.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Any, Dict, List, Optional, Union

import numpy as np

from ..core.constants import (
    COMPLEXITY_RANGES,
    DEFAULT_COMPLEXITY,
    DEFAULT_SEED,
    DEVICE_SCALE_FACTORS,
    KNOWN_WEBGL_EXTENSIONS,
    MAX_COLOR_HEX,
    PLACEHOLDER_PNG_DATA_URI,
    TEXTURE_SIZE_EXPONENT_RANGE,
    TWO_PI,
    VIEWPORT_HEIGHTS,
    VIEWPORT_WIDTHS,
)
from ..core.enums import (
    SCENE_GEOMETRY_TYPES,
    SCENE_LIGHT_TYPES,
    SCENE_MATERIAL_TYPES,
    CameraType,
    Complexity,
    ErrorScenarioType,
    GeometryType,
    LightType,
    MaterialType,
    PerformanceTestType,
    TextureType,
)
from ..core.types import (
    CameraRecord,
    Color,
    ErrorFixture,
    GeometryRecord,
    LightRecord,
    MaterialRecord,
    MeshRecord,
    PerformanceFixture,
    SceneRecord,
    SuiteConfig,
    TextureFixture,
    Vector3,
)
from ..utils.seeding import GeneratorState, SeededGenerator

logger = logging.getLogger(__name__)

Variant = Union[str, Any]

TEXTURE_FORMATS = ("RGB", "RGBA", "Luminance", "LuminanceAlpha")
TEXTURE_WRAP_MODES = ("Repeat", "ClampToEdge", "MirroredRepeat")
TEXTURE_MAG_FILTERS = ("Nearest", "Linear")
TEXTURE_MIN_FILTERS = ("Nearest", "Linear", "NearestMipmapNearest", "LinearMipmapLinear")
ANIMATION_EASINGS = ("linear", "ease-in", "ease-out", "ease-in-out")
WEBGL_ERROR_CODES = ("INVALID_OPERATION", "OUT_OF_MEMORY", "INVALID_VALUE")
SHADER_STAGES = ("vertex", "fragment")
CUBE_FACE_COUNT = 6


def _variant_name(variant: Variant) -> str:
    return str(getattr(variant, "value", variant))


class SceneDataGenerator:
    """Produces reproducible scene descriptions and auxiliary test fixtures.

    Args:
        seed: Seed for the wrapped :class:`SeededGenerator`.

    Example:
        >>> gen = SceneDataGenerator(seed=7)
        >>> scene = gen.generate_scene_data("simple")
        >>> 1 <= len(scene["objects"]) <= 3
        True
    """

    def __init__(self, seed: int = DEFAULT_SEED):
        self.rng = SeededGenerator(seed)

    def __repr__(self) -> str:
        return f"SceneDataGenerator(seed={self.seed})"

    # Delegation to the seeded source ------------------------------------

    @property
    def seed(self) -> int:
        return self.rng.seed

    @property
    def counters(self) -> Dict[str, int]:
        return self.rng.counters

    def random(self) -> float:
        return self.rng.random()

    def random_int(self, min_value: int = 0, max_value: int = 100) -> int:
        return self.rng.random_int(min_value, max_value)

    def random_float(self, min_value: float = 0.0, max_value: float = 1.0) -> float:
        return self.rng.random_float(min_value, max_value)

    def generate_unique_id(self, prefix: str = "test") -> str:
        return self.rng.generate_unique_id(prefix)

    def reset_seed(self) -> None:
        self.rng.reset_seed()

    def reset_counters(self) -> None:
        self.rng.reset_counters()

    def save_state(self) -> GeneratorState:
        return self.rng.save_state()

    def restore_state(self, state: GeneratorState) -> None:
        self.rng.restore_state(state)

    # Primitive records ---------------------------------------------------

    def generate_vector3(self, min_range: float = -10, max_range: float = 10) -> Vector3:
        return {
            "x": self.rng.random_float(min_range, max_range),
            "y": self.rng.random_float(min_range, max_range),
            "z": self.rng.random_float(min_range, max_range),
        }

    def generate_color(self) -> Color:
        return {
            "r": self.rng.random(),
            "g": self.rng.random(),
            "b": self.rng.random(),
            "hex": math.floor(self.rng.random() * MAX_COLOR_HEX),
        }

    # Scene entities -----------------------------------------------------

    def generate_material_data(self, material_type: Variant = MaterialType.BASIC) -> MaterialRecord:
        variant = _variant_name(material_type)
        record: Dict[str, Any] = {
            "id": self.rng.generate_unique_id("material"),
            "type": variant,
            "color": self.generate_color()["hex"],
            "transparent": self.rng.random_bool(),
            "opacity": self.rng.random_float(0.1, 1.0),
        }

        if variant == MaterialType.STANDARD:
            record["metalness"] = self.rng.random()
            record["roughness"] = self.rng.random()
            record["emissive"] = self.generate_color()["hex"]
        elif variant == MaterialType.PHYSICAL:
            record["metalness"] = self.rng.random()
            record["roughness"] = self.rng.random()
            record["clearcoat"] = self.rng.random()
            record["clearcoat_roughness"] = self.rng.random()
        elif variant == MaterialType.LAMBERT:
            record["emissive"] = self.generate_color()["hex"]
        return record  # type: ignore[return-value]

    def generate_geometry_data(self, geometry_type: Variant = GeometryType.BOX) -> GeometryRecord:
        variant = _variant_name(geometry_type)
        record: Dict[str, Any] = {
            "id": self.rng.generate_unique_id("geometry"),
            "type": variant,
        }
        rng = self.rng

        if variant == GeometryType.BOX:
            record["width"] = rng.random_float(0.5, 5.0)
            record["height"] = rng.random_float(0.5, 5.0)
            record["depth"] = rng.random_float(0.5, 5.0)
            record["width_segments"] = rng.random_int(1, 10)
            record["height_segments"] = rng.random_int(1, 10)
            record["depth_segments"] = rng.random_int(1, 10)
        elif variant == GeometryType.SPHERE:
            record["radius"] = rng.random_float(0.5, 3.0)
            record["width_segments"] = rng.random_int(8, 32)
            record["height_segments"] = rng.random_int(6, 16)
            record["phi_start"] = 0.0
            record["phi_length"] = TWO_PI
            record["theta_start"] = 0.0
            record["theta_length"] = math.pi
        elif variant == GeometryType.PLANE:
            record["width"] = rng.random_float(1.0, 10.0)
            record["height"] = rng.random_float(1.0, 10.0)
            record["width_segments"] = rng.random_int(1, 20)
            record["height_segments"] = rng.random_int(1, 20)
        elif variant == GeometryType.CYLINDER:
            record["radius_top"] = rng.random_float(0.5, 2.0)
            record["radius_bottom"] = rng.random_float(0.5, 2.0)
            record["height"] = rng.random_float(1.0, 5.0)
            record["radial_segments"] = rng.random_int(8, 32)
            record["height_segments"] = rng.random_int(1, 10)
        return record  # type: ignore[return-value]

    def generate_light_data(self, light_type: Variant = LightType.DIRECTIONAL) -> LightRecord:
        variant = _variant_name(light_type)
        rng = self.rng
        record: Dict[str, Any] = {
            "id": rng.generate_unique_id("light"),
            "type": variant,
            "color": self.generate_color()["hex"],
            "intensity": rng.random_float(0.1, 2.0),
            "position": self.generate_vector3(-20, 20),
            "cast_shadow": rng.random_bool(),
        }

        if variant == LightType.POINT:
            record["distance"] = rng.random_float(10, 100)
            record["decay"] = rng.random_float(1, 3)
        elif variant == LightType.SPOT:
            record["distance"] = rng.random_float(10, 100)
            record["angle"] = rng.random_float(0.1, math.pi / 3)
            record["penumbra"] = rng.random_float(0, 1)
            record["decay"] = rng.random_float(1, 3)
            record["target"] = self.generate_vector3(-5, 5)
        elif variant == LightType.HEMISPHERE:
            record["ground_color"] = self.generate_color()["hex"]
            # hemisphere lights are dimmer; the base draw is replaced
            record["intensity"] = rng.random_float(0.1, 1.0)
        return record  # type: ignore[return-value]

    def generate_camera_data(self, camera_type: Variant = CameraType.PERSPECTIVE) -> CameraRecord:
        variant = _variant_name(camera_type)
        rng = self.rng
        record: Dict[str, Any] = {
            "id": rng.generate_unique_id("camera"),
            "type": variant,
            "position": self.generate_vector3(-20, 20),
            "target": self.generate_vector3(-5, 5),
        }

        if variant == CameraType.PERSPECTIVE:
            record["fov"] = rng.random_float(30, 120)
            record["aspect"] = rng.random_float(0.5, 2.0)
            record["near"] = rng.random_float(0.01, 1.0)
            record["far"] = rng.random_float(100, 2000)
        elif variant == CameraType.ORTHOGRAPHIC:
            record["left"] = rng.random_float(-10, -1)
            record["right"] = rng.random_float(1, 10)
            record["top"] = rng.random_float(1, 10)
            record["bottom"] = rng.random_float(-10, -1)
            record["near"] = rng.random_float(0.01, 1.0)
            record["far"] = rng.random_float(100, 2000)
        return record  # type: ignore[return-value]

    def generate_mesh_data(
        self,
        geometry_type: Variant = GeometryType.BOX,
        material_type: Variant = MaterialType.BASIC,
        include_transform: bool = True,
    ) -> MeshRecord:
        """Mesh with embedded geometry and material, then an optional transform."""
        mesh: Dict[str, Any] = {
            "id": self.rng.generate_unique_id("mesh"),
            "geometry": self.generate_geometry_data(geometry_type),
            "material": self.generate_material_data(material_type),
        }
        if include_transform:
            mesh["position"] = self.generate_vector3(-10, 10)
            mesh["rotation"] = self.generate_vector3(0, TWO_PI)
            mesh["scale"] = self.generate_vector3(0.5, 2.0)
        return mesh  # type: ignore[return-value]

    def generate_scene_data(
        self,
        complexity: Optional[Variant] = None,
        object_count: Optional[int] = None,
        light_count: Optional[int] = None,
    ) -> SceneRecord:
        """Generate a full scene description.

        Args:
            complexity: ``simple``, ``medium`` or ``complex``; anything else
                (including ``None``) uses ``medium``.
            object_count: Fixed number of meshes instead of a draw from the
                complexity range.
            light_count: Fixed number of lights instead of a draw from the
                complexity range.

        Returns:
            SceneRecord with ``objects``, ``lights`` and ``cameras`` lists. Counts
            not fixed by the caller fall inside the complexity's ranges in
            ``COMPLEXITY_RANGES``.
        """
        rng = self.rng
        level = _variant_name(complexity) if complexity is not None else DEFAULT_COMPLEXITY
        if level not in COMPLEXITY_RANGES:
            logger.debug("Unknown complexity %r, using %s", complexity, DEFAULT_COMPLEXITY)
            level = Complexity.MEDIUM.value

        scene: Dict[str, Any] = {
            "id": rng.generate_unique_id("scene"),
            "background": self.generate_color()["hex"],
            "fog": {
                "type": "linear" if rng.random_bool() else "exponential",
                "color": self.generate_color()["hex"],
                "near": rng.random_float(1, 50),
                "far": rng.random_float(100, 1000),
                "density": rng.random_float(0.001, 0.01),
            },
            "objects": [],
            "lights": [],
            "cameras": [],
        }

        object_range = COMPLEXITY_RANGES[level]["objects"]
        light_range = COMPLEXITY_RANGES[level]["lights"]
        if object_count is None:
            object_count = rng.random_int(*object_range)
        if light_count is None:
            light_count = rng.random_int(*light_range)

        for _ in range(object_count):
            geometry_type = rng.choice(SCENE_GEOMETRY_TYPES)
            material_type = rng.choice(SCENE_MATERIAL_TYPES)
            scene["objects"].append(
                self.generate_mesh_data(geometry_type=geometry_type, material_type=material_type)
            )

        for _ in range(light_count):
            scene["lights"].append(self.generate_light_data(rng.choice(SCENE_LIGHT_TYPES)))

        scene["cameras"].append(self.generate_camera_data(CameraType.PERSPECTIVE))
        if rng.random_bool(0.7):
            scene["cameras"].append(self.generate_camera_data(CameraType.ORTHOGRAPHIC))

        logger.debug(
            "Generated %s scene %s with %d objects and %d lights",
            level,
            scene["id"],
            object_count,
            light_count,
        )
        return scene  # type: ignore[return-value]

    # Auxiliary fixtures ---------------------------------------------------

    def generate_performance_test_data(
        self, test_type: Variant = PerformanceTestType.RENDER
    ) -> PerformanceFixture:
        """Performance budget fixture; ``timestamp`` is the only wall-clock field."""
        variant = _variant_name(test_type)
        rng = self.rng
        record: Dict[str, Any] = {
            "id": rng.generate_unique_id("perf-test"),
            "type": variant,
            "timestamp": time.time(),
            "expected_duration": rng.random_int(100, 5000),
            "memory_budget": rng.random_int(50, 500),
        }

        if variant == PerformanceTestType.RENDER:
            record["triangle_count"] = rng.random_int(1000, 100000)
            record["draw_calls"] = rng.random_int(10, 500)
            record["texture_memory"] = rng.random_int(10, 200)
            record["expected_fps"] = rng.random_int(30, 120)
        elif variant == PerformanceTestType.LOAD:
            record["file_size"] = rng.random_int(1, 100)
            record["asset_count"] = rng.random_int(5, 100)
            record["expected_load_time"] = rng.random_int(500, 10000)
            record["compression_ratio"] = rng.random_float(0.1, 0.8)
        elif variant == PerformanceTestType.ANIMATION:
            record["frame_count"] = rng.random_int(60, 1800)
            record["object_count"] = rng.random_int(10, 200)
            record["keyframe_count"] = rng.random_int(5, 50)
            record["easing"] = rng.choice(ANIMATION_EASINGS)
        elif variant == PerformanceTestType.PHYSICS:
            record["body_count"] = rng.random_int(10, 1000)
            record["constraint_count"] = rng.random_int(5, 500)
            record["simulation_steps"] = rng.random_int(1, 10)
            record["world_size"] = rng.random_float(10, 1000)
        return record  # type: ignore[return-value]

    def generate_texture_data(self, texture_type: Variant = TextureType.IMAGE) -> TextureFixture:
        variant = _variant_name(texture_type)
        rng = self.rng
        low, high = TEXTURE_SIZE_EXPONENT_RANGE
        record: Dict[str, Any] = {
            "id": rng.generate_unique_id("texture"),
            "type": variant,
            "width": 2 ** rng.random_int(low, high),
            "height": 2 ** rng.random_int(low, high),
            "format": rng.choice(TEXTURE_FORMATS),
            "wrap_s": rng.choice(TEXTURE_WRAP_MODES),
            "wrap_t": rng.choice(TEXTURE_WRAP_MODES),
            "mag_filter": rng.choice(TEXTURE_MAG_FILTERS),
            "min_filter": rng.choice(TEXTURE_MIN_FILTERS),
        }

        if variant == TextureType.IMAGE:
            record["src"] = PLACEHOLDER_PNG_DATA_URI
            record["flip_y"] = rng.random_bool()
            record["premultiply_alpha"] = rng.random_bool()
        elif variant == TextureType.CANVAS:
            record["canvas"] = None
            record["needs_update"] = True
        elif variant == TextureType.DATA:
            # opaque white RGBA texel buffer
            record["data"] = np.full(
                record["width"] * record["height"] * 4, 255, dtype=np.uint8
            )
            record["needs_update"] = True
        elif variant == TextureType.CUBE:
            record["images"] = [
                {
                    "src": PLACEHOLDER_PNG_DATA_URI,
                    "width": record["width"],
                    "height": record["height"],
                }
                for _ in range(CUBE_FACE_COUNT)
            ]
        return record  # type: ignore[return-value]

    def generate_error_test_data(
        self, error_type: Variant = ErrorScenarioType.WEBGL
    ) -> ErrorFixture:
        variant = _variant_name(error_type)
        rng = self.rng
        record: Dict[str, Any] = {
            "id": rng.generate_unique_id("error-test"),
            "type": variant,
            "should_fail": True,
            "expected_error": None,
        }

        if variant == ErrorScenarioType.WEBGL:
            record["expected_error"] = rng.choice(WEBGL_ERROR_CODES)
            record["context_lost"] = rng.random_bool(0.7)
            record["extension_missing"] = rng.random_bool(0.8)
        elif variant == ErrorScenarioType.SHADER:
            record["expected_error"] = "COMPILE_ERROR"
            record["shader_type"] = rng.choice(SHADER_STAGES)
            record["syntax_error"] = rng.random_bool(0.5)
            record["link_error"] = rng.random_bool(0.3)
        elif variant == ErrorScenarioType.TEXTURE:
            record["expected_error"] = "TEXTURE_SIZE_ERROR"
            record["oversized"] = rng.random_bool(0.5)
            record["invalid_format"] = rng.random_bool(0.6)
            record["corrupted"] = rng.random_bool(0.4)
        elif variant == ErrorScenarioType.MEMORY:
            record["expected_error"] = "OUT_OF_MEMORY"
            record["alloc_size"] = rng.random_int(100, 2000)
            record["fragmented_memory"] = rng.random_bool(0.5)
        return record  # type: ignore[return-value]

    def generate_webgl_extensions(self) -> List[str]:
        """Draw a de-duplicated subset of the known extension names."""
        rng = self.rng
        count = rng.random_int(3, len(KNOWN_WEBGL_EXTENSIONS))
        selected: List[str] = []
        for _ in range(count):
            name = rng.choice(KNOWN_WEBGL_EXTENSIONS)
            if name not in selected:
                selected.append(name)
        return selected

    def generate_test_suite_config(self, suite_name: str = "default") -> SuiteConfig:
        rng = self.rng
        config: Dict[str, Any] = {
            "id": rng.generate_unique_id("test-suite"),
            "name": suite_name,
            "timeout": rng.random_int(5000, 30000),
            "retries": rng.random_int(0, 3),
            "parallel": rng.random_bool(0.5),
            "headless": rng.random_bool(0.3),
            "viewport": {
                "width": rng.choice(VIEWPORT_WIDTHS),
                "height": rng.choice(VIEWPORT_HEIGHTS),
            },
            "device_scale_factor": rng.choice(DEVICE_SCALE_FACTORS),
            "environment": {
                "webgl_version": rng.random_int(1, 2),
                "extensions": self.generate_webgl_extensions(),
                "max_texture_size": 2 ** rng.random_int(10, 14),
                "max_renderbuffer_size": 2 ** rng.random_int(10, 14),
            },
            "performance": {
                "memory_limit": rng.random_int(100, 1000),
                "time_limit": rng.random_int(10, 300),
                "fps_threshold": rng.random_int(30, 60),
            },
        }
        return config  # type: ignore[return-value]

    def validate_dataset(self, dataset: Any) -> List[str]:
        """Shortcut for :func:`render_test_sim.data.validation.validate_dataset`."""
        from .validation import validate_dataset

        return validate_dataset(dataset)


__all__ = [
    "SceneDataGenerator",
    "TEXTURE_FORMATS",
    "TEXTURE_WRAP_MODES",
    "TEXTURE_MAG_FILTERS",
    "TEXTURE_MIN_FILTERS",
    "ANIMATION_EASINGS",
    "WEBGL_ERROR_CODES",
]
