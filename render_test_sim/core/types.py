"""Typed shapes for the synthetic entity records.

Generators return plain dictionaries so fixtures can be serialized, compared and
embedded in larger datasets without conversion. The ``TypedDict`` definitions
below document those shapes for type checkers; variant-specific fields are
marked ``NotRequired``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from typing_extensions import NotRequired, TypedDict


class Vector3(TypedDict):
    x: float
    y: float
    z: float


class Color(TypedDict):
    r: float
    g: float
    b: float
    hex: int


class MaterialRecord(TypedDict):
    id: str
    type: str
    color: int
    transparent: bool
    opacity: float
    metalness: NotRequired[float]
    roughness: NotRequired[float]
    emissive: NotRequired[int]
    clearcoat: NotRequired[float]
    clearcoat_roughness: NotRequired[float]


class GeometryRecord(TypedDict, total=False):
    id: str
    type: str
    width: float
    height: float
    depth: float
    width_segments: int
    height_segments: int
    depth_segments: int
    radius: float
    phi_start: float
    phi_length: float
    theta_start: float
    theta_length: float
    radius_top: float
    radius_bottom: float
    radial_segments: int


class LightRecord(TypedDict):
    id: str
    type: str
    color: int
    intensity: float
    position: Vector3
    cast_shadow: bool
    distance: NotRequired[float]
    decay: NotRequired[float]
    angle: NotRequired[float]
    penumbra: NotRequired[float]
    target: NotRequired[Vector3]
    ground_color: NotRequired[int]


class CameraRecord(TypedDict):
    id: str
    type: str
    position: Vector3
    target: Vector3
    fov: NotRequired[float]
    aspect: NotRequired[float]
    near: NotRequired[float]
    far: NotRequired[float]
    left: NotRequired[float]
    right: NotRequired[float]
    top: NotRequired[float]
    bottom: NotRequired[float]


class MeshRecord(TypedDict):
    id: str
    geometry: GeometryRecord
    material: MaterialRecord
    position: NotRequired[Vector3]
    rotation: NotRequired[Vector3]
    scale: NotRequired[Vector3]


class FogRecord(TypedDict):
    type: str
    color: int
    near: float
    far: float
    density: float


class SceneRecord(TypedDict):
    id: str
    background: int
    fog: FogRecord
    objects: List[MeshRecord]
    lights: List[LightRecord]
    cameras: List[CameraRecord]


class PerformanceFixture(TypedDict, total=False):
    id: str
    type: str
    timestamp: float
    expected_duration: int
    memory_budget: int
    triangle_count: int
    draw_calls: int
    texture_memory: int
    expected_fps: int
    file_size: int
    asset_count: int
    expected_load_time: int
    compression_ratio: float
    frame_count: int
    object_count: int
    keyframe_count: int
    easing: str
    body_count: int
    constraint_count: int
    simulation_steps: int
    world_size: int


class TextureFixture(TypedDict, total=False):
    id: str
    type: str
    width: int
    height: int
    format: str
    wrap_s: str
    wrap_t: str
    mag_filter: str
    min_filter: str
    src: str
    flip_y: bool
    premultiply_alpha: bool
    canvas: Optional[Any]
    needs_update: bool
    data: Any
    images: List[Dict[str, Any]]


class ErrorFixture(TypedDict, total=False):
    id: str
    type: str
    should_fail: bool
    expected_error: Optional[str]
    context_lost: bool
    extension_missing: bool
    shader_type: str
    syntax_error: bool
    link_error: bool
    oversized: bool
    invalid_format: bool
    corrupted: bool
    alloc_size: int
    fragmented_memory: bool


class ViewportConfig(TypedDict):
    width: int
    height: int


class EnvironmentConfig(TypedDict):
    webgl_version: int
    extensions: List[str]
    max_texture_size: int
    max_renderbuffer_size: int


class PerformanceLimits(TypedDict):
    memory_limit: int
    time_limit: int
    fps_threshold: int


class SuiteConfig(TypedDict):
    id: str
    name: str
    timeout: int
    retries: int
    parallel: bool
    headless: bool
    viewport: ViewportConfig
    device_scale_factor: float
    environment: EnvironmentConfig
    performance: PerformanceLimits


class SuiteCaseRecord(TypedDict):
    id: str
    name: str
    scene: SceneRecord
    data: Dict[str, List[Dict[str, Any]]]


class SuiteRecord(TypedDict):
    id: str
    name: str
    config: SuiteConfig
    tests: List[SuiteCaseRecord]


class IsolationResultRecord(TypedDict):
    test_name: str
    seed: int
    start_time: float
    end_time: Optional[float]
    duration: Optional[float]
    success: bool
    error: Optional[str]


__all__ = [
    "Vector3",
    "Color",
    "MaterialRecord",
    "GeometryRecord",
    "LightRecord",
    "CameraRecord",
    "MeshRecord",
    "FogRecord",
    "SceneRecord",
    "PerformanceFixture",
    "TextureFixture",
    "ErrorFixture",
    "ViewportConfig",
    "EnvironmentConfig",
    "PerformanceLimits",
    "SuiteConfig",
    "SuiteCaseRecord",
    "SuiteRecord",
    "IsolationResultRecord",
]
