"""Core constants used throughout the `render_test_sim` package.

Primitive values live directly in this module, while tunable metadata (package
identifiers, generator constants, tracker costs, synthetic capability values and
suite presets) is loaded from `config/constants.yaml`. A missing or unreadable
file falls back to the in-code defaults below.
"""

from __future__ import annotations

import copy
import math
from pathlib import Path
from typing import Any, Dict

import yaml

CONFIG_PATH = (
    Path(__file__).resolve().parent.parent.parent / "config" / "constants.yaml"
)

_DEFAULT_CONFIG: Dict[str, Any] = {
    "package": {
        "name": "render_test_sim",
        "version": "0.1.0",
    },
    "seeding": {
        "default_seed": 12345,
        "lcg_multiplier": 1664525,
        "lcg_increment": 1013904223,
        "lcg_modulus": 4294967296,
    },
    "driver": {
        "default_width": 1024,
        "default_height": 768,
        "headless": True,
        "default_timeout_ms": 30000,
        "polling_interval_ms": 100,
        "browser_version": "HeadlessChrome/120.0.0.0",
        "user_agent": "Mozilla/5.0 (X11; Linux x86_64) HeadlessChrome/120.0.0.0",
    },
    "tracking": {
        "memory_per_instance_mb": 50,
        "total_memory_mb": 1000,
        "sampling_interval_ms": 100,
        "target_frame_time_ms": 16.67,
    },
    "graphics": {
        "vendor": "WebKit",
        "renderer": "WebKit WebGL",
        "version": "WebGL 1.0",
        "shading_language_version": "WebGL GLSL ES 1.0",
        "unmasked_vendor": "Simulated Vendor",
        "unmasked_renderer": "Simulated Renderer",
        "max_texture_size": 4096,
        "max_renderbuffer_size": 4096,
        "max_vertex_attribs": 16,
        "default_canvas_width": 300,
        "default_canvas_height": 150,
    },
    "presets": {
        "minimal": {
            "seed": 12345,
            "scene_complexity": "simple",
            "object_count": 1,
            "light_count": 1,
        },
        "standard": {
            "seed": 54321,
            "scene_complexity": "medium",
            "object_count": 10,
            "light_count": 3,
        },
        "stress": {
            "seed": 98765,
            "scene_complexity": "complex",
            "object_count": 100,
            "light_count": 10,
        },
        "performance": {
            "seed": 11111,
            "performance_types": ["render", "load", "animation", "physics"],
        },
        "error": {
            "seed": 99999,
            "error_types": ["webgl", "shader", "texture", "memory"],
        },
    },
}


def _load_constants_config() -> Dict[str, Any]:
    if not CONFIG_PATH.exists():
        return copy.deepcopy(_DEFAULT_CONFIG)

    try:
        with CONFIG_PATH.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError):
        return copy.deepcopy(_DEFAULT_CONFIG)

    merged = copy.deepcopy(_DEFAULT_CONFIG)
    for key, value in data.items():
        if isinstance(value, dict):
            merged.setdefault(key, {}).update(value)
        else:
            merged[key] = value
    return merged


_CONFIG = _load_constants_config()


PACKAGE_NAME = _CONFIG["package"].get("name", _DEFAULT_CONFIG["package"]["name"])
PACKAGE_VERSION = _CONFIG["package"].get(
    "version", _DEFAULT_CONFIG["package"]["version"]
)


# Seeded value generator (linear congruential recurrence, frozen once chosen)
DEFAULT_SEED = int(_CONFIG["seeding"]["default_seed"])
LCG_MULTIPLIER = int(_CONFIG["seeding"]["lcg_multiplier"])
LCG_INCREMENT = int(_CONFIG["seeding"]["lcg_increment"])
LCG_MODULUS = int(_CONFIG["seeding"]["lcg_modulus"])
DEFAULT_ID_PREFIX = "test"
SEED_MIN_VALUE = 0
SEED_MAX_VALUE = 2**32 - 1
VALID_SEED_TYPES = [int]


# Synthetic scene data
COMPLEXITY_RANGES: Dict[str, Dict[str, tuple]] = {
    "simple": {"objects": (1, 3), "lights": (1, 2)},
    "medium": {"objects": (5, 15), "lights": (2, 4)},
    "complex": {"objects": (20, 50), "lights": (3, 8)},
}
DEFAULT_COMPLEXITY = "medium"
MAX_COLOR_HEX = 0xFFFFFF
TWO_PI = 2 * math.pi
TEXTURE_SIZE_EXPONENT_RANGE = (4, 10)
PLACEHOLDER_PNG_DATA_URI = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
KNOWN_WEBGL_EXTENSIONS = (
    "WEBGL_debug_renderer_info",
    "OES_texture_float",
    "OES_texture_half_float",
    "WEBGL_lose_context",
    "OES_standard_derivatives",
    "OES_vertex_array_object",
    "WEBGL_depth_texture",
    "EXT_texture_filter_anisotropic",
    "WEBGL_compressed_texture_s3tc",
    "WEBGL_compressed_texture_pvrtc",
)
VIEWPORT_WIDTHS = (800, 1024, 1280, 1920)
VIEWPORT_HEIGHTS = (600, 768, 720, 1080)
DEVICE_SCALE_FACTORS = (1, 1.5, 2)

SUITE_PRESETS: Dict[str, Dict[str, Any]] = _CONFIG["presets"]
DEFAULT_SUITE_PRESET = "standard"
DEFAULT_SUITE_TEST_COUNT = 10


# Simulated automation driver
DEFAULT_VIEWPORT_WIDTH = int(_CONFIG["driver"]["default_width"])
DEFAULT_VIEWPORT_HEIGHT = int(_CONFIG["driver"]["default_height"])
DEFAULT_HEADLESS = bool(_CONFIG["driver"]["headless"])
DEFAULT_TIMEOUT_MS = int(_CONFIG["driver"]["default_timeout_ms"])
DEFAULT_POLLING_INTERVAL_MS = int(_CONFIG["driver"]["polling_interval_ms"])
BROWSER_VERSION = str(_CONFIG["driver"]["browser_version"])
USER_AGENT = str(_CONFIG["driver"]["user_agent"])
DEFAULT_LIBRARY_VERSION = "r128"


# Resource and performance tracking
MEMORY_PER_INSTANCE_MB = float(_CONFIG["tracking"]["memory_per_instance_mb"])
TOTAL_MEMORY_MB = float(_CONFIG["tracking"]["total_memory_mb"])
SAMPLING_INTERVAL_MS = int(_CONFIG["tracking"]["sampling_interval_ms"])
TARGET_FRAME_TIME_MS = float(_CONFIG["tracking"]["target_frame_time_ms"])


# Simulated graphics context capability table values
GL_VENDOR_STRING = str(_CONFIG["graphics"]["vendor"])
GL_RENDERER_STRING = str(_CONFIG["graphics"]["renderer"])
GL_VERSION_STRING = str(_CONFIG["graphics"]["version"])
GL_SHADING_LANGUAGE_VERSION_STRING = str(
    _CONFIG["graphics"]["shading_language_version"]
)
GL_UNMASKED_VENDOR_STRING = str(_CONFIG["graphics"]["unmasked_vendor"])
GL_UNMASKED_RENDERER_STRING = str(_CONFIG["graphics"]["unmasked_renderer"])
GL_MAX_TEXTURE_SIZE = int(_CONFIG["graphics"]["max_texture_size"])
GL_MAX_RENDERBUFFER_SIZE = int(_CONFIG["graphics"]["max_renderbuffer_size"])
GL_MAX_VERTEX_ATTRIBS = int(_CONFIG["graphics"]["max_vertex_attribs"])
DEFAULT_CANVAS_WIDTH = int(_CONFIG["graphics"]["default_canvas_width"])
DEFAULT_CANVAS_HEIGHT = int(_CONFIG["graphics"]["default_canvas_height"])


# Window properties reset between tests
TEST_GLOBAL_PROPERTIES = (
    "cubeRendered", "sceneReady", "setupComplete", "animationComplete",
    "finalRotation", "webglSupported", "webglError", "threeLoaded",
    "threeVersion", "debugInfo", "testResults", "sceneInfo",
    "animationResult", "shaderTest", "modelLoaded", "performanceResults",
    "heavyProcessComplete", "webglInfo", "customSceneLoaded",
    "legacyTestComplete", "sceneObjects", "sceneAnalysis",
    "userScript", "scene", "camera", "renderer", "testProperty",
    "testCondition", "testComplete", "integrationTestComplete",
    "multiComponentTest", "testScene", "sceneBuilt", "testId",
    "uniqueValue", "testExecuted", "integrationTest", "testIsolation",
)


__all__ = [
    "CONFIG_PATH",
    "PACKAGE_NAME",
    "PACKAGE_VERSION",
    "DEFAULT_SEED",
    "LCG_MULTIPLIER",
    "LCG_INCREMENT",
    "LCG_MODULUS",
    "DEFAULT_ID_PREFIX",
    "SEED_MIN_VALUE",
    "SEED_MAX_VALUE",
    "VALID_SEED_TYPES",
    "COMPLEXITY_RANGES",
    "DEFAULT_COMPLEXITY",
    "MAX_COLOR_HEX",
    "TWO_PI",
    "TEXTURE_SIZE_EXPONENT_RANGE",
    "PLACEHOLDER_PNG_DATA_URI",
    "KNOWN_WEBGL_EXTENSIONS",
    "VIEWPORT_WIDTHS",
    "VIEWPORT_HEIGHTS",
    "DEVICE_SCALE_FACTORS",
    "SUITE_PRESETS",
    "DEFAULT_SUITE_PRESET",
    "DEFAULT_SUITE_TEST_COUNT",
    "DEFAULT_VIEWPORT_WIDTH",
    "DEFAULT_VIEWPORT_HEIGHT",
    "DEFAULT_HEADLESS",
    "DEFAULT_TIMEOUT_MS",
    "DEFAULT_POLLING_INTERVAL_MS",
    "BROWSER_VERSION",
    "USER_AGENT",
    "DEFAULT_LIBRARY_VERSION",
    "MEMORY_PER_INSTANCE_MB",
    "TOTAL_MEMORY_MB",
    "SAMPLING_INTERVAL_MS",
    "TARGET_FRAME_TIME_MS",
    "GL_VENDOR_STRING",
    "GL_RENDERER_STRING",
    "GL_VERSION_STRING",
    "GL_SHADING_LANGUAGE_VERSION_STRING",
    "GL_UNMASKED_VENDOR_STRING",
    "GL_UNMASKED_RENDERER_STRING",
    "GL_MAX_TEXTURE_SIZE",
    "GL_MAX_RENDERBUFFER_SIZE",
    "GL_MAX_VERTEX_ATTRIBS",
    "DEFAULT_CANVAS_WIDTH",
    "DEFAULT_CANVAS_HEIGHT",
    "TEST_GLOBAL_PROPERTIES",
]
