"""Post-hoc validators over driver-evaluated snapshots.

Each validator evaluates a snapshot function in the manager's page and checks
it. An absent resource raises :class:`ResourceMissingError`; a present resource
outside the expected bounds raises :class:`ValidationError` naming the
expectation.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..driver.manager import SimulatedBrowserManager
from ..driver.window import SimulatedWindow
from ..utils.exceptions import ResourceMissingError, ValidationError
from .html import CANVAS_ELEMENT_ID

logger = logging.getLogger(__name__)

SCENE_PROPERTY = "testScene"
RENDERER_PROPERTY = "testRenderer"


def _describe_vector(vector: Any) -> Optional[Dict[str, float]]:
    if vector is None:
        return None
    return {axis: getattr(vector, axis, 0.0) for axis in ("x", "y", "z")}


def _scene_snapshot(window: SimulatedWindow) -> Dict[str, Any]:
    scene = window[SCENE_PROPERTY]
    if window["THREE"] is None or scene is None:
        return {"error": "Scene not found"}
    children = list(getattr(scene, "children", []))
    return {
        "type": getattr(scene, "type", None),
        "children_count": len(children),
        "objects": [
            {
                "type": getattr(child, "type", None),
                "name": getattr(child, "name", None),
                "visible": getattr(child, "visible", None),
                "position": _describe_vector(getattr(child, "position", None)),
                "rotation": _describe_vector(getattr(child, "rotation", None)),
                "scale": _describe_vector(getattr(child, "scale", None)),
            }
            for child in children
        ],
    }


def _renderer_snapshot(window: SimulatedWindow) -> Dict[str, Any]:
    renderer = window[RENDERER_PROPERTY]
    if window["THREE"] is None or renderer is None:
        return {"error": "Renderer not found"}
    canvas = renderer.dom_element
    return {
        "type": getattr(renderer, "type", None),
        "dom_element": {"width": canvas.width, "height": canvas.height},
        "info": getattr(renderer, "info", None),
    }


def _gl_context_snapshot(window: SimulatedWindow) -> Dict[str, Any]:
    document = window["document"]
    canvas = None
    if document is not None:
        canvas = document.get_element_by_id(CANVAS_ELEMENT_ID) or document.query_selector("canvas")
    if canvas is None:
        return {"error": "Canvas not found", "resource": "Canvas"}

    gl = canvas.get_context("webgl") or canvas.get_context("experimental-webgl")
    if gl is None:
        return {"error": "WebGL context not available", "resource": "WebGL context"}
    return {
        "vendor": gl.get_parameter(gl.VENDOR),
        "renderer": gl.get_parameter(gl.RENDERER),
        "version": gl.get_parameter(gl.VERSION),
        "extensions": gl.get_supported_extensions(),
    }


def validate_scene(
    manager: SimulatedBrowserManager,
    min_objects: Optional[int] = None,
    max_objects: Optional[int] = None,
    exact_objects: Optional[int] = None,
) -> Dict[str, Any]:
    """Check the child count of ``window.testScene``.

    Raises:
        ResourceMissingError: No rendering library or no ``testScene``.
        ValidationError: The child count violates a bound.
    """
    result = manager.page.evaluate(_scene_snapshot)
    if "error" in result:
        raise ResourceMissingError("Scene", result["error"])

    count = result["children_count"]
    violation = None
    if min_objects is not None and count < min_objects:
        violation = f"Expected at least {min_objects} objects, got {count}"
    elif max_objects is not None and count > max_objects:
        violation = f"Expected at most {max_objects} objects, got {count}"
    elif exact_objects is not None and count != exact_objects:
        violation = f"Expected exactly {exact_objects} objects, got {count}"
    if violation:
        raise ValidationError(violation, parameter_name="children_count", parameter_value=count, violations=[violation])
    return result


def validate_renderer(
    manager: SimulatedBrowserManager,
    min_width: Optional[int] = None,
    min_height: Optional[int] = None,
) -> Dict[str, Any]:
    """Check the canvas size of ``window.testRenderer``.

    Raises:
        ResourceMissingError: No rendering library or no ``testRenderer``.
        ValidationError: The canvas is narrower or shorter than required.
    """
    result = manager.page.evaluate(_renderer_snapshot)
    if "error" in result:
        raise ResourceMissingError("Renderer", result["error"])

    width = result["dom_element"]["width"]
    height = result["dom_element"]["height"]
    violations = []
    if min_width is not None and width < min_width:
        violations.append(f"Canvas width too small: {width} < {min_width}")
    if min_height is not None and height < min_height:
        violations.append(f"Canvas height too small: {height} < {min_height}")
    if violations:
        raise ValidationError(violations[0], parameter_name="dom_element", violations=violations)
    return result


def validate_gl_context(manager: SimulatedBrowserManager) -> Dict[str, Any]:
    """Check that the test canvas hands out a WebGL context and report its strings."""
    result = manager.page.evaluate(_gl_context_snapshot)
    if "error" in result:
        raise ResourceMissingError(result["resource"], result["error"])
    logger.debug("WebGL context available: %s / %s", result["vendor"], result["renderer"])
    return result


__all__ = ["validate_scene", "validate_renderer", "validate_gl_context"]
