"""Minimal rendering-library symbol table installed as ``window.THREE``.

Only the handful of classes test scripts construct directly are provided. The
renderer is backed by a :class:`SimulatedCanvas`, so its ``dom_element`` hands
out a real simulated graphics context.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

from ..core.constants import DEFAULT_LIBRARY_VERSION
from ..gl.context import SimulatedCanvas


def _vector(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> SimpleNamespace:
    return SimpleNamespace(x=x, y=y, z=z)


class Object3D:
    type = "Object3D"

    def __init__(self) -> None:
        self.name = ""
        self.visible = True
        self.position = _vector()
        self.rotation = _vector()
        self.scale = _vector(1.0, 1.0, 1.0)
        self.children: List[Any] = []

    def add(self, *objects: Any) -> "Object3D":
        self.children.extend(objects)
        return self

    def remove(self, *objects: Any) -> "Object3D":
        for obj in objects:
            for index, child in enumerate(self.children):
                if child is obj:
                    del self.children[index]
                    break
        return self


class Scene(Object3D):
    type = "Scene"


class Mesh(Object3D):
    type = "Mesh"

    def __init__(self, geometry: Any = None, material: Any = None):
        super().__init__()
        self.geometry = geometry if geometry is not None else {}
        self.material = material if material is not None else {}


class BoxGeometry:
    type = "BoxGeometry"

    def __init__(self, width: float = 1, height: float = 1, depth: float = 1):
        self.parameters = {"width": width, "height": height, "depth": depth}


class MeshBasicMaterial:
    type = "MeshBasicMaterial"

    def __init__(self, parameters: Optional[Dict[str, Any]] = None):
        parameters = parameters or {}
        self.color = parameters.get("color", 0xFFFFFF)


class PerspectiveCamera(Object3D):
    type = "PerspectiveCamera"

    def __init__(
        self, fov: float = 50, aspect: float = 1, near: float = 0.1, far: float = 2000
    ):
        super().__init__()
        self.fov = fov
        self.aspect = aspect
        self.near = near
        self.far = far


class WebGLRenderer:
    """Counts render calls; ``render`` adds two triangles per scene child."""

    type = "WebGLRenderer"

    def __init__(self, parameters: Optional[Dict[str, Any]] = None):
        parameters = parameters or {}
        canvas = parameters.get("canvas")
        self.dom_element = canvas if canvas is not None else SimulatedCanvas()
        self.info: Dict[str, Dict[str, int]] = {
            "render": {"triangles": 0, "calls": 0},
            "memory": {"geometries": 0, "textures": 0},
        }

    def set_size(self, width: int, height: int) -> None:
        self.dom_element.set_size(width, height)

    def get_context(self):
        return self.dom_element.get_context("webgl")

    def render(self, scene: Any, camera: Any) -> None:
        self.info["render"]["calls"] += 1
        self.info["render"]["triangles"] += len(getattr(scene, "children", [])) * 2

    def dispose(self) -> None:
        context = self.get_context()
        if context is not None:
            context.cleanup()


def build_three_namespace(library_version: str = DEFAULT_LIBRARY_VERSION) -> SimpleNamespace:
    """Return a fresh ``THREE``-style namespace; ``REVISION`` drops the leading ``r``."""
    return SimpleNamespace(
        REVISION=library_version.lstrip("r"),
        Object3D=Object3D,
        Scene=Scene,
        Mesh=Mesh,
        BoxGeometry=BoxGeometry,
        MeshBasicMaterial=MeshBasicMaterial,
        PerspectiveCamera=PerspectiveCamera,
        WebGLRenderer=WebGLRenderer,
    )


__all__ = [
    "Object3D",
    "Scene",
    "Mesh",
    "BoxGeometry",
    "MeshBasicMaterial",
    "PerspectiveCamera",
    "WebGLRenderer",
    "build_three_namespace",
]
