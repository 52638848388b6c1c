"""Per-driver global scope seen by evaluated scripts."""

from __future__ import annotations

import logging
import re
from types import SimpleNamespace
from typing import Any, Dict, Iterator, List, Mapping, Optional

from ..gl.context import SimulatedCanvas, SimulatedGL2Context, SimulatedGLContext

logger = logging.getLogger(__name__)

_CANVAS_TAG = re.compile(r"<canvas\b([^>]*)>", re.IGNORECASE)
_ATTRIBUTE = re.compile(r"""([\w-]+)\s*=\s*["']([^"']*)["']""")


class SimulatedDocument:
    """Flat element registry; enough DOM for canvas lookups."""

    def __init__(self) -> None:
        self._elements: List[Any] = []

    def __repr__(self) -> str:
        return f"SimulatedDocument(elements={len(self._elements)})"

    @property
    def elements(self) -> List[Any]:
        return list(self._elements)

    def create_element(self, tag_name: str, element_id: Optional[str] = None) -> Any:
        """Create and register an element; ``canvas`` yields a :class:`SimulatedCanvas`."""
        if tag_name.lower() == "canvas":
            element: Any = SimulatedCanvas(element_id=element_id)
        else:
            element = SimpleNamespace(
                tag_name=tag_name.upper(), id=element_id, style={}, children=[]
            )
        self._elements.append(element)
        return element

    def append_child(self, element: Any) -> Any:
        if not any(existing is element for existing in self._elements):
            self._elements.append(element)
        return element

    def get_element_by_id(self, element_id: str) -> Optional[Any]:
        for element in self._elements:
            if getattr(element, "id", None) == element_id:
                return element
        return None

    def query_selector(self, selector: str) -> Optional[Any]:
        """Support ``#id``, ``tag`` and ``tag#id`` selectors."""
        selector = selector.strip()
        tag, _, element_id = selector.partition("#")
        for element in self._elements:
            if tag and getattr(element, "tag_name", "").lower() != tag.lower():
                continue
            if element_id and getattr(element, "id", None) != element_id:
                continue
            return element
        return None

    def load_html(self, html: str) -> List[SimulatedCanvas]:
        """Register a canvas for every ``<canvas>`` tag in ``html``."""
        canvases = []
        for match in _CANVAS_TAG.finditer(html):
            attributes = dict(_ATTRIBUTE.findall(match.group(1)))
            canvas = self.create_element("canvas", attributes.get("id"))
            width = attributes.get("width", "")
            height = attributes.get("height", "")
            if width.isdigit() and height.isdigit():
                canvas.set_size(int(width), int(height))
            canvases.append(canvas)
        return canvases

    def clear(self) -> None:
        self._elements.clear()


class SimulatedWindow:
    """Global property bag with attribute and mapping access.

    Reading a property that was never set returns ``None`` rather than raising,
    matching how scripts check for optional globals.

    Example:
        >>> window = SimulatedWindow()
        >>> window.sceneReady = True
        >>> window["sceneReady"], window.missing
        (True, None)
    """

    def __init__(self, properties: Optional[Mapping[str, Any]] = None):
        object.__setattr__(self, "_properties", dict(properties or {}))

    def __repr__(self) -> str:
        return f"SimulatedWindow(properties={sorted(self._properties)})"

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._properties.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        self._properties[name] = value

    def __delattr__(self, name: str) -> None:
        self._properties.pop(name, None)

    def __getitem__(self, name: str) -> Any:
        return self._properties.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self._properties[name] = value

    def __delitem__(self, name: str) -> None:
        self._properties.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._properties

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._properties))

    def __len__(self) -> int:
        return len(self._properties)

    def get(self, name: str, default: Any = None) -> Any:
        return self._properties.get(name, default)

    def keys(self) -> List[str]:
        return list(self._properties)

    def delete(self, name: str) -> bool:
        return self._properties.pop(name, _MISSING) is not _MISSING

    def resolve(self, path: str) -> Any:
        """Walk a dotted property path; a leading ``window.`` is ignored."""
        if path.startswith("window."):
            path = path[len("window."):]
        value: Any = self
        for part in path.split("."):
            if value is None:
                return None
            if isinstance(value, (SimulatedWindow, Mapping)):
                value = value.get(part)
            else:
                value = getattr(value, part, None)
        return value

    def clear(self) -> None:
        self._properties.clear()

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._properties)


_MISSING = object()


def install_simulation_globals(
    window: SimulatedWindow, width: int, height: int, device_pixel_ratio: float = 1.0
) -> SimulatedWindow:
    """Install the graphics-context constructors and viewport globals on ``window``.

    An existing ``document`` is kept so canvases registered earlier survive.
    """
    window["WebGLRenderingContext"] = SimulatedGLContext
    window["WebGL2RenderingContext"] = SimulatedGL2Context
    window["inner_width"] = width
    window["inner_height"] = height
    window["device_pixel_ratio"] = device_pixel_ratio
    if window["document"] is None:
        window["document"] = SimulatedDocument()
    logger.debug("Installed simulation globals (%dx%d)", width, height)
    return window


__all__ = ["SimulatedDocument", "SimulatedWindow", "install_simulation_globals"]
