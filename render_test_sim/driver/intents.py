"""Recognized script intents for :meth:`SimulatedPage.evaluate`.

A real automation driver ships a function's source to the browser. The
simulated page cannot interpret scripts, so callers describe what a script
does with one of the small records below. An intent can be passed to
``evaluate`` directly, attached to a callable with :func:`script_intent`, bound
into a :func:`functools.partial`, or captured in a closure; :func:`detect_intent`
finds it in any of those places.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, TypeVar, Union

INTENT_ATTRIBUTE = "__script_intent__"

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class SceneConstruction:
    """``new THREE.Scene()``; echoes an empty scene shape."""

    def resolve(self, window: Any) -> Dict[str, Any]:
        return {"type": "Scene", "children": []}


@dataclass(frozen=True)
class MeshConstruction:
    """``new THREE.Mesh(geometry, material)``; echoes an empty mesh shape."""

    def resolve(self, window: Any) -> Dict[str, Any]:
        return {"type": "Mesh", "geometry": {}, "material": {}}


@dataclass(frozen=True)
class WindowPropertyRead:
    """Read ``window.<name>``; dotted names walk nested objects."""

    name: str

    def resolve(self, window: Any) -> Any:
        return window.resolve(self.name)


@dataclass(frozen=True)
class WindowPropertyWrite:
    """Assign each ``name: value`` pair onto the window."""

    values: Mapping[str, Any] = field(default_factory=dict)

    def resolve(self, window: Any) -> bool:
        for name, value in self.values.items():
            window[name] = value
        return True


@dataclass(frozen=True)
class WindowPropertySnapshot:
    """Build ``{key: window.<property>}`` from a key -> property mapping."""

    fields: Mapping[str, str] = field(default_factory=dict)

    def resolve(self, window: Any) -> Dict[str, Any]:
        return {key: window.resolve(prop) for key, prop in self.fields.items()}


@dataclass(frozen=True)
class ConstantResult:
    """A script whose result does not depend on page state."""

    value: Any = None

    def resolve(self, window: Any) -> Any:
        return self.value


ScriptIntent = Union[
    SceneConstruction,
    MeshConstruction,
    WindowPropertyRead,
    WindowPropertyWrite,
    WindowPropertySnapshot,
    ConstantResult,
]

INTENT_TYPES: Tuple[type, ...] = (
    SceneConstruction,
    MeshConstruction,
    WindowPropertyRead,
    WindowPropertyWrite,
    WindowPropertySnapshot,
    ConstantResult,
)


def is_intent(value: Any) -> bool:
    return isinstance(value, INTENT_TYPES)


def script_intent(intent: ScriptIntent) -> Callable[[F], F]:
    """Decorator tagging a callable with the intent it stands for.

    Example:
        >>> @script_intent(WindowPropertyRead("sceneReady"))
        ... def scene_ready():
        ...     ...
        >>> detect_intent(scene_ready)
        WindowPropertyRead(name='sceneReady')
    """
    if not is_intent(intent):
        raise TypeError(f"script_intent expects a script intent, got {type(intent).__name__}")

    def decorator(func: F) -> F:
        setattr(func, INTENT_ATTRIBUTE, intent)
        return func

    return decorator


def detect_intent(script: Any) -> Optional[ScriptIntent]:
    """Return the intent carried by ``script``, or ``None``.

    Looks at, in order: the object itself, its ``__script_intent__``
    attribute, the function and arguments of a ``functools.partial``, and the
    cells of a closure.
    """
    if is_intent(script):
        return script

    tagged = getattr(script, INTENT_ATTRIBUTE, None)
    if is_intent(tagged):
        return tagged

    if isinstance(script, functools.partial):
        found = detect_intent(script.func)
        if found is not None:
            return found
        for value in (*script.args, *script.keywords.values()):
            if is_intent(value):
                return value
        return None

    closure = getattr(script, "__closure__", None)
    if closure:
        for cell in closure:
            try:
                contents = cell.cell_contents
            except ValueError:
                # empty cell
                continue
            if is_intent(contents):
                return contents
    return None


__all__ = [
    "SceneConstruction",
    "MeshConstruction",
    "WindowPropertyRead",
    "WindowPropertyWrite",
    "WindowPropertySnapshot",
    "ConstantResult",
    "ScriptIntent",
    "INTENT_TYPES",
    "is_intent",
    "script_intent",
    "detect_intent",
]
