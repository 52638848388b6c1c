"""Simulated browser-automation driver.

``SimulatedBrowserManager`` exposes the surface of a real automation manager
(``initialize``, ``cleanup``, ``page.evaluate``, ``page.set_content``,
``page.wait_for_function``...) with every call resolved in-process against a
:class:`SimulatedWindow`.
"""

from .browser import SimulatedBrowser
from .intents import (
    ConstantResult,
    MeshConstruction,
    SceneConstruction,
    WindowPropertyRead,
    WindowPropertySnapshot,
    WindowPropertyWrite,
    detect_intent,
    script_intent,
)
from .manager import BrowserOptions, SimulatedBrowserManager
from .page import ElementHandle, JSHandle, Response, SimulatedPage
from .registry import InstanceRegistry, default_registry
from .scene_library import build_three_namespace
from .utilities import reset_global_state, wait_for_condition
from .window import SimulatedDocument, SimulatedWindow, install_simulation_globals

__all__ = [
    "BrowserOptions",
    "SimulatedBrowserManager",
    "SimulatedBrowser",
    "SimulatedPage",
    "Response",
    "JSHandle",
    "ElementHandle",
    "InstanceRegistry",
    "default_registry",
    "SimulatedWindow",
    "SimulatedDocument",
    "install_simulation_globals",
    "build_three_namespace",
    "SceneConstruction",
    "MeshConstruction",
    "WindowPropertyRead",
    "WindowPropertyWrite",
    "WindowPropertySnapshot",
    "ConstantResult",
    "script_intent",
    "detect_intent",
    "wait_for_condition",
    "reset_global_state",
]
