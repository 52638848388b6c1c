"""Resource handles and pipeline state of the simulated graphics context.

Handles compare by identity (``eq=False``): a handle from another context, or
one whose id was reused after ``cleanup()``, never matches a live entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import GLConstants


@dataclass(eq=False)
class Buffer:
    id: int
    target: Optional[int] = None
    data: Any = None
    usage: Optional[int] = None


@dataclass(eq=False)
class Shader:
    id: int
    type: int
    source: str = ""
    compiled: bool = False


@dataclass(eq=False)
class Program:
    id: int
    shaders: List[Shader] = field(default_factory=list)
    linked: bool = False
    uniforms: Dict[str, Any] = field(default_factory=dict)


@dataclass(eq=False)
class Texture:
    id: int
    target: Optional[int] = None
    width: int = 0
    height: int = 0
    format: Optional[int] = None
    data: Any = None
    parameters: Dict[int, int] = field(default_factory=dict)


@dataclass(eq=False)
class Framebuffer:
    id: int
    target: Optional[int] = None
    attachments: Dict[int, Any] = field(default_factory=dict)


@dataclass(eq=False)
class Renderbuffer:
    id: int
    target: Optional[int] = None
    internal_format: Optional[int] = None
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class UniformLocation:
    name: str
    program: Program


@dataclass
class PipelineState:
    """Global pipeline state; defaults are the freshly constructed context."""

    viewport: Tuple[int, int, int, int] = (0, 0, 0, 0)
    clear_color: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    active_texture: int = GLConstants.TEXTURE0
    current_program: Optional[Program] = None
    blend: bool = False
    depth_test: bool = True
    cull_face: bool = False
    blend_func: Tuple[int, int] = (GLConstants.ONE, GLConstants.ZERO)
    depth_func: int = GLConstants.LESS
    cull_face_mode: int = GLConstants.BACK

    @classmethod
    def for_canvas(cls, width: int, height: int) -> "PipelineState":
        return cls(viewport=(0, 0, width, height))


# resource_counters key -> handle class, in creation-API order
RESOURCE_KINDS: Dict[str, type] = {
    "buffers": Buffer,
    "shaders": Shader,
    "programs": Program,
    "textures": Texture,
    "framebuffers": Framebuffer,
    "renderbuffers": Renderbuffer,
}

__all__ = [
    "Buffer",
    "Shader",
    "Program",
    "Texture",
    "Framebuffer",
    "Renderbuffer",
    "UniformLocation",
    "PipelineState",
    "RESOURCE_KINDS",
]
