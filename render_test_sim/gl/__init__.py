"""Simulated WebGL context, canvas and resource records."""

from .constants import GLConstants
from .context import SimulatedCanvas, SimulatedGL2Context, SimulatedGLContext
from .resources import (
    Buffer,
    Framebuffer,
    PipelineState,
    Program,
    Renderbuffer,
    Shader,
    Texture,
    UniformLocation,
)

__all__ = [
    "GLConstants",
    "SimulatedCanvas",
    "SimulatedGLContext",
    "SimulatedGL2Context",
    "Buffer",
    "Framebuffer",
    "PipelineState",
    "Program",
    "Renderbuffer",
    "Shader",
    "Texture",
    "UniformLocation",
]
