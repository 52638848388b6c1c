"""In-memory simulated WebGL rendering context.

``SimulatedGLContext`` mirrors the method surface of a WebGL context (snake_case
names) and keeps only bookkeeping: per-kind resource maps, bindings, pipeline
state, draw counters and fixed capability tables. Nothing is rendered.

Malformed handles never raise. Binding ``None`` or a handle this context does
not own is ignored, and so is deleting ``None``, an unknown id, an already
deleted handle or a handle from another (or a cleaned-up) context. Shader
compilation and program linking always succeed.
"""

from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ..core.constants import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    GL_MAX_RENDERBUFFER_SIZE,
    GL_MAX_TEXTURE_SIZE,
    GL_MAX_VERTEX_ATTRIBS,
    GL_RENDERER_STRING,
    GL_SHADING_LANGUAGE_VERSION_STRING,
    GL_UNMASKED_RENDERER_STRING,
    GL_UNMASKED_VENDOR_STRING,
    GL_VENDOR_STRING,
    GL_VERSION_STRING,
    PLACEHOLDER_PNG_DATA_URI,
)
from .constants import CONTEXT_ID_WEBGL2, CONTEXT_IDS_WEBGL1, GLConstants
from .resources import (
    RESOURCE_KINDS,
    Buffer,
    Framebuffer,
    PipelineState,
    Program,
    Renderbuffer,
    Shader,
    Texture,
    UniformLocation,
)

logger = logging.getLogger(__name__)

Handle = Union[Buffer, Shader, Program, Texture, Framebuffer, Renderbuffer]

# capability enum -> PipelineState attribute
_CAPABILITY_FIELDS: Dict[int, str] = {
    GLConstants.BLEND: "blend",
    GLConstants.DEPTH_TEST: "depth_test",
    GLConstants.CULL_FACE: "cull_face",
}


class SimulatedCanvas:
    """Canvas element stand-in that hands out one simulated context."""

    def __init__(
        self,
        width: int = DEFAULT_CANVAS_WIDTH,
        height: int = DEFAULT_CANVAS_HEIGHT,
        element_id: Optional[str] = None,
    ):
        self.width = width
        self.height = height
        self.client_width = width
        self.client_height = height
        self.id = element_id
        self.tag_name = "CANVAS"
        self.style: Dict[str, str] = {}
        self._context: Optional[SimulatedGLContext] = None
        self._context_kind: Optional[str] = None
        self._listeners: Dict[str, List[Callable]] = {}

    def __repr__(self) -> str:
        return f"SimulatedCanvas(id={self.id!r}, width={self.width}, height={self.height})"

    def get_context(self, context_id: str, options: Optional[Dict[str, Any]] = None):
        """Return the canvas's context for ``webgl``/``experimental-webgl``/``webgl2``.

        A canvas holds a single context: asking for the other WebGL version after
        one was created returns ``None``, as do unsupported context ids.
        """
        if context_id in CONTEXT_IDS_WEBGL1:
            kind = "webgl"
        elif context_id == CONTEXT_ID_WEBGL2:
            kind = "webgl2"
        else:
            return None

        if self._context is None:
            context_cls = SimulatedGL2Context if kind == "webgl2" else SimulatedGLContext
            self._context = context_cls(self)
            self._context_kind = kind
            logger.debug("Created %s context for %r", kind, self)
        elif self._context_kind != kind:
            return None
        return self._context

    @property
    def context(self) -> Optional["SimulatedGLContext"]:
        """The context created by ``get_context``, if any."""
        return self._context

    def set_size(self, width: int, height: int) -> None:
        self.width = self.client_width = width
        self.height = self.client_height = height

    def add_event_listener(self, event: str, handler: Callable) -> None:
        self._listeners.setdefault(event, []).append(handler)

    def remove_event_listener(self, event: str, handler: Callable) -> None:
        handlers = self._listeners.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def dispatch_event(self, event: str, payload: Any = None) -> None:
        for handler in list(self._listeners.get(event, [])):
            handler(payload)

    def to_data_url(self, mime_type: str = "image/png") -> str:
        return PLACEHOLDER_PNG_DATA_URI


class SimulatedGLContext(GLConstants):
    """Bookkeeping-only WebGL 1 context.

    Args:
        canvas: Owning canvas; a default 300x150 canvas is created when omitted.

    Example:
        >>> gl = SimulatedGLContext()
        >>> [gl.create_buffer().id for _ in range(3)]
        [1, 2, 3]
        >>> gl.delete_buffer(1)  # bare id, ignored
        >>> gl.cleanup(); gl.create_buffer().id
        1
    """

    webgl_version = 1
    version_string = GL_VERSION_STRING

    def __init__(self, canvas: Optional[SimulatedCanvas] = None):
        if canvas is None:
            canvas = SimulatedCanvas()
            canvas._context = self
            canvas._context_kind = "webgl2" if self.webgl_version == 2 else "webgl"
        self.canvas = canvas

        self.buffers: Dict[int, Buffer] = {}
        self.shaders: Dict[int, Shader] = {}
        self.programs: Dict[int, Program] = {}
        self.textures: Dict[int, Texture] = {}
        self.framebuffers: Dict[int, Framebuffer] = {}
        self.renderbuffers: Dict[int, Renderbuffer] = {}
        self.resource_counters: Dict[str, int] = {kind: 0 for kind in RESOURCE_KINDS}

        self._reset_bookkeeping()
        self._parameters = self._build_parameter_table()
        self._extension_factories: Dict[str, Callable[[], Any]] = {
            "WEBGL_debug_renderer_info": lambda: SimpleNamespace(
                UNMASKED_VENDOR_WEBGL=self.UNMASKED_VENDOR_WEBGL,
                UNMASKED_RENDERER_WEBGL=self.UNMASKED_RENDERER_WEBGL,
            ),
            "OES_texture_float": SimpleNamespace,
            "OES_texture_half_float": SimpleNamespace,
            "WEBGL_lose_context": lambda: SimpleNamespace(
                lose_context=self._lose_context,
                restore_context=self._restore_context,
            ),
        }

    def __repr__(self) -> str:
        live = sum(self.get_resource_info().values())
        return f"{type(self).__name__}(canvas={self.canvas.width}x{self.canvas.height}, live_resources={live})"

    def _reset_bookkeeping(self) -> None:
        self.state = PipelineState.for_canvas(self.canvas.width, self.canvas.height)
        self._buffer_bindings: Dict[int, Buffer] = {}
        self._texture_bindings: Dict[Tuple[int, int], Texture] = {}
        self._framebuffer_bindings: Dict[int, Framebuffer] = {}
        self._renderbuffer_bindings: Dict[int, Renderbuffer] = {}
        self._enabled_attrib_arrays: set = set()
        self._attrib_pointers: Dict[int, Tuple[Any, ...]] = {}
        self._extensions: Dict[str, Any] = {}
        self._context_lost = False
        self.draw_stats: Dict[str, int] = {
            "clears": 0,
            "draw_arrays": 0,
            "draw_elements": 0,
            "vertices": 0,
        }

    def _build_parameter_table(self) -> Dict[Any, Any]:
        """Fixed capability values keyed by enum value and by enum name."""
        values = {
            "VENDOR": GL_VENDOR_STRING,
            "RENDERER": GL_RENDERER_STRING,
            "VERSION": self.version_string,
            "SHADING_LANGUAGE_VERSION": GL_SHADING_LANGUAGE_VERSION_STRING,
            "UNMASKED_VENDOR_WEBGL": GL_UNMASKED_VENDOR_STRING,
            "UNMASKED_RENDERER_WEBGL": GL_UNMASKED_RENDERER_STRING,
            "MAX_TEXTURE_SIZE": GL_MAX_TEXTURE_SIZE,
            "MAX_RENDERBUFFER_SIZE": GL_MAX_RENDERBUFFER_SIZE,
            "MAX_VERTEX_ATTRIBS": GL_MAX_VERTEX_ATTRIBS,
        }
        table: Dict[Any, Any] = {}
        for name, value in values.items():
            table[getattr(self, name)] = value
            table[name] = value
        return table

    # Resource helpers ----------------------------------------------------

    def _map_for(self, kind: str) -> Dict[int, Any]:
        return getattr(self, kind)

    def _create(self, kind: str, **fields: Any):
        self.resource_counters[kind] += 1
        handle = RESOURCE_KINDS[kind](id=self.resource_counters[kind], **fields)
        self._map_for(kind)[handle.id] = handle
        return handle

    def _owns(self, kind: str, handle: Any) -> bool:
        if handle is None:
            return False
        return self._map_for(kind).get(getattr(handle, "id", None)) is handle

    def _delete(self, kind: str, handle: Any) -> Optional[Any]:
        # bare ids, foreign and stale handles never match a live entry
        if self._owns(kind, handle):
            return self._map_for(kind).pop(handle.id)
        return None

    @staticmethod
    def _unbind(bindings: Dict[Any, Any], handle: Any) -> None:
        for key in [k for k, v in bindings.items() if v is handle]:
            del bindings[key]

    # Buffers ---------------------------------------------------------------

    def create_buffer(self) -> Buffer:
        return self._create("buffers")

    def delete_buffer(self, buffer: Optional[Buffer]) -> None:
        removed = self._delete("buffers", buffer)
        if removed is not None:
            self._unbind(self._buffer_bindings, removed)

    def bind_buffer(self, target: int, buffer: Optional[Buffer]) -> None:
        if not self._owns("buffers", buffer):
            return
        buffer.target = target
        self._buffer_bindings[target] = buffer

    def buffer_data(self, target: int, data: Any, usage: int) -> None:
        buffer = self._buffer_bindings.get(target)
        if buffer is not None:
            buffer.data = data
            buffer.usage = usage

    def is_buffer(self, buffer: Any) -> bool:
        return self._owns("buffers", buffer)

    # Shaders and programs -------------------------------------------------------

    def create_shader(self, shader_type: int) -> Shader:
        return self._create("shaders", type=shader_type)

    def delete_shader(self, shader: Optional[Shader]) -> None:
        self._delete("shaders", shader)

    def shader_source(self, shader: Optional[Shader], source: str) -> None:
        if self._owns("shaders", shader):
            shader.source = source

    def compile_shader(self, shader: Optional[Shader]) -> None:
        if self._owns("shaders", shader):
            shader.compiled = True

    def get_shader_parameter(self, shader: Any, pname: int) -> Any:
        if pname == self.COMPILE_STATUS:
            return True
        if pname == self.DELETE_STATUS:
            return not self._owns("shaders", shader)
        if pname == self.SHADER_TYPE:
            return getattr(shader, "type", None)
        return None

    def get_shader_info_log(self, shader: Any) -> str:
        return ""

    def create_program(self) -> Program:
        return self._create("programs")

    def delete_program(self, program: Optional[Program]) -> None:
        removed = self._delete("programs", program)
        if removed is not None and self.state.current_program is removed:
            self.state.current_program = None

    def attach_shader(self, program: Optional[Program], shader: Optional[Shader]) -> None:
        if self._owns("programs", program) and self._owns("shaders", shader):
            if shader not in program.shaders:
                program.shaders.append(shader)

    def detach_shader(self, program: Optional[Program], shader: Optional[Shader]) -> None:
        if self._owns("programs", program) and shader in program.shaders:
            program.shaders.remove(shader)

    def link_program(self, program: Optional[Program]) -> None:
        if self._owns("programs", program):
            program.linked = True

    def use_program(self, program: Optional[Program]) -> None:
        if program is None or self._owns("programs", program):
            self.state.current_program = program

    def get_program_parameter(self, program: Any, pname: int) -> Any:
        if pname == self.LINK_STATUS:
            return True
        if pname == self.VALIDATE_STATUS:
            return True
        if pname == self.DELETE_STATUS:
            return not self._owns("programs", program)
        if pname == self.ATTACHED_SHADERS:
            return len(getattr(program, "shaders", []))
        return None

    def get_program_info_log(self, program: Any) -> str:
        return ""

    # Attributes and uniforms -----------------------------------------------------

    def get_attrib_location(self, program: Any, name: str) -> int:
        return len(name) % 16

    def get_uniform_location(self, program: Any, name: str) -> Optional[UniformLocation]:
        if not self._owns("programs", program):
            return None
        return UniformLocation(name=name, program=program)

    def enable_vertex_attrib_array(self, index: int) -> None:
        self._enabled_attrib_arrays.add(index)

    def disable_vertex_attrib_array(self, index: int) -> None:
        self._enabled_attrib_arrays.discard(index)

    def vertex_attrib_pointer(
        self, index: int, size: int, data_type: int, normalized: bool, stride: int, offset: int
    ) -> None:
        self._attrib_pointers[index] = (size, data_type, normalized, stride, offset)

    def _set_uniform(self, location: Optional[UniformLocation], value: Any) -> None:
        if location is not None and self._owns("programs", location.program):
            location.program.uniforms[location.name] = value

    def uniform1f(self, location: Optional[UniformLocation], value: float) -> None:
        self._set_uniform(location, value)

    def uniform1i(self, location: Optional[UniformLocation], value: int) -> None:
        self._set_uniform(location, value)

    def uniform3fv(self, location: Optional[UniformLocation], value: Any) -> None:
        self._set_uniform(location, list(value))

    def uniform4fv(self, location: Optional[UniformLocation], value: Any) -> None:
        self._set_uniform(location, list(value))

    def uniform_matrix4fv(
        self, location: Optional[UniformLocation], transpose: bool, value: Any
    ) -> None:
        self._set_uniform(location, list(value))

    # Textures ---------------------------------------------------------------

    def create_texture(self) -> Texture:
        return self._create("textures")

    def delete_texture(self, texture: Optional[Texture]) -> None:
        removed = self._delete("textures", texture)
        if removed is not None:
            self._unbind(self._texture_bindings, removed)

    def bind_texture(self, target: int, texture: Optional[Texture]) -> None:
        if not self._owns("textures", texture):
            return
        texture.target = target
        self._texture_bindings[(self.state.active_texture, target)] = texture

    def _bound_texture(self, target: int) -> Optional[Texture]:
        return self._texture_bindings.get((self.state.active_texture, target))

    def tex_image_2d(
        self,
        target: int,
        level: int,
        internal_format: int,
        width: int = 0,
        height: int = 0,
        border: int = 0,
        pixel_format: Optional[int] = None,
        pixel_type: Optional[int] = None,
        pixels: Any = None,
    ) -> None:
        texture = self._bound_texture(target)
        if texture is None:
            return
        texture.width = width
        texture.height = height
        texture.format = internal_format
        texture.data = pixels

    def tex_parameteri(self, target: int, pname: int, param: int) -> None:
        texture = self._bound_texture(target)
        if texture is not None:
            texture.parameters[pname] = param

    def active_texture(self, unit: int) -> None:
        self.state.active_texture = unit

    # Framebuffers and renderbuffers ------------------------------------------

    def create_framebuffer(self) -> Framebuffer:
        return self._create("framebuffers")

    def delete_framebuffer(self, framebuffer: Optional[Framebuffer]) -> None:
        removed = self._delete("framebuffers", framebuffer)
        if removed is not None:
            self._unbind(self._framebuffer_bindings, removed)

    def bind_framebuffer(self, target: int, framebuffer: Optional[Framebuffer]) -> None:
        if not self._owns("framebuffers", framebuffer):
            return
        framebuffer.target = target
        self._framebuffer_bindings[target] = framebuffer

    def framebuffer_texture_2d(
        self, target: int, attachment: int, tex_target: int, texture: Optional[Texture], level: int = 0
    ) -> None:
        framebuffer = self._framebuffer_bindings.get(target)
        if framebuffer is not None and self._owns("textures", texture):
            framebuffer.attachments[attachment] = texture

    def framebuffer_renderbuffer(
        self,
        target: int,
        attachment: int,
        renderbuffer_target: int,
        renderbuffer: Optional[Renderbuffer],
    ) -> None:
        framebuffer = self._framebuffer_bindings.get(target)
        if framebuffer is not None and self._owns("renderbuffers", renderbuffer):
            framebuffer.attachments[attachment] = renderbuffer

    def check_framebuffer_status(self, target: int) -> int:
        return self.FRAMEBUFFER_COMPLETE

    def create_renderbuffer(self) -> Renderbuffer:
        return self._create("renderbuffers")

    def delete_renderbuffer(self, renderbuffer: Optional[Renderbuffer]) -> None:
        removed = self._delete("renderbuffers", renderbuffer)
        if removed is not None:
            self._unbind(self._renderbuffer_bindings, removed)

    def bind_renderbuffer(self, target: int, renderbuffer: Optional[Renderbuffer]) -> None:
        if not self._owns("renderbuffers", renderbuffer):
            return
        renderbuffer.target = target
        self._renderbuffer_bindings[target] = renderbuffer

    def renderbuffer_storage(self, target: int, internal_format: int, width: int, height: int) -> None:
        renderbuffer = self._renderbuffer_bindings.get(target)
        if renderbuffer is not None:
            renderbuffer.internal_format = internal_format
            renderbuffer.width = width
            renderbuffer.height = height

    # Drawing ----------------------------------------------------------------

    def clear(self, mask: int) -> None:
        self.draw_stats["clears"] += 1

    def clear_color(self, red: float, green: float, blue: float, alpha: float) -> None:
        self.state.clear_color = (red, green, blue, alpha)

    def draw_arrays(self, mode: int, first: int, count: int) -> None:
        self.draw_stats["draw_arrays"] += 1
        self.draw_stats["vertices"] += max(count, 0)

    def draw_elements(self, mode: int, count: int, index_type: int, offset: int) -> None:
        self.draw_stats["draw_elements"] += 1
        self.draw_stats["vertices"] += max(count, 0)

    # Pipeline state ---------------------------------------------------------------

    def viewport(self, x: int, y: int, width: int, height: int) -> None:
        self.state.viewport = (x, y, width, height)

    def enable(self, cap: int) -> None:
        field_name = _CAPABILITY_FIELDS.get(cap)
        if field_name is not None:
            setattr(self.state, field_name, True)

    def disable(self, cap: int) -> None:
        field_name = _CAPABILITY_FIELDS.get(cap)
        if field_name is not None:
            setattr(self.state, field_name, False)

    def is_enabled(self, cap: int) -> bool:
        field_name = _CAPABILITY_FIELDS.get(cap)
        return bool(getattr(self.state, field_name)) if field_name else False

    def blend_func(self, sfactor: int, dfactor: int) -> None:
        self.state.blend_func = (sfactor, dfactor)

    def depth_func(self, func: int) -> None:
        self.state.depth_func = func

    def cull_face(self, mode: int) -> None:
        self.state.cull_face_mode = mode

    # Queries ----------------------------------------------------------------------

    def get_parameter(self, pname: Any) -> Any:
        """Look up a capability value; unknown keys return ``None``.

        Every fixed parameter is reachable by its enum value and by its enum
        name (``gl.get_parameter(gl.MAX_TEXTURE_SIZE)`` or
        ``gl.get_parameter("MAX_TEXTURE_SIZE")``). A few live-state queries
        (viewport, clear color, active texture, current program) read the
        pipeline state.
        """
        if pname == self.VIEWPORT:
            return list(self.state.viewport)
        if pname == self.COLOR_CLEAR_VALUE:
            return list(self.state.clear_color)
        if pname == self.ACTIVE_TEXTURE:
            return self.state.active_texture
        if pname == self.CURRENT_PROGRAM:
            return self.state.current_program
        try:
            return self._parameters.get(pname)
        except TypeError:
            return None

    def get_error(self) -> int:
        return self.NO_ERROR

    def get_extension(self, name: str) -> Any:
        """Return the cached descriptor for a supported extension, else ``None``."""
        if name in self._extensions:
            return self._extensions[name]
        factory = self._extension_factories.get(name)
        if factory is None:
            return None
        extension = factory()
        self._extensions[name] = extension
        return extension

    def get_supported_extensions(self) -> List[str]:
        return list(self._extension_factories.keys())

    def is_context_lost(self) -> bool:
        return self._context_lost

    def _lose_context(self) -> None:
        self._context_lost = True
        self.canvas.dispatch_event("webglcontextlost")

    def _restore_context(self) -> None:
        self._context_lost = False
        self.canvas.dispatch_event("webglcontextrestored")

    # Lifecycle ------------------------------------------------------------------

    def cleanup(self) -> None:
        """Release every resource, zero the counters and restore default state."""
        for kind in RESOURCE_KINDS:
            self._map_for(kind).clear()
            self.resource_counters[kind] = 0
        self._reset_bookkeeping()
        logger.debug("%s cleaned up", type(self).__name__)

    def get_resource_info(self) -> Dict[str, int]:
        return {kind: len(self._map_for(kind)) for kind in RESOURCE_KINDS}


class SimulatedGL2Context(SimulatedGLContext):
    webgl_version = 2
    version_string = "WebGL 2.0"


__all__ = ["SimulatedCanvas", "SimulatedGLContext", "SimulatedGL2Context"]
