"""
Test suite for the simulated WebGL context and canvas.

This module validates:
- Resource id allocation per kind, deletion and cleanup
- Tolerance of malformed, foreign and deleted handles
- Capability queries, extensions and pipeline state
- Canvas context creation rules
"""

import pytest

from render_test_sim.core.constants import (
    GL_MAX_TEXTURE_SIZE,
    GL_RENDERER_STRING,
    GL_VENDOR_STRING,
    GL_VERSION_STRING,
)
from render_test_sim.gl import (
    GLConstants,
    PipelineState,
    SimulatedCanvas,
    SimulatedGL2Context,
    SimulatedGLContext,
)

RESOURCE_CREATORS = [
    ("buffers", "create_buffer", "delete_buffer"),
    ("programs", "create_program", "delete_program"),
    ("textures", "create_texture", "delete_texture"),
    ("framebuffers", "create_framebuffer", "delete_framebuffer"),
    ("renderbuffers", "create_renderbuffer", "delete_renderbuffer"),
]

SUPPORTED_EXTENSIONS = [
    "WEBGL_debug_renderer_info",
    "OES_texture_float",
    "OES_texture_half_float",
    "WEBGL_lose_context",
]


class TestResourceAllocation:
    @pytest.mark.parametrize("count", [1, 3, 10])
    def test_buffer_ids_ascend_from_one(self, gl_context, count):
        ids = [gl_context.create_buffer().id for _ in range(count)]
        assert ids == list(range(1, count + 1))
        assert gl_context.resource_counters["buffers"] == count

    @pytest.mark.parametrize("kind, create, _delete", RESOURCE_CREATORS)
    def test_each_kind_counts_independently(self, gl_context, kind, create, _delete):
        gl_context.create_buffer()
        gl_context.create_shader(gl_context.VERTEX_SHADER)
        handle = getattr(gl_context, create)()
        expected = 2 if kind == "buffers" else 1
        assert handle.id == expected

    @pytest.mark.parametrize("kind, create, delete", RESOURCE_CREATORS)
    def test_delete_by_handle_ignores_bare_ids(self, gl_context, kind, create, delete):
        first = getattr(gl_context, create)()
        second = getattr(gl_context, create)()
        getattr(gl_context, delete)(first)
        getattr(gl_context, delete)(second.id)
        assert gl_context.get_resource_info()[kind] == 1
        getattr(gl_context, delete)(second)
        assert gl_context.get_resource_info()[kind] == 0
        # ids are never reused before cleanup
        assert getattr(gl_context, create)().id == 3

    def test_shader_records_type(self, gl_context):
        shader = gl_context.create_shader(gl_context.FRAGMENT_SHADER)
        assert shader.type == GLConstants.FRAGMENT_SHADER
        assert gl_context.get_shader_parameter(shader, gl_context.SHADER_TYPE) == shader.type

    def test_cleanup_resets_counters(self, gl_context):
        for _ in range(4):
            gl_context.create_buffer()
        gl_context.create_texture()
        gl_context.cleanup()
        assert all(count == 0 for count in gl_context.resource_counters.values())
        assert all(count == 0 for count in gl_context.get_resource_info().values())
        assert gl_context.create_buffer().id == 1

    def test_resource_info(self, gl_context):
        gl_context.create_buffer()
        gl_context.create_buffer()
        gl_context.create_program()
        info = gl_context.get_resource_info()
        assert info == {
            "buffers": 2,
            "shaders": 0,
            "programs": 1,
            "textures": 0,
            "framebuffers": 0,
            "renderbuffers": 0,
        }


class TestMalformedHandles:
    @pytest.mark.parametrize("handle", [None, 99, -1, 0])
    def test_delete_unknown_is_noop(self, gl_context, handle):
        gl_context.create_buffer()
        gl_context.delete_buffer(handle)
        assert gl_context.get_resource_info()["buffers"] == 1

    def test_double_delete_is_noop(self, gl_context):
        buffer = gl_context.create_buffer()
        gl_context.delete_buffer(buffer)
        gl_context.delete_buffer(buffer)
        assert gl_context.get_resource_info()["buffers"] == 0

    def test_foreign_handle_is_ignored(self, gl_context):
        other = SimulatedGLContext()
        foreign = other.create_buffer()
        own = gl_context.create_buffer()
        assert foreign.id == own.id
        gl_context.delete_buffer(foreign)
        assert gl_context.is_buffer(own)
        gl_context.bind_buffer(gl_context.ARRAY_BUFFER, foreign)
        gl_context.buffer_data(gl_context.ARRAY_BUFFER, [1, 2], gl_context.STATIC_DRAW)
        assert foreign.data is None

    def test_id_from_another_context_is_ignored(self, gl_context):
        other = SimulatedGLContext()
        foreign = other.create_buffer()
        own = gl_context.create_buffer()
        gl_context.delete_buffer(foreign.id)
        assert gl_context.is_buffer(own)
        assert gl_context.get_resource_info()["buffers"] == 1
        assert other.is_buffer(foreign)

    def test_id_from_before_cleanup_is_ignored(self, gl_context):
        stale_id = gl_context.create_texture().id
        gl_context.cleanup()
        fresh = gl_context.create_texture()
        gl_context.delete_texture(stale_id)
        assert gl_context.get_resource_info()["textures"] == 1
        assert fresh.id == stale_id

    def test_handle_from_before_cleanup_is_stale(self, gl_context):
        stale = gl_context.create_buffer()
        gl_context.cleanup()
        fresh = gl_context.create_buffer()
        assert stale.id == fresh.id
        gl_context.delete_buffer(stale)
        assert gl_context.is_buffer(fresh)

    def test_bind_none_is_ignored(self, gl_context):
        gl_context.bind_buffer(gl_context.ARRAY_BUFFER, None)
        gl_context.bind_texture(gl_context.TEXTURE_2D, None)
        gl_context.bind_framebuffer(gl_context.FRAMEBUFFER, None)
        gl_context.tex_parameteri(gl_context.TEXTURE_2D, gl_context.TEXTURE_MIN_FILTER, gl_context.LINEAR)

    def test_operations_on_none_shader_and_program(self, gl_context):
        gl_context.shader_source(None, "void main() {}")
        gl_context.compile_shader(None)
        gl_context.attach_shader(None, None)
        gl_context.link_program(None)
        assert gl_context.get_uniform_location(None, "u_time") is None
        gl_context.uniform1f(None, 1.0)


class TestBindingsAndDrawing:
    def test_buffer_data_goes_to_bound_buffer(self, gl_context):
        buffer = gl_context.create_buffer()
        gl_context.bind_buffer(gl_context.ARRAY_BUFFER, buffer)
        gl_context.buffer_data(gl_context.ARRAY_BUFFER, [0.0, 1.0, 2.0], gl_context.STATIC_DRAW)
        assert buffer.target == gl_context.ARRAY_BUFFER
        assert buffer.data == [0.0, 1.0, 2.0]
        assert buffer.usage == gl_context.STATIC_DRAW

    def test_deleted_buffer_is_unbound(self, gl_context):
        buffer = gl_context.create_buffer()
        gl_context.bind_buffer(gl_context.ARRAY_BUFFER, buffer)
        gl_context.delete_buffer(buffer)
        gl_context.buffer_data(gl_context.ARRAY_BUFFER, [1], gl_context.STATIC_DRAW)
        assert buffer.data is None

    def test_shader_program_pipeline(self, gl_context):
        vertex = gl_context.create_shader(gl_context.VERTEX_SHADER)
        fragment = gl_context.create_shader(gl_context.FRAGMENT_SHADER)
        gl_context.shader_source(vertex, "attribute vec3 position;")
        gl_context.compile_shader(vertex)
        program = gl_context.create_program()
        gl_context.attach_shader(program, vertex)
        gl_context.attach_shader(program, fragment)
        gl_context.attach_shader(program, vertex)
        gl_context.link_program(program)
        gl_context.use_program(program)

        assert vertex.compiled and vertex.source == "attribute vec3 position;"
        assert program.linked
        assert gl_context.get_program_parameter(program, gl_context.ATTACHED_SHADERS) == 2
        assert gl_context.get_parameter(gl_context.CURRENT_PROGRAM) is program

        location = gl_context.get_uniform_location(program, "u_color")
        gl_context.uniform4fv(location, (1, 0, 0, 1))
        assert program.uniforms["u_color"] == [1, 0, 0, 1]

        gl_context.use_program(None)
        assert gl_context.state.current_program is None

    def test_deleting_current_program_clears_it(self, gl_context):
        program = gl_context.create_program()
        gl_context.use_program(program)
        gl_context.delete_program(program)
        assert gl_context.get_parameter(gl_context.CURRENT_PROGRAM) is None

    @pytest.mark.parametrize("program", [None, object(), 1])
    def test_status_queries_for_any_program(self, gl_context, program):
        assert gl_context.get_program_parameter(program, gl_context.LINK_STATUS) is True
        assert gl_context.get_program_parameter(program, 9999) is None
        assert gl_context.get_shader_parameter(program, gl_context.COMPILE_STATUS) is True
        assert gl_context.get_shader_info_log(program) == ""
        assert gl_context.get_program_info_log(program) == ""

    def test_textures_bind_per_unit(self, gl_context):
        first = gl_context.create_texture()
        second = gl_context.create_texture()
        gl_context.bind_texture(gl_context.TEXTURE_2D, first)
        gl_context.active_texture(gl_context.TEXTURE1)
        gl_context.bind_texture(gl_context.TEXTURE_2D, second)
        gl_context.tex_image_2d(gl_context.TEXTURE_2D, 0, gl_context.RGBA, 64, 32)
        gl_context.tex_parameteri(gl_context.TEXTURE_2D, gl_context.TEXTURE_MAG_FILTER, gl_context.NEAREST)

        assert (second.width, second.height, second.format) == (64, 32, gl_context.RGBA)
        assert second.parameters == {gl_context.TEXTURE_MAG_FILTER: gl_context.NEAREST}
        assert first.width == 0
        assert gl_context.get_parameter(gl_context.ACTIVE_TEXTURE) == gl_context.TEXTURE1

    def test_framebuffer_attachments(self, gl_context):
        framebuffer = gl_context.create_framebuffer()
        texture = gl_context.create_texture()
        renderbuffer = gl_context.create_renderbuffer()
        gl_context.bind_framebuffer(gl_context.FRAMEBUFFER, framebuffer)
        gl_context.framebuffer_texture_2d(
            gl_context.FRAMEBUFFER, gl_context.COLOR_ATTACHMENT0, gl_context.TEXTURE_2D, texture
        )
        gl_context.bind_renderbuffer(gl_context.RENDERBUFFER, renderbuffer)
        gl_context.renderbuffer_storage(gl_context.RENDERBUFFER, gl_context.DEPTH_COMPONENT16, 128, 128)
        gl_context.framebuffer_renderbuffer(
            gl_context.FRAMEBUFFER, gl_context.DEPTH_ATTACHMENT, gl_context.RENDERBUFFER, renderbuffer
        )

        assert framebuffer.attachments[gl_context.COLOR_ATTACHMENT0] is texture
        assert framebuffer.attachments[gl_context.DEPTH_ATTACHMENT] is renderbuffer
        assert (renderbuffer.width, renderbuffer.height) == (128, 128)
        assert gl_context.check_framebuffer_status(gl_context.FRAMEBUFFER) == gl_context.FRAMEBUFFER_COMPLETE

    def test_draw_stats(self, gl_context):
        gl_context.clear(gl_context.COLOR_BUFFER_BIT)
        gl_context.draw_arrays(gl_context.TRIANGLES, 0, 36)
        gl_context.draw_elements(gl_context.TRIANGLES, 6, gl_context.UNSIGNED_SHORT, 0)
        assert gl_context.draw_stats == {
            "clears": 1,
            "draw_arrays": 1,
            "draw_elements": 1,
            "vertices": 42,
        }
        gl_context.cleanup()
        assert gl_context.draw_stats["vertices"] == 0

    def test_vertex_attributes(self, gl_context):
        location = gl_context.get_attrib_location(None, "position")
        gl_context.enable_vertex_attrib_array(location)
        gl_context.vertex_attrib_pointer(location, 3, gl_context.FLOAT, False, 0, 0)
        gl_context.disable_vertex_attrib_array(location)
        assert 0 <= location < 16


class TestQueriesAndState:
    def test_fixed_parameters_by_enum_and_name(self, gl_context):
        assert gl_context.get_parameter(gl_context.VENDOR) == GL_VENDOR_STRING
        assert gl_context.get_parameter("RENDERER") == GL_RENDERER_STRING
        assert gl_context.get_parameter(gl_context.VERSION) == GL_VERSION_STRING
        assert gl_context.get_parameter("MAX_TEXTURE_SIZE") == GL_MAX_TEXTURE_SIZE

    @pytest.mark.parametrize(
        "number, name",
        [(3379, "MAX_TEXTURE_SIZE"), (34024, "MAX_RENDERBUFFER_SIZE"), (34921, "MAX_VERTEX_ATTRIBS")],
    )
    def test_numeric_enum_is_the_same_key_as_the_constant(self, gl_context, number, name):
        assert getattr(gl_context, name) == number
        assert gl_context.get_parameter(number) == gl_context.get_parameter(name)
        assert gl_context.get_parameter(number) is not None

    @pytest.mark.parametrize("pname", [9999, "NOT_A_PARAMETER", None, [1]])
    def test_unknown_parameter_is_none(self, gl_context, pname):
        assert gl_context.get_parameter(pname) is None

    def test_live_state_parameters(self, gl_context):
        assert gl_context.get_parameter(gl_context.VIEWPORT) == [0, 0, 640, 480]
        gl_context.viewport(0, 0, 320, 240)
        gl_context.clear_color(0.1, 0.2, 0.3, 1.0)
        assert gl_context.get_parameter(gl_context.VIEWPORT) == [0, 0, 320, 240]
        assert gl_context.get_parameter(gl_context.COLOR_CLEAR_VALUE) == [0.1, 0.2, 0.3, 1.0]

    def test_pipeline_defaults(self):
        state = PipelineState()
        assert state.depth_test is True
        assert state.blend is False
        assert state.cull_face is False
        assert state.clear_color == (0.0, 0.0, 0.0, 0.0)

    def test_enable_disable_capabilities(self, gl_context):
        gl_context.enable(gl_context.BLEND)
        gl_context.disable(gl_context.DEPTH_TEST)
        gl_context.enable(12345)
        assert gl_context.is_enabled(gl_context.BLEND)
        assert not gl_context.is_enabled(gl_context.DEPTH_TEST)
        assert not gl_context.is_enabled(12345)
        gl_context.blend_func(gl_context.SRC_ALPHA, gl_context.ONE_MINUS_SRC_ALPHA)
        gl_context.depth_func(gl_context.LEQUAL)
        gl_context.cull_face(gl_context.FRONT)
        assert gl_context.state.blend_func == (gl_context.SRC_ALPHA, gl_context.ONE_MINUS_SRC_ALPHA)
        assert gl_context.state.depth_func == gl_context.LEQUAL
        assert gl_context.state.cull_face_mode == gl_context.FRONT

    def test_cleanup_restores_default_state(self, gl_context):
        gl_context.enable(gl_context.BLEND)
        gl_context.viewport(1, 2, 3, 4)
        gl_context.cleanup()
        assert not gl_context.is_enabled(gl_context.BLEND)
        assert gl_context.get_parameter(gl_context.VIEWPORT) == [0, 0, 640, 480]

    def test_get_error(self, gl_context):
        assert gl_context.get_error() == gl_context.NO_ERROR


class TestExtensions:
    def test_supported_extensions(self, gl_context):
        assert gl_context.get_supported_extensions() == SUPPORTED_EXTENSIONS

    def test_unknown_extension_is_none(self, gl_context):
        assert gl_context.get_extension("WEBGL_draw_buffers") is None

    def test_debug_renderer_info(self, gl_context):
        extension = gl_context.get_extension("WEBGL_debug_renderer_info")
        assert extension is gl_context.get_extension("WEBGL_debug_renderer_info")
        assert gl_context.get_parameter(extension.UNMASKED_VENDOR_WEBGL) == "Simulated Vendor"
        assert gl_context.get_parameter(extension.UNMASKED_RENDERER_WEBGL) == "Simulated Renderer"

    def test_lose_and_restore_context(self, gl_context):
        events = []
        gl_context.canvas.add_event_listener("webglcontextlost", lambda _: events.append("lost"))
        gl_context.canvas.add_event_listener("webglcontextrestored", lambda _: events.append("restored"))
        extension = gl_context.get_extension("WEBGL_lose_context")

        extension.lose_context()
        assert gl_context.is_context_lost()
        extension.restore_context()
        assert not gl_context.is_context_lost()
        assert events == ["lost", "restored"]


class TestCanvas:
    @pytest.mark.parametrize("context_id", ["webgl", "experimental-webgl"])
    def test_webgl_context_is_cached(self, context_id):
        canvas = SimulatedCanvas(800, 600)
        context = canvas.get_context(context_id)
        assert isinstance(context, SimulatedGLContext)
        assert canvas.get_context("webgl") is context
        assert canvas.context is context
        assert context.get_parameter(context.VIEWPORT) == [0, 0, 800, 600]

    def test_webgl2_context(self):
        canvas = SimulatedCanvas()
        context = canvas.get_context("webgl2")
        assert isinstance(context, SimulatedGL2Context)
        assert context.webgl_version == 2
        assert context.get_parameter(context.VERSION) == "WebGL 2.0"
        assert canvas.get_context("webgl") is None

    def test_single_context_per_canvas(self):
        canvas = SimulatedCanvas()
        canvas.get_context("webgl")
        assert canvas.get_context("webgl2") is None

    @pytest.mark.parametrize("context_id", ["2d", "bitmaprenderer", ""])
    def test_unsupported_context_ids(self, context_id):
        canvas = SimulatedCanvas()
        assert canvas.get_context(context_id) is None
        assert canvas.context is None

    def test_default_canvas_for_bare_context(self):
        context = SimulatedGLContext()
        assert (context.canvas.width, context.canvas.height) == (300, 150)
        assert context.canvas.get_context("webgl") is context

    def test_canvas_resize_and_events(self):
        canvas = SimulatedCanvas()
        seen = []

        def handler(payload):
            seen.append(payload)

        canvas.set_size(1024, 768)
        canvas.add_event_listener("resize", handler)
        canvas.dispatch_event("resize", "first")
        canvas.remove_event_listener("resize", handler)
        canvas.dispatch_event("resize", "second")
        assert (canvas.client_width, canvas.client_height) == (1024, 768)
        assert seen == ["first"]
        assert canvas.to_data_url().startswith("data:image/png;base64,")
