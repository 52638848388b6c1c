"""WebGL enum values used by the simulated graphics context.

Values match the WebGL 1.0 specification so test code written against a real
context can pass the same numbers. :class:`GLConstants` exposes them as class
attributes, which is how callers normally reach them (``gl.ARRAY_BUFFER``).
"""

from __future__ import annotations


class GLConstants:
    # Buffer targets and usage
    ARRAY_BUFFER = 34962
    ELEMENT_ARRAY_BUFFER = 34963
    STREAM_DRAW = 35040
    STATIC_DRAW = 35044
    DYNAMIC_DRAW = 35048

    # Data types
    BYTE = 5120
    UNSIGNED_BYTE = 5121
    SHORT = 5122
    UNSIGNED_SHORT = 5123
    INT = 5124
    UNSIGNED_INT = 5125
    FLOAT = 5126

    # Shaders and programs
    FRAGMENT_SHADER = 35632
    VERTEX_SHADER = 35633
    DELETE_STATUS = 35712
    COMPILE_STATUS = 35713
    LINK_STATUS = 35714
    VALIDATE_STATUS = 35715
    ATTACHED_SHADERS = 35717
    SHADER_TYPE = 35663
    CURRENT_PROGRAM = 35725

    # Textures
    TEXTURE_2D = 3553
    TEXTURE_CUBE_MAP = 34067
    TEXTURE0 = 33984
    TEXTURE1 = 33985
    ACTIVE_TEXTURE = 34016
    TEXTURE_MAG_FILTER = 10240
    TEXTURE_MIN_FILTER = 10241
    TEXTURE_WRAP_S = 10242
    TEXTURE_WRAP_T = 10243
    NEAREST = 9728
    LINEAR = 9729
    REPEAT = 10497
    CLAMP_TO_EDGE = 33071
    MIRRORED_REPEAT = 33648
    RGB = 6407
    RGBA = 6408
    LUMINANCE = 6409
    LUMINANCE_ALPHA = 6410

    # Framebuffers and renderbuffers
    FRAMEBUFFER = 36160
    RENDERBUFFER = 36161
    FRAMEBUFFER_COMPLETE = 36053
    COLOR_ATTACHMENT0 = 36064
    DEPTH_ATTACHMENT = 36096
    STENCIL_ATTACHMENT = 36128
    DEPTH_COMPONENT16 = 33189

    # Clear masks
    DEPTH_BUFFER_BIT = 256
    STENCIL_BUFFER_BIT = 1024
    COLOR_BUFFER_BIT = 16384

    # Draw modes
    POINTS = 0
    LINES = 1
    LINE_LOOP = 2
    LINE_STRIP = 3
    TRIANGLES = 4
    TRIANGLE_STRIP = 5
    TRIANGLE_FAN = 6

    # Blend factors
    ZERO = 0
    ONE = 1
    SRC_ALPHA = 770
    ONE_MINUS_SRC_ALPHA = 771

    # Depth functions
    NEVER = 512
    LESS = 513
    EQUAL = 514
    LEQUAL = 515
    GREATER = 516
    NOTEQUAL = 517
    GEQUAL = 518
    ALWAYS = 519

    # Face culling
    FRONT = 1028
    BACK = 1029
    FRONT_AND_BACK = 1032

    # Capabilities
    CULL_FACE = 2884
    DEPTH_TEST = 2929
    BLEND = 3042

    # Errors
    NO_ERROR = 0
    INVALID_ENUM = 1280
    INVALID_VALUE = 1281
    INVALID_OPERATION = 1282
    OUT_OF_MEMORY = 1285
    CONTEXT_LOST_WEBGL = 37442

    # Parameter queries
    VIEWPORT = 2978
    COLOR_CLEAR_VALUE = 3106
    MAX_TEXTURE_SIZE = 3379
    MAX_RENDERBUFFER_SIZE = 34024
    MAX_VERTEX_ATTRIBS = 34921
    VENDOR = 7936
    RENDERER = 7937
    VERSION = 7938
    SHADING_LANGUAGE_VERSION = 35724

    # WEBGL_debug_renderer_info
    UNMASKED_VENDOR_WEBGL = 37445
    UNMASKED_RENDERER_WEBGL = 37446


CONTEXT_IDS_WEBGL1 = ("webgl", "experimental-webgl")
CONTEXT_ID_WEBGL2 = "webgl2"

__all__ = ["GLConstants", "CONTEXT_IDS_WEBGL1", "CONTEXT_ID_WEBGL2"]
