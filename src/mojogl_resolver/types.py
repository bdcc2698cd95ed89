"""Data types for the parsed OpenGL-family specification and documentation."""

from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from typing import NamedTuple, Optional, Union


class GLFile(Enum):
    """The registry file a record was parsed from."""

    GL = "gl"
    WGL = "wgl"
    GLX = "glx"


class GLProfile(Enum):
    NONE = "none"
    CORE = "core"
    COMPATIBILITY = "compatibility"


class InputApi(Enum):
    """An `api` attribute value as it appears on <feature> tags."""

    GL = "gl"
    GLES1 = "gles1"
    GLES2 = "gles2"
    WGL = "wgl"
    GLX = "glx"


class OutputApi(Enum):
    """A resolved API variant that gets its own namespace."""

    GL = "GL"
    GLCOMPAT = "GLCompat"
    GLES1 = "GLES1"
    GLES2 = "GLES2"
    WGL = "WGL"
    GLX = "GLX"


class EnumApi(Flag):
    """Which output APIs an enumerant applies to."""

    NONE = 0
    GL = auto()
    GLCOMPAT = auto()
    GLES1 = auto()
    GLES2 = auto()
    WGL = auto()
    GLX = auto()


class EnumKind(Enum):
    PLAIN = "plain"
    BITMASK = "bitmask"


class FlowDirection(Enum):
    IN = "in"
    OUT = "out"
    UNDEFINED = "undefined"


class Version(NamedTuple):
    major: int
    minor: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"

    @classmethod
    def parse(cls, raw: str) -> "Version":
        major_text, minor_text = raw.split(".", maxsplit=1)
        return cls(int(major_text), int(minor_text))


class PrimitiveType(Enum):
    """Every base type the registries use, after typedef resolution."""

    INVALID = auto()

    VOID = auto()
    BYTE = auto()
    SBYTE = auto()
    SHORT = auto()
    USHORT = auto()
    INT = auto()
    UINT = auto()
    LONG = auto()
    ULONG = auto()
    HALF = auto()
    FLOAT = auto()
    DOUBLE = auto()

    BOOL8 = auto()
    BOOL32 = auto()
    CHAR8 = auto()

    ENUM = auto()

    INT_PTR = auto()
    NINT = auto()
    VOID_PTR = auto()

    GL_HANDLE_ARB = auto()
    GL_SYNC = auto()
    CL_CONTEXT = auto()
    CL_EVENT = auto()

    GL_DEBUG_PROC = auto()
    GL_DEBUG_PROC_ARB = auto()
    GL_DEBUG_PROC_KHR = auto()
    GL_DEBUG_PROC_AMD = auto()
    GL_DEBUG_PROC_NV = auto()
    GL_VULKAN_PROC_NV = auto()

    WGL_PROC = auto()
    WGL_RECT = auto()
    WGL_LPSTRING = auto()
    WGL_COLORREF = auto()
    WGL_LAYERPLANEDESCRIPTOR = auto()
    WGL_PIXELFORMATDESCRIPTOR = auto()
    WGL_GPU_DEVICE = auto()
    WGL_PGPU_DEVICE = auto()

    GLX_COLORMAP = auto()
    GLX_DISPLAY = auto()
    GLX_FONT = auto()
    GLX_PIXMAP = auto()
    GLX_SCREEN = auto()
    GLX_STATUS = auto()
    GLX_WINDOW = auto()
    GLX_EXT_FUNC_PTR = auto()
    GLX_XVISUALINFO = auto()
    GLX_DMBUFFER = auto()
    GLX_DMPARAMS = auto()
    GLX_VLNODE = auto()
    GLX_VLPATH = auto()
    GLX_VLSERVER = auto()
    GLX_FBCONFIG_ID = auto()
    GLX_FBCONFIG = auto()
    GLX_CONTEXT_ID = auto()
    GLX_CONTEXT = auto()
    GLX_GLXPIXMAP = auto()
    GLX_GLXDRAWABLE = auto()
    GLX_GLXWINDOW = auto()
    GLX_GLXPBUFFER = auto()
    GLX_VIDEO_CAPTURE_DEVICE_NV = auto()
    GLX_VIDEO_DEVICE_NV = auto()
    GLX_VIDEO_SOURCE_SGIX = auto()
    GLX_FBCONFIG_ID_SGIX = auto()
    GLX_FBCONFIG_SGIX = auto()
    GLX_GLXPBUFFER_SGIX = auto()
    GLX_PBUFFER_CLOBBER_EVENT = auto()
    GLX_BUFFER_SWAP_COMPLETE = auto()
    GLX_EVENT = auto()
    GLX_STEREO_NOTIFY_EVENT_EXT = auto()
    GLX_BUFFER_CLOBBER_EVENT_SGIX = auto()
    GLX_HYPERPIPE_NETWORK_SGIX = auto()
    GLX_HYPERPIPE_CONFIG_SGIX = auto()
    GLX_PIPE_RECT = auto()
    GLX_PIPE_RECT_LIMITS = auto()


@dataclass(frozen=True)
class BaseType:
    """A non-pointer type, e.g. `const GLuint`."""

    primitive: PrimitiveType
    const: bool = False


@dataclass(frozen=True)
class PointerType:
    """A pointer to another spec type, e.g. `GLuint *` or `const void **`."""

    base: "SpecType"
    const: bool = False


SpecType = Union[BaseType, PointerType]


@dataclass(frozen=True)
class GroupRef:
    name: str  # "ClearBufferMask"
    namespace: GLFile = GLFile.GL


@dataclass(frozen=True)
class ParameterType:
    """A spec type together with the class/group annotations from the registry."""

    type: SpecType
    handle: Optional[str] = None  # "ProgramHandle"
    group: Optional[GroupRef] = None


@dataclass(frozen=True)
class LengthRelation:
    """The `len` attribute of a parameter.

    Exactly one of the three forms is set: a static element count, a reference
    to another parameter holding the count, or a list of parameters the count
    is computed from (`COMPSIZE(...)`).
    """

    static_count: Optional[int] = None
    parameter: Optional[str] = None
    computed_from: tuple[str, ...] = ()

    @property
    def is_reference(self) -> bool:
        return self.parameter is not None

    @property
    def is_computed(self) -> bool:
        return bool(self.computed_from)


@dataclass(frozen=True)
class CommandParameter:
    name: str  # "target"
    type: ParameterType
    flow: FlowDirection = FlowDirection.IN
    length: Optional[LengthRelation] = None


@dataclass(frozen=True)
class Command:
    """Represents an OpenGL function/command as declared in the registry."""

    entry_point: str  # "glClear"
    return_type: ParameterType
    parameters: tuple[CommandParameter, ...] = ()


@dataclass(frozen=True)
class EnumEntry:
    """Represents an enum constant and every group it takes part in."""

    name: str  # "GL_COLOR_BUFFER_BIT"
    value: int  # 0x00004000
    groups: tuple[tuple[str, GLFile], ...] = ()
    api: EnumApi = EnumApi.NONE
    kind: EnumKind = EnumKind.PLAIN

    @property
    def is_bitmask(self) -> bool:
        return self.kind is EnumKind.BITMASK


@dataclass(frozen=True)
class RequireEntry:
    """A <require> block of a version feature or of an extension."""

    version: Optional[Version] = None
    extension: Optional[str] = None  # "GL_ARB_sync"
    vendor: str = ""  # "ARB"
    profile: GLProfile = GLProfile.NONE
    commands: tuple[str, ...] = ()
    enums: tuple[str, ...] = ()


@dataclass(frozen=True)
class RemoveEntry:
    """A <remove> block; only version features remove anything."""

    version: Version
    profile: GLProfile = GLProfile.NONE
    commands: tuple[str, ...] = ()
    enums: tuple[str, ...] = ()


@dataclass(frozen=True)
class ApiFeatures:
    api: InputApi
    requires: tuple[RequireEntry, ...] = ()
    removes: tuple[RemoveEntry, ...] = ()


@dataclass(frozen=True)
class Specification:
    commands: tuple[Command, ...] = ()
    enums: tuple[EnumEntry, ...] = ()
    apis: tuple[ApiFeatures, ...] = ()


@dataclass(frozen=True)
class ParameterDocumentation:
    name: str
    description: str = ""


@dataclass(frozen=True)
class CommandDocumentation:
    name: str  # "glClear"
    purpose: str = ""
    parameters: tuple[ParameterDocumentation, ...] = ()
    ref_pages_link: Optional[str] = None


@dataclass(frozen=True)
class VersionDocumentation:
    commands: dict[str, CommandDocumentation] = field(default_factory=dict)


@dataclass(frozen=True)
class Documentation:
    versions: dict[OutputApi, VersionDocumentation] = field(default_factory=dict)
