"""Mapping of registry types to Mojo type descriptors."""

import logging
from collections.abc import Callable
from typing import Optional

from .errors import GenerationError
from .target_types import (
    MojoBool,
    MojoChar,
    MojoEnum,
    MojoFunctionPointer,
    MojoPointer,
    MojoPrimitive,
    MojoStruct,
    MojoStructPrimitive,
    MojoType,
    MojoVoid,
)
from .types import BaseType, GroupRef, PointerType, PrimitiveType, SpecType

logger = logging.getLogger(__name__)


def _primitive(name: str) -> Callable[[bool], MojoType]:
    return lambda const: MojoPrimitive(name, const)


def _handle(name: str, underlying: str) -> Callable[[bool], MojoType]:
    return lambda const: MojoStructPrimitive(name, MojoPrimitive(underlying, const), const)


def _struct(name: str) -> Callable[[bool], MojoType]:
    return lambda const: MojoStruct(name, const)


def _function_pointer(name: str) -> Callable[[bool], MojoType]:
    return lambda const: MojoFunctionPointer(name, const)


def _void(const: bool) -> MojoType:
    return MojoVoid(const)


# Every primitive kind except INVALID must be listed here.
PRIMITIVE_CATALOG: dict[PrimitiveType, Callable[[bool], MojoType]] = {
    PrimitiveType.VOID: _void,
    PrimitiveType.BYTE: _primitive("UInt8"),
    PrimitiveType.SBYTE: _primitive("Int8"),
    PrimitiveType.SHORT: _primitive("Int16"),
    PrimitiveType.USHORT: _primitive("UInt16"),
    PrimitiveType.INT: _primitive("Int32"),
    PrimitiveType.UINT: _primitive("UInt32"),
    PrimitiveType.LONG: _primitive("Int64"),
    PrimitiveType.ULONG: _primitive("UInt64"),
    PrimitiveType.HALF: _handle("Half", "UInt16"),
    PrimitiveType.FLOAT: _primitive("Float32"),
    PrimitiveType.DOUBLE: _primitive("Float64"),
    PrimitiveType.BOOL8: lambda const: MojoBool(8, const),
    PrimitiveType.BOOL32: lambda const: MojoBool(32, const),
    PrimitiveType.CHAR8: lambda const: MojoChar(8, const),
    # Enums without a group bind to the catch-all group.
    PrimitiveType.ENUM: lambda const: MojoEnum("All", MojoPrimitive("UInt32", const), const),
    PrimitiveType.INT_PTR: _primitive("Int"),
    PrimitiveType.NINT: _primitive("Int"),
    PrimitiveType.VOID_PTR: lambda const: MojoPointer(MojoVoid(False), const),
    PrimitiveType.GL_HANDLE_ARB: _handle("GLHandleARB", "Int"),
    PrimitiveType.GL_SYNC: _handle("GLSync", "Int"),
    PrimitiveType.CL_CONTEXT: _handle("CLContext", "Int"),
    PrimitiveType.CL_EVENT: _handle("CLEvent", "Int"),
    PrimitiveType.GL_DEBUG_PROC: _function_pointer("GLDebugProc"),
    PrimitiveType.GL_DEBUG_PROC_ARB: _function_pointer("GLDebugProcARB"),
    PrimitiveType.GL_DEBUG_PROC_KHR: _function_pointer("GLDebugProcKHR"),
    PrimitiveType.GL_DEBUG_PROC_AMD: _function_pointer("GLDebugProcAMD"),
    PrimitiveType.GL_DEBUG_PROC_NV: _function_pointer("GLDebugProcNV"),
    PrimitiveType.GL_VULKAN_PROC_NV: _function_pointer("GLVulkanProcNV"),
    # WGL
    PrimitiveType.WGL_PROC: _function_pointer("PROC"),
    PrimitiveType.WGL_RECT: _struct("Rect"),
    PrimitiveType.WGL_LPSTRING: lambda const: MojoPointer(MojoChar(16, True), const),
    PrimitiveType.WGL_COLORREF: lambda const: MojoStructPrimitive(
        "ColorRef", MojoPrimitive("UInt32"), const
    ),
    PrimitiveType.WGL_LAYERPLANEDESCRIPTOR: _struct("LayerPlaneDescriptor"),
    PrimitiveType.WGL_PIXELFORMATDESCRIPTOR: _struct("PixelFormatDescriptor"),
    PrimitiveType.WGL_GPU_DEVICE: _struct("GPUDevice"),
    PrimitiveType.WGL_PGPU_DEVICE: lambda const: MojoPointer(MojoStruct("GPUDevice"), const),
    # GLX
    PrimitiveType.GLX_COLORMAP: _handle("Colormap", "UInt"),
    PrimitiveType.GLX_DISPLAY: _struct("Display"),
    PrimitiveType.GLX_FONT: _handle("Font", "UInt"),
    PrimitiveType.GLX_PIXMAP: _handle("Pixmap", "UInt"),
    PrimitiveType.GLX_SCREEN: _struct("Screen"),
    PrimitiveType.GLX_STATUS: _primitive("Int32"),
    PrimitiveType.GLX_WINDOW: _handle("Window", "UInt"),
    PrimitiveType.GLX_EXT_FUNC_PTR: _function_pointer("GLXextFuncPtr"),
    PrimitiveType.GLX_XVISUALINFO: _struct("XVisualInfo"),
    # Declared only behind _DM_BUFFER_H_ / _VL_H in glxext.h
    PrimitiveType.GLX_DMBUFFER: _void,
    PrimitiveType.GLX_DMPARAMS: _void,
    PrimitiveType.GLX_VLNODE: _void,
    PrimitiveType.GLX_VLPATH: _void,
    PrimitiveType.GLX_VLSERVER: _void,
    PrimitiveType.GLX_FBCONFIG_ID: _handle("FBConfigID", "UInt"),
    PrimitiveType.GLX_FBCONFIG: _handle("GLXFBConfig", "Int"),
    PrimitiveType.GLX_CONTEXT_ID: _handle("GLXContextID", "UInt"),
    PrimitiveType.GLX_CONTEXT: _handle("GLXContext", "Int"),
    PrimitiveType.GLX_GLXPIXMAP: _handle("GLXPixmap", "UInt"),
    PrimitiveType.GLX_GLXDRAWABLE: _handle("GLXDrawable", "UInt"),
    PrimitiveType.GLX_GLXWINDOW: _handle("GLXWindow", "UInt"),
    PrimitiveType.GLX_GLXPBUFFER: _handle("GLXPbuffer", "UInt"),
    PrimitiveType.GLX_VIDEO_CAPTURE_DEVICE_NV: _handle("GLXVideoCaptureDeviceNV", "UInt"),
    PrimitiveType.GLX_VIDEO_DEVICE_NV: _handle("GLXVideoDeviceNV", "UInt32"),
    PrimitiveType.GLX_VIDEO_SOURCE_SGIX: _handle("GLXVideoSourceSGIX", "UInt"),
    PrimitiveType.GLX_FBCONFIG_ID_SGIX: _handle("GLXFBConfigIDSGIX", "UInt"),
    PrimitiveType.GLX_FBCONFIG_SGIX: _handle("GLXFBConfigSGIX", "Int"),
    PrimitiveType.GLX_GLXPBUFFER_SGIX: _handle("GLXPbufferSGIX", "UInt"),
    PrimitiveType.GLX_PBUFFER_CLOBBER_EVENT: _struct("GLXPbufferClobberEvent"),
    PrimitiveType.GLX_BUFFER_SWAP_COMPLETE: _struct("GLXBufferSwapComplete"),
    PrimitiveType.GLX_EVENT: _struct("GLXEvent"),
    PrimitiveType.GLX_STEREO_NOTIFY_EVENT_EXT: _struct("GLXStereoNotifyEventEXT"),
    PrimitiveType.GLX_BUFFER_CLOBBER_EVENT_SGIX: _struct("GLXBufferClobberEventSGIX"),
    PrimitiveType.GLX_HYPERPIPE_NETWORK_SGIX: _struct("GLXHyperpipeNetworkSGIX"),
    PrimitiveType.GLX_HYPERPIPE_CONFIG_SGIX: _struct("GLXHyperpipeConfigSGIX"),
    PrimitiveType.GLX_PIPE_RECT: _struct("GLXPipeRect"),
    PrimitiveType.GLX_PIPE_RECT_LIMITS: _struct("GLXPipeRectLimits"),
}

_ENUM_STORAGE = {
    PrimitiveType.INT: "Int32",
    PrimitiveType.UINT: "UInt32",
}


def map_type(
    spec_type: SpecType,
    handle: Optional[str] = None,
    group: Optional[GroupRef] = None,
    typesafe_handles: bool = False,
) -> MojoType:
    """Convert a registry type into a Mojo type descriptor.

    Pointers wrap the mapping of their base type; handle and group
    annotations apply to the innermost base type.
    """
    if isinstance(spec_type, PointerType):
        inner = map_type(spec_type.base, handle, group, typesafe_handles)
        return MojoPointer(inner, spec_type.const)

    if not isinstance(spec_type, BaseType):
        raise GenerationError(
            "UNMAPPABLE_TYPE", f"Unknown spec type node: {spec_type!r}"
        )

    const = spec_type.const
    if handle is not None:
        if typesafe_handles:
            return MojoStructPrimitive(handle, MojoPrimitive("Int32", const), const)
        # Handles stay plain Int32 to keep the untyped-handle API.
        return MojoPrimitive("Int32", const)

    storage = _ENUM_STORAGE.get(spec_type.primitive)
    if group is not None and storage is not None:
        logger.debug("Making %s into group %s", spec_type.primitive.name, group.name)
        return MojoEnum(group.name, MojoPrimitive(storage, const), const)

    if spec_type.primitive is PrimitiveType.ENUM and group is not None:
        return MojoEnum(group.name, MojoPrimitive("UInt32", const), const)

    factory = PRIMITIVE_CATALOG.get(spec_type.primitive)
    if factory is None:
        raise GenerationError(
            "UNMAPPABLE_TYPE",
            f"No Mojo type for primitive {spec_type.primitive.name}",
            "Add the primitive to PRIMITIVE_CATALOG.",
        )
    return factory(const)
