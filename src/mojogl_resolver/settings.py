"""Per-family configuration threaded through the resolution pipeline."""

from dataclasses import dataclass

from .types import GLFile


@dataclass(frozen=True)
class NameManglerSettings:
    function_prefix: str  # "gl"
    enum_prefixes: tuple[str, ...]  # ("GL_",)
    extension_prefix: str  # "GL_"
    functions_without_prefix: frozenset[str] = frozenset()
    enums_without_prefix: frozenset[str] = frozenset()


@dataclass(frozen=True)
class GeneratorSettings:
    file: GLFile
    mangler: NameManglerSettings
    # Function references that may be unresolved without failing the run.
    ignore_functions: frozenset[str] = frozenset()
    # Enum references that are skipped on purpose (string-valued "enums").
    ignore_enums: frozenset[str] = frozenset()
    typesafe_handles: bool = False


GL_SETTINGS = GeneratorSettings(
    file=GLFile.GL,
    mangler=NameManglerSettings(
        function_prefix="gl",
        enum_prefixes=("GL_",),
        extension_prefix="GL_",
    ),
)

WGL_SETTINGS = GeneratorSettings(
    file=GLFile.WGL,
    mangler=NameManglerSettings(
        function_prefix="wgl",
        enum_prefixes=("WGL_",),
        extension_prefix="WGL_",
        functions_without_prefix=frozenset(
            {
                "ChoosePixelFormat",
                "DescribePixelFormat",
                "GetPixelFormat",
                "SetPixelFormat",
                "SwapBuffers",
                "GetEnhMetaFilePixelFormat",
            }
        ),
        enums_without_prefix=frozenset(
            {
                "ERROR_INVALID_VERSION_ARB",
                "ERROR_INVALID_PROFILE_ARB",
                "ERROR_INVALID_PIXEL_TYPE_ARB",
                "ERROR_INCOMPATIBLE_DEVICE_CONTEXTS_ARB",
                "ERROR_INVALID_PIXEL_TYPE_EXT",
                "ERROR_INCOMPATIBLE_AFFINITY_MASKS_NV",
                "ERROR_MISSING_AFFINITY_MASK_NV",
            }
        ),
    ),
)

GLX_SETTINGS = GeneratorSettings(
    file=GLFile.GLX,
    mangler=NameManglerSettings(
        function_prefix="glX",
        enum_prefixes=("GLX_", "__GLX_"),
        extension_prefix="GLX_",
    ),
    ignore_functions=frozenset(
        {
            # Only declared when _DM_BUFFER_H_ is defined
            "glXAssociateDMPbufferSGIX",
            # Only declared when _VL_H is defined
            "glXCreateGLXVideoSourceSGIX",
            "glXDestroyGLXVideoSourceSGIX",
        }
    ),
    ignore_enums=frozenset({"GLX_EXTENSION_NAME"}),
)

FAMILY_SETTINGS = {
    GLFile.GL: GL_SETTINGS,
    GLFile.WGL: WGL_SETTINGS,
    GLFile.GLX: GLX_SETTINGS,
}
