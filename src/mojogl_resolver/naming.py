"""Public-name mangling for functions, enumerants, parameters and extensions."""

import keyword

from .settings import NameManglerSettings

MOJO_KEYWORDS = {
    "alias",
    "borrowed",
    "fn",
    "inout",
    "out",
    "owned",
    "ref",
    "struct",
    "trait",
    "type",
    "var",
}


def mangle_function_name(entry_point: str, settings: NameManglerSettings) -> str:
    """glClear -> Clear, ChoosePixelFormat stays as is."""
    if entry_point in settings.functions_without_prefix:
        return entry_point
    if entry_point.startswith(settings.function_prefix):
        return entry_point[len(settings.function_prefix) :]
    return entry_point


def mangle_enum_name(name: str, settings: NameManglerSettings) -> str:
    """GL_COLOR_BUFFER_BIT -> ColorBufferBit, GL_2D -> _2d."""
    if name not in settings.enums_without_prefix:
        for prefix in settings.enum_prefixes:
            if name.startswith(prefix):
                name = name[len(prefix) :]
                break

    words = [word for word in name.split("_") if word]
    mangled = "".join(word[0].upper() + word[1:].lower() for word in words)
    if not mangled or mangled[0].isdigit():
        mangled = "_" + mangled
    return mangled


def mangle_parameter_name(name: str) -> str:
    if keyword.iskeyword(name) or name in MOJO_KEYWORDS:
        return name + "_"
    return name


def mangle_extension_name(name: str, settings: NameManglerSettings) -> str:
    """GL_ARB_sync -> ARB_sync."""
    if name.startswith(settings.extension_prefix):
        return name[len(settings.extension_prefix) :]
    return name
