"""Function pointer tables for the dynamic loader."""

from dataclasses import dataclass

from .enum_groups import FILE_OUTPUT_APIS
from .namespaces import Namespace
from .native import NativeFunction
from .types import GLFile


@dataclass(frozen=True)
class Pointers:
    file: GLFile
    functions: tuple[NativeFunction, ...]


def build_pointers(file: GLFile, namespaces: list[Namespace]) -> Pointers:
    """Every native function used by any namespace of the family, sorted by entry point."""
    family_apis = FILE_OUTPUT_APIS[file]

    # Native functions compare by identity, so this dedupes shared functions.
    functions: dict[NativeFunction, None] = {}
    for namespace in namespaces:
        if namespace.api not in family_apis:
            continue
        for vendor_functions in namespace.vendors.values():
            for function in vendor_functions.functions:
                functions.setdefault(function.native_function, None)

    return Pointers(file, tuple(sorted(functions, key=lambda f: f.entry_point)))
