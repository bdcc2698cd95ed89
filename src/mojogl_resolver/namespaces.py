"""Assembly of one deterministic namespace per output API."""

from dataclasses import dataclass
from typing import Optional

from .documentation import FunctionDocumentation, document_function
from .enum_groups import EnumCatalog, EnumGroupMember
from .errors import GenerationError
from .features import (
    Reference,
    ResolvedEnums,
    ResolvedFunctions,
    resolve_enums,
    resolve_functions,
)
from .multimap import MultiMap
from .native import NativeFunction
from .overloads import OverloadedFunction
from .settings import GeneratorSettings
from .types import OutputApi

ALL_GROUP = "All"
# Holds constants that do not fit the enum types; never emitted as a group.
SPECIAL_NUMBERS_GROUP = "SpecialNumbers"


@dataclass(frozen=True)
class EnumGroup:
    name: str
    is_flags: bool
    members: tuple[EnumGroupMember, ...]
    # (vendor, function) pairs using the group; None for the All group.
    functions: Optional[tuple[tuple[str, NativeFunction], ...]]


@dataclass(frozen=True)
class VendorFunctions:
    functions: tuple[OverloadedFunction, ...]
    native_functions_with_postfix: tuple[NativeFunction, ...]


@dataclass(frozen=True)
class Namespace:
    api: OutputApi
    vendors: dict[str, VendorFunctions]
    enum_groups: tuple[EnumGroup, ...]
    documentation: dict[NativeFunction, FunctionDocumentation]


def _by_value_then_name(member: EnumGroupMember) -> tuple[int, str]:
    return (member.value, member.name)


def _core_first(entry: tuple[str, NativeFunction]) -> tuple[bool, str, str]:
    vendor, function = entry
    return (vendor != "", function.function_name, function.entry_point)


def _by_function_name(function: OverloadedFunction) -> tuple[str, str]:
    native = function.native_function
    return (native.function_name, native.entry_point)


def build_enum_groups(
    functions: ResolvedFunctions, enums: ResolvedEnums, catalog: EnumCatalog
) -> tuple[EnumGroup, ...]:
    groups_used_by: MultiMap[str, tuple[str, NativeFunction]] = MultiMap()
    for vendor, vendor_functions in functions.by_vendor.items():
        for function in vendor_functions:
            native = function.native_function
            for group_name in sorted(native.referenced_enum_groups):
                groups_used_by.add(group_name, (vendor, native))

    groups = [
        EnumGroup(
            ALL_GROUP,
            False,
            tuple(sorted(enums.all_members, key=_by_value_then_name)),
            None,
        )
    ]

    for group_name in sorted(catalog.groups):
        if group_name == SPECIAL_NUMBERS_GROUP:
            continue

        members = enums.by_group.get(group_name)
        # Empty groups are kept only when a function uses them; GL 4.1-4.5
        # use ShaderBinaryFormat without requiring any of its enums.
        if not members and group_name not in functions.referenced_groups:
            continue

        groups.append(
            EnumGroup(
                group_name,
                catalog.groups[group_name],
                tuple(sorted(members, key=_by_value_then_name)),
                tuple(sorted(groups_used_by.get(group_name), key=_core_first)),
            )
        )

    return tuple(groups)


def build_vendors(functions: ResolvedFunctions) -> dict[str, VendorFunctions]:
    vendors = {}
    # "" sorts before every vendor name, so the core bucket comes first.
    for vendor in sorted(functions.by_vendor.keys()):
        vendor_functions = sorted(functions.by_vendor.get(vendor), key=_by_function_name)
        vendors[vendor] = VendorFunctions(
            functions=tuple(vendor_functions),
            native_functions_with_postfix=tuple(
                f.native_function for f in vendor_functions if f.change_native_name
            ),
        )
    return vendors


def build_documentation(
    api: OutputApi,
    vendors: dict[str, VendorFunctions],
    references: dict[str, Reference],
    settings: GeneratorSettings,
) -> dict[NativeFunction, FunctionDocumentation]:
    documentation: dict[NativeFunction, FunctionDocumentation] = {}
    for vendor, vendor_functions in vendors.items():
        for function in vendor_functions.functions:
            native = function.native_function
            if native in documentation:
                continue

            reference = references.get(native.entry_point)
            if reference is None:
                raise GenerationError(
                    "INCONSISTENT_FUNCTION_RECORD",
                    f"Could not find function {native.entry_point}!",
                )

            documentation[native] = document_function(
                native, function.documentation, api, vendor, reference, settings.mangler
            )
    return documentation


def build_namespace(
    api: OutputApi,
    function_references: list[Reference],
    enum_references: list[Reference],
    functions: dict[str, OverloadedFunction],
    catalog: EnumCatalog,
    settings: GeneratorSettings,
) -> Namespace:
    resolved_functions = resolve_functions(api, function_references, functions, settings)
    resolved_enums = resolve_enums(api, enum_references, catalog, settings)

    vendors = build_vendors(resolved_functions)
    return Namespace(
        api=api,
        vendors=vendors,
        enum_groups=build_enum_groups(resolved_functions, resolved_enums, catalog),
        documentation=build_documentation(
            api, vendors, resolved_functions.references, settings
        ),
    )
