"""Cross-referencing of reference-page documentation with resolved functions."""

import logging
from dataclasses import dataclass
from typing import Optional

from .features import Reference
from .native import NativeFunction
from .naming import mangle_extension_name, mangle_parameter_name
from .settings import NameManglerSettings
from .types import (
    CommandDocumentation,
    Documentation,
    OutputApi,
    ParameterDocumentation,
    VersionDocumentation,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FunctionDocumentation:
    name: str
    purpose: str
    parameters: tuple[ParameterDocumentation, ...]
    ref_pages_link: Optional[str]
    added_in: tuple[str, ...] = ()  # ("v1.0", "ARB_sync")
    removed_in: tuple[str, ...] = ()  # ("v3.2",)


def lookup_command_documentation(
    version_docs: VersionDocumentation, entry_point: str
) -> Optional[CommandDocumentation]:
    return version_docs.commands.get(entry_point)


def make_documentation_for_native_function(
    function: NativeFunction, documentation: Documentation
) -> dict[OutputApi, CommandDocumentation]:
    """Collect the documentation of a function for every API that has some.

    Mismatching parameter counts or names are reported and the documentation
    is used as it is.
    """
    command_docs: dict[OutputApi, CommandDocumentation] = {}

    for api, version_docs in documentation.versions.items():
        command_doc = lookup_command_documentation(version_docs, function.entry_point)
        if command_doc is None:
            continue

        if len(function.parameters) != len(command_doc.parameters):
            logger.warning(
                "Function %s has a different number of parameters than the parsed "
                "documentation. (registry:%d, documentation:%d)",
                function.entry_point,
                len(function.parameters),
                len(command_doc.parameters),
            )

        for parameter, parameter_doc in zip(function.parameters, command_doc.parameters):
            if parameter.name != mangle_parameter_name(parameter_doc.name):
                logger.warning(
                    "[%s][%s] Function parameter '%s' doesn't have the same name "
                    "in the documentation. ('%s')",
                    api.value,
                    function.entry_point,
                    parameter.name,
                    parameter_doc.name,
                )

        command_docs[api] = command_doc

    return command_docs


def version_history(
    reference: Reference, settings: NameManglerSettings
) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Format when a function reference was added and removed, e.g. ("v1.0", "ARB_sync")."""
    added_in = []
    if reference.added_in is not None:
        added_in.append(f"v{reference.added_in}")
    for extension in reference.extensions:
        added_in.append(mangle_extension_name(extension.name, settings))

    removed_in = []
    if reference.removed_in is not None:
        removed_in.append(f"v{reference.removed_in}")

    return tuple(added_in), tuple(removed_in)


def document_function(
    function: NativeFunction,
    command_docs: dict[OutputApi, CommandDocumentation],
    api: OutputApi,
    vendor: str,
    reference: Reference,
    settings: NameManglerSettings,
) -> FunctionDocumentation:
    """Documentation for a function as it appears in one namespace.

    Core functions without documentation are reported; extension functions
    are expected to be undocumented. Both get an empty placeholder.
    """
    added_in, removed_in = version_history(reference, settings)

    command_doc = command_docs.get(api)
    if command_doc is not None:
        return FunctionDocumentation(
            name=command_doc.name,
            purpose=command_doc.purpose,
            parameters=command_doc.parameters,
            ref_pages_link=command_doc.ref_pages_link,
            added_in=added_in,
            removed_in=removed_in,
        )

    if vendor == "":
        logger.warning(
            "%s doesn't have any documentation for %s", function.entry_point, api.value
        )

    return FunctionDocumentation(
        name=function.entry_point,
        purpose="",
        parameters=(),
        ref_pages_link=None,
        added_in=added_in,
        removed_in=removed_in,
    )
