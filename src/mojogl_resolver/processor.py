"""The resolution pipeline: specification + documentation -> OutputData."""

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field

from .documentation import make_documentation_for_native_function
from .enum_groups import build_enum_catalogs
from .errors import GenerationError
from .features import INPUT_OUTPUT_APIS, collect_references
from .namespaces import Namespace, build_namespace
from .native import make_native_function
from .overloads import OverloadedFunction, generate_overloads
from .pointers import Pointers, build_pointers
from .settings import GeneratorSettings
from .types import Documentation, Specification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutputData:
    pointers: tuple[Pointers, ...]
    namespaces: tuple[Namespace, ...]


@dataclass(frozen=True)
class FamilyInput:
    settings: GeneratorSettings
    specification: Specification
    documentation: Documentation = field(default_factory=Documentation)


def build_functions(
    spec: Specification, documentation: Documentation, settings: GeneratorSettings
) -> dict[str, OverloadedFunction]:
    functions: dict[str, OverloadedFunction] = {}
    for command in spec.commands:
        if command.entry_point in functions:
            raise GenerationError(
                "INVALID_RECORD", f"Command {command.entry_point} is declared twice."
            )
        native = make_native_function(command, settings)
        command_docs = make_documentation_for_native_function(native, documentation)
        functions[native.entry_point] = generate_overloads(native, command_docs)
    return functions


def process_spec(
    spec: Specification, documentation: Documentation, settings: GeneratorSettings
) -> OutputData:
    """Resolve one registry family into namespaces and its pointer table.

    Raises GenerationError on any inconsistency in the input; no partial
    output is produced.
    """
    functions = build_functions(spec, documentation, settings)
    catalogs = build_enum_catalogs(spec.enums, settings.mangler)

    namespaces: list[Namespace] = []
    for features in spec.apis:
        output_apis = INPUT_OUTPUT_APIS.get(features.api)
        if output_apis is None:
            raise GenerationError(
                "UNKNOWN_INPUT_API", f"No output API for input API {features.api!r}"
            )

        function_references, enum_references = collect_references(features)
        for api in output_apis:
            namespaces.append(
                build_namespace(
                    api,
                    function_references,
                    enum_references,
                    functions,
                    catalogs[api],
                    settings,
                )
            )

    pointers = build_pointers(settings.file, namespaces)
    return OutputData(pointers=(pointers,), namespaces=tuple(namespaces))


def run_families(inputs: Iterable[FamilyInput]) -> list[OutputData]:
    """Process each family on its own; nothing is shared between runs."""
    outputs = []
    for family in inputs:
        start = time.perf_counter()
        output = process_spec(family.specification, family.documentation, family.settings)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "Generated %s bindings in %d ms", family.settings.file.name, elapsed_ms
        )
        outputs.append(output)
    return outputs
