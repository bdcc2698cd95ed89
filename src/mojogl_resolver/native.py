"""Native (unmodified) function signatures built from registry commands."""

from dataclasses import dataclass
from typing import Optional

from .naming import mangle_function_name, mangle_parameter_name
from .settings import GeneratorSettings
from .target_types import MojoType
from .typemap import map_type
from .types import Command, FlowDirection, LengthRelation


@dataclass(frozen=True)
class Parameter:
    type: MojoType
    flow: FlowDirection
    name: str
    length: Optional[LengthRelation] = None


# Compared by identity: one instance per entry point, shared by every namespace.
@dataclass(frozen=True, eq=False)
class NativeFunction:
    entry_point: str  # "glClear"
    function_name: str  # "Clear"
    parameters: tuple[Parameter, ...]
    return_type: MojoType
    referenced_enum_groups: frozenset[str]


def make_native_function(command: Command, settings: GeneratorSettings) -> NativeFunction:
    """Map a command's types and names and collect the enum groups it uses."""
    referenced_groups: set[str] = set()

    parameters = []
    for parameter in command.parameters:
        param_type = parameter.type
        mojo_type = map_type(
            param_type.type,
            param_type.handle,
            param_type.group,
            settings.typesafe_handles,
        )
        parameters.append(
            Parameter(
                type=mojo_type,
                flow=parameter.flow,
                name=mangle_parameter_name(parameter.name),
                length=parameter.length,
            )
        )
        if param_type.group is not None:
            referenced_groups.add(param_type.group.name)

    return_type = command.return_type
    mojo_return = map_type(
        return_type.type, return_type.handle, return_type.group, settings.typesafe_handles
    )
    if return_type.group is not None:
        referenced_groups.add(return_type.group.name)

    return NativeFunction(
        entry_point=command.entry_point,
        function_name=mangle_function_name(command.entry_point, settings.mangler),
        parameters=tuple(parameters),
        return_type=mojo_return,
        referenced_enum_groups=frozenset(referenced_groups),
    )
