"""Overload generation: alternate public signatures derived from native ones.

Every overloader looks at one overload at a time and either declines (returns
None) or returns the overloads that replace it. The overloaders run in the
order of OVERLOADERS, each one over the full output of the one before, and the
whole sequence is repeated until a pass no longer changes the set of
signatures.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Optional

from .errors import GenerationError
from .native import NativeFunction, Parameter
from .naming import mangle_parameter_name
from .target_types import (
    BOOL,
    MojoBool,
    MojoChar,
    MojoPointer,
    MojoPrimitive,
    MojoRef,
    MojoSpan,
    MojoString,
    MojoType,
    MojoVoid,
)
from .types import CommandDocumentation, FlowDirection, OutputApi


@dataclass(frozen=True)
class NameTable:
    """Names in use by an overload, including synthesized temporaries."""

    names: tuple[str, ...] = ()
    temporaries: tuple[tuple[str, str], ...] = ()  # (requested, assigned)

    @classmethod
    def for_parameters(cls, parameters: tuple[Parameter, ...]) -> "NameTable":
        return cls(names=tuple(p.name for p in parameters))

    def add_temporary(self, base: str) -> tuple["NameTable", str]:
        name = base
        suffix = 0
        while name in self.names:
            suffix += 1
            name = f"{base}{suffix}"
        table = NameTable(self.names + (name,), self.temporaries + ((base, name),))
        return table, name


@dataclass(frozen=True)
class MarshalLayer:
    """What an overloader did to get from the nested overload to this one."""

    overloader: str  # "SpanAndArrayOverloader"
    parameters: tuple[str, ...] = ()  # parameter names involved


@dataclass(frozen=True)
class Overload:
    nested: Optional["Overload"]
    marshal_layer: Optional[MarshalLayer]
    input_parameters: tuple[Parameter, ...]
    native_function: NativeFunction = field(compare=False)
    return_type: MojoType
    name_table: NameTable
    overload_name: str

    @property
    def signature(self) -> tuple:
        return (
            self.overload_name,
            tuple(p.type for p in self.input_parameters),
            self.return_type,
        )


# Compared by identity, like the native function it wraps.
@dataclass(frozen=True, eq=False)
class OverloadedFunction:
    native_function: NativeFunction
    documentation: dict[OutputApi, CommandDocumentation]
    overloads: tuple[Overload, ...]
    change_native_name: bool


def _derive(
    overload: Overload,
    overloader: str,
    involved: tuple[str, ...],
    parameters: Optional[tuple[Parameter, ...]] = None,
    return_type: Optional[MojoType] = None,
    name: Optional[str] = None,
    name_table: Optional[NameTable] = None,
) -> Overload:
    return Overload(
        nested=overload,
        marshal_layer=MarshalLayer(overloader, involved),
        input_parameters=overload.input_parameters if parameters is None else parameters,
        native_function=overload.native_function,
        return_type=overload.return_type if return_type is None else return_type,
        name_table=overload.name_table if name_table is None else name_table,
        overload_name=overload.overload_name if name is None else name,
    )


class Overloader:
    def try_generate(self, overload: Overload) -> Optional[list[Overload]]:
        raise NotImplementedError


class TrimNameOverloader(Overloader):
    """Drops the numeric type suffix: Vertex3fv -> Vertex3, Uniform1i -> Uniform1."""

    _TYPE_SUFFIX = re.compile(r"(?<=\d)(?:i64|ui64|ub|us|ui|b|s|i|f|d|x)v?$")

    def try_generate(self, overload: Overload) -> Optional[list[Overload]]:
        trimmed = self._TYPE_SUFFIX.sub("", overload.overload_name)
        if trimmed == overload.overload_name:
            return None
        return [_derive(overload, type(self).__name__, (), name=trimmed)]


class BoolOverloader(Overloader):
    """Takes and returns Bool instead of 8-bit GL booleans."""

    @staticmethod
    def _is_bool8(mojo_type: MojoType) -> bool:
        return isinstance(mojo_type, MojoBool) and mojo_type.width == 8

    def try_generate(self, overload: Overload) -> Optional[list[Overload]]:
        involved = tuple(
            p.name for p in overload.input_parameters if self._is_bool8(p.type)
        )
        returns_bool = self._is_bool8(overload.return_type)
        if not involved and not returns_bool:
            return None

        parameters = tuple(
            replace(p, type=BOOL) if self._is_bool8(p.type) else p
            for p in overload.input_parameters
        )
        return_type = BOOL if returns_bool else overload.return_type
        return [
            _derive(
                overload,
                type(self).__name__,
                involved,
                parameters=parameters,
                return_type=return_type,
            )
        ]


class StringOverloader(Overloader):
    """const GLchar* inputs without an explicit length become String."""

    @staticmethod
    def _is_c_string(mojo_type: MojoType) -> bool:
        return (
            isinstance(mojo_type, MojoPointer)
            and isinstance(mojo_type.inner, MojoChar)
            and mojo_type.inner.width == 8
            and mojo_type.inner.const
        )

    def try_generate(self, overload: Overload) -> Optional[list[Overload]]:
        involved = tuple(
            p.name
            for p in overload.input_parameters
            if self._is_c_string(p.type)
            and p.flow is FlowDirection.IN
            and (p.length is None or p.length.is_computed)
        )
        returns_string = self._is_c_string(overload.return_type)
        if not involved and not returns_string:
            return None

        parameters = tuple(
            replace(p, type=MojoString(), length=None) if p.name in involved else p
            for p in overload.input_parameters
        )
        return_type = MojoString() if returns_string else overload.return_type
        return [
            _derive(
                overload,
                type(self).__name__,
                involved,
                parameters=parameters,
                return_type=return_type,
            )
        ]


class SpanAndArrayOverloader(Overloader):
    """Folds a (pointer, element count) parameter pair into a single Span."""

    _COUNT_TYPES = {"Int32", "UInt32", "Int", "Int64"}

    def _count_parameter(
        self, pointer: Parameter, parameters: tuple[Parameter, ...]
    ) -> Optional[Parameter]:
        if pointer.length is None or not pointer.length.is_reference:
            return None
        count_name = mangle_parameter_name(pointer.length.parameter)
        for parameter in parameters:
            if (
                parameter.name == count_name
                and parameter.flow is FlowDirection.IN
                and isinstance(parameter.type, MojoPrimitive)
                and parameter.type.name in self._COUNT_TYPES
            ):
                return parameter
        return None

    def try_generate(self, overload: Overload) -> Optional[list[Overload]]:
        spans: dict[str, Parameter] = {}
        counts: set[str] = set()
        for parameter in overload.input_parameters:
            if not isinstance(parameter.type, MojoPointer) or isinstance(
                parameter.type.inner, MojoVoid
            ):
                continue
            count = self._count_parameter(parameter, overload.input_parameters)
            if count is None:
                continue
            inner = parameter.type.inner
            spans[parameter.name] = replace(
                parameter, type=MojoSpan(inner, mutable=not inner.const), length=None
            )
            counts.add(count.name)

        if not spans:
            return None

        parameters = tuple(
            spans.get(p.name, p)
            for p in overload.input_parameters
            if p.name not in counts
        )
        involved = tuple(spans) + tuple(sorted(counts))
        return [_derive(overload, type(self).__name__, involved, parameters=parameters)]


class RefInsteadOfPointerOverloader(Overloader):
    """Single-element pointers become references."""

    @staticmethod
    def _is_single_element_pointer(parameter: Parameter) -> bool:
        if not isinstance(parameter.type, MojoPointer):
            return False
        inner = parameter.type.inner
        if isinstance(inner, (MojoVoid, MojoChar, MojoPointer)):
            return False
        length = parameter.length
        return length is None or length.static_count == 1

    def try_generate(self, overload: Overload) -> Optional[list[Overload]]:
        involved = tuple(
            p.name
            for p in overload.input_parameters
            if self._is_single_element_pointer(p)
        )
        if not involved:
            return None

        parameters = tuple(
            replace(p, type=MojoRef(p.type.inner, mutable=not p.type.inner.const))
            if p.name in involved
            else p
            for p in overload.input_parameters
        )
        return [_derive(overload, type(self).__name__, involved, parameters=parameters)]


class OutToReturnOverloader(Overloader):
    """Returns a trailing out reference instead of taking it as a parameter.

    The overload it starts from is kept as well.
    """

    def try_generate(self, overload: Overload) -> Optional[list[Overload]]:
        if not isinstance(overload.return_type, MojoVoid) or not overload.input_parameters:
            return None
        last = overload.input_parameters[-1]
        if (
            not isinstance(last.type, MojoRef)
            or not last.type.mutable
            or last.flow is not FlowDirection.OUT
        ):
            return None

        name_table, _ = overload.name_table.add_temporary(last.name)
        returning = _derive(
            overload,
            type(self).__name__,
            (last.name,),
            parameters=overload.input_parameters[:-1],
            return_type=last.type.inner,
            name_table=name_table,
        )
        return [overload, returning]


# Passes of the whole rule list before the overload set must have settled.
MAX_OVERLOAD_PASSES = 16

OVERLOADERS: tuple[Overloader, ...] = (
    TrimNameOverloader(),
    BoolOverloader(),
    StringOverloader(),
    SpanAndArrayOverloader(),
    RefInsteadOfPointerOverloader(),
    OutToReturnOverloader(),
)


def _unique(overloads: list[Overload]) -> list[Overload]:
    seen = set()
    unique = []
    for overload in overloads:
        if overload.signature not in seen:
            seen.add(overload.signature)
            unique.append(overload)
    return unique


def _run_pass(
    overloads: list[Overload], overloaders: tuple[Overloader, ...]
) -> tuple[list[Overload], bool]:
    produced_any = False
    for overloader in overloaders:
        next_overloads = []
        for overload in overloads:
            produced = overloader.try_generate(overload)
            if produced is None:
                next_overloads.append(overload)
            else:
                produced_any = True
                next_overloads.extend(produced)
        overloads = _unique(next_overloads)
    return overloads, produced_any


def is_same_signature(native: NativeFunction, overload: Overload) -> bool:
    """True if the overload would be emitted with the native function's exact signature."""
    if len(native.parameters) != len(overload.input_parameters):
        return False
    if overload.overload_name != native.function_name:
        return False
    return all(
        native_param.type == overload_param.type
        for native_param, overload_param in zip(
            native.parameters, overload.input_parameters
        )
    )


def generate_overloads(
    native: NativeFunction,
    documentation: Optional[dict[OutputApi, CommandDocumentation]] = None,
    overloaders: tuple[Overloader, ...] = OVERLOADERS,
) -> OverloadedFunction:
    base = Overload(
        nested=None,
        marshal_layer=None,
        input_parameters=native.parameters,
        native_function=native,
        return_type=native.return_type,
        name_table=NameTable.for_parameters(native.parameters),
        overload_name=native.function_name,
    )

    overloads = [base]
    overloaded_once = False
    for _ in range(MAX_OVERLOAD_PASSES):
        next_overloads, produced = _run_pass(overloads, overloaders)
        overloaded_once = overloaded_once or produced
        if [o.signature for o in next_overloads] == [o.signature for o in overloads]:
            break
        overloads = next_overloads
    else:
        raise GenerationError(
            "UNSTABLE_OVERLOAD_RULES",
            f"Overloads of {native.entry_point} still change after "
            f"{MAX_OVERLOAD_PASSES} passes.",
            "An overloader must decline overloads it has already rewritten.",
        )

    # The base overload is emitted as the native entry point itself.
    final = tuple(overloads) if overloaded_once else ()
    change_native_name = any(is_same_signature(native, o) for o in final)

    return OverloadedFunction(
        native_function=native,
        documentation=documentation or {},
        overloads=final,
        change_native_name=change_native_name,
    )
