from collections.abc import Callable
from typing import Optional

import pytest

from mojogl_resolver.settings import GL_SETTINGS, GeneratorSettings
from mojogl_resolver.types import (
    ApiFeatures,
    BaseType,
    Command,
    CommandParameter,
    EnumApi,
    EnumEntry,
    EnumKind,
    FlowDirection,
    GLFile,
    GroupRef,
    InputApi,
    LengthRelation,
    ParameterType,
    PointerType,
    PrimitiveType,
    RemoveEntry,
    RequireEntry,
    Specification,
    Version,
)

GL_FAMILY_APIS = EnumApi.GL | EnumApi.GLCOMPAT | EnumApi.GLES1 | EnumApi.GLES2


@pytest.fixture
def settings() -> GeneratorSettings:
    return GL_SETTINGS


@pytest.fixture
def make_type() -> Callable[..., ParameterType]:
    def _make_type(
        primitive: PrimitiveType,
        *,
        pointer: int = 0,
        const: bool = False,
        handle: Optional[str] = None,
        group: Optional[str] = None,
    ) -> ParameterType:
        spec_type = BaseType(primitive, const)
        for _ in range(pointer):
            spec_type = PointerType(spec_type)
        return ParameterType(
            type=spec_type,
            handle=handle,
            group=GroupRef(group) if group is not None else None,
        )

    return _make_type


@pytest.fixture
def make_param(make_type: Callable[..., ParameterType]) -> Callable[..., CommandParameter]:
    def _make_param(
        name: str,
        primitive: PrimitiveType,
        *,
        flow: FlowDirection = FlowDirection.IN,
        length: Optional[LengthRelation] = None,
        **type_options: object,
    ) -> CommandParameter:
        return CommandParameter(
            name=name,
            type=make_type(primitive, **type_options),
            flow=flow,
            length=length,
        )

    return _make_param


@pytest.fixture
def make_command(make_type: Callable[..., ParameterType]) -> Callable[..., Command]:
    def _make_command(
        entry_point: str,
        *parameters: CommandParameter,
        returns: Optional[ParameterType] = None,
    ) -> Command:
        return Command(
            entry_point=entry_point,
            return_type=returns or make_type(PrimitiveType.VOID),
            parameters=tuple(parameters),
        )

    return _make_command


@pytest.fixture
def make_enum() -> Callable[..., EnumEntry]:
    def _make_enum(
        name: str,
        value: int,
        *groups: str,
        api: EnumApi = GL_FAMILY_APIS,
        bitmask: bool = False,
        file: GLFile = GLFile.GL,
    ) -> EnumEntry:
        return EnumEntry(
            name=name,
            value=value,
            groups=tuple((group, file) for group in groups),
            api=api,
            kind=EnumKind.BITMASK if bitmask else EnumKind.PLAIN,
        )

    return _make_enum


@pytest.fixture
def gl_specification(
    make_command: Callable[..., Command],
    make_param: Callable[..., CommandParameter],
    make_enum: Callable[..., EnumEntry],
) -> Specification:
    """A small GL registry: one removed command, one extension-only command,
    one command provided by both a version and an extension."""
    commands = (
        make_command(
            "glClear", make_param("mask", PrimitiveType.UINT, group="ClearBufferMask")
        ),
        make_command(
            "glBegin", make_param("mode", PrimitiveType.ENUM, group="PrimitiveType")
        ),
        make_command(
            "glDrawArrays",
            make_param("mode", PrimitiveType.ENUM, group="PrimitiveType"),
            make_param("first", PrimitiveType.INT),
            make_param("count", PrimitiveType.INT),
        ),
        make_command("glWidget"),
        make_command("glFooARB", make_param("x", PrimitiveType.FLOAT)),
    )
    enums = (
        make_enum("GL_POINTS", 0x0000, "PrimitiveType"),
        make_enum("GL_QUADS", 0x0007, "PrimitiveType"),
        make_enum("GL_DEPTH_BUFFER_BIT", 0x0100, "ClearBufferMask", bitmask=True),
        make_enum("GL_COLOR_BUFFER_BIT", 0x4000, "ClearBufferMask", bitmask=True),
        make_enum("GL_TIMEOUT_IGNORED", 0xFFFFFFFFFFFFFFFF, "SpecialNumbers"),
    )
    features = ApiFeatures(
        api=InputApi.GL,
        requires=(
            RequireEntry(
                version=Version(1, 0),
                commands=("glClear", "glBegin", "glDrawArrays", "glWidget"),
                enums=(
                    "GL_POINTS",
                    "GL_QUADS",
                    "GL_DEPTH_BUFFER_BIT",
                    "GL_COLOR_BUFFER_BIT",
                ),
            ),
            RequireEntry(version=Version(3, 2), enums=("GL_TIMEOUT_IGNORED",)),
            RequireEntry(extension="GL_VEND_widget", vendor="VEND", commands=("glWidget",)),
            RequireEntry(extension="GL_ARB_foo", vendor="ARB", commands=("glFooARB",)),
        ),
        removes=(
            RemoveEntry(
                version=Version(3, 2), commands=("glBegin",), enums=("GL_QUADS",)
            ),
        ),
    )
    return Specification(commands=commands, enums=enums, apis=(features,))
