"""Mojo type descriptors produced by the type mapping engine and the overloaders."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class MojoVoid:
    const: bool = False

    def __str__(self) -> str:
        return "NoneType"


@dataclass(frozen=True)
class MojoPrimitive:
    name: str  # "Int32"
    const: bool = False

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class MojoPointer:
    inner: "MojoType"
    const: bool = False

    def __str__(self) -> str:
        if isinstance(self.inner, MojoVoid):
            return "OpaquePointer"
        return f"Pointer[{self.inner}]"


@dataclass(frozen=True)
class MojoStructPrimitive:
    """A named struct wrapping a single primitive, used for opaque handles."""

    name: str  # "GLSync"
    underlying: MojoPrimitive
    const: bool = False

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class MojoStruct:
    name: str  # "PixelFormatDescriptor"
    const: bool = False

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class MojoEnum:
    group: str  # "ClearBufferMask"
    underlying: MojoPrimitive
    const: bool = False

    def __str__(self) -> str:
        return self.group


@dataclass(frozen=True)
class MojoFunctionPointer:
    name: str  # "GLDebugProc"
    const: bool = False

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class MojoBool:
    """A C boolean stored in `width` bits."""

    width: int
    const: bool = False

    def __str__(self) -> str:
        return f"GLBool{self.width}"


@dataclass(frozen=True)
class MojoChar:
    width: int
    const: bool = False

    def __str__(self) -> str:
        return f"GLChar{self.width}"


# Types below only appear on overloads, never on native signatures.


@dataclass(frozen=True)
class MojoSpan:
    inner: "MojoType"
    mutable: bool = False

    def __str__(self) -> str:
        return f"Span[{self.inner}]"


@dataclass(frozen=True)
class MojoString:
    def __str__(self) -> str:
        return "String"


@dataclass(frozen=True)
class MojoRef:
    inner: "MojoType"
    mutable: bool = False

    def __str__(self) -> str:
        return f"Ref[{self.inner}]"


MojoType = Union[
    MojoVoid,
    MojoPrimitive,
    MojoPointer,
    MojoStructPrimitive,
    MojoStruct,
    MojoEnum,
    MojoFunctionPointer,
    MojoBool,
    MojoChar,
    MojoSpan,
    MojoString,
    MojoRef,
]

BOOL = MojoPrimitive("Bool")
