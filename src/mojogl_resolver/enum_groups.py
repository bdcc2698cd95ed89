"""Per-API catalog of enum groups and enumerants."""

from dataclasses import dataclass, field
from typing import Optional

from .errors import GenerationError
from .naming import mangle_enum_name
from .settings import NameManglerSettings
from .types import EnumApi, EnumEntry, GLFile, OutputApi


@dataclass(frozen=True)
class EnumGroupMember:
    name: str  # "ColorBufferBit"
    value: int
    groups: tuple[tuple[str, GLFile], ...]
    is_flag: bool


# A group declared in one registry file is visible in every API built from it.
FILE_OUTPUT_APIS: dict[GLFile, tuple[OutputApi, ...]] = {
    GLFile.GL: (OutputApi.GL, OutputApi.GLCOMPAT, OutputApi.GLES1, OutputApi.GLES2),
    GLFile.WGL: (OutputApi.WGL,),
    GLFile.GLX: (OutputApi.GLX,),
}

API_FLAGS: dict[EnumApi, OutputApi] = {
    EnumApi.GL: OutputApi.GL,
    EnumApi.GLCOMPAT: OutputApi.GLCOMPAT,
    EnumApi.GLES1: OutputApi.GLES1,
    EnumApi.GLES2: OutputApi.GLES2,
    EnumApi.WGL: OutputApi.WGL,
    EnumApi.GLX: OutputApi.GLX,
}


@dataclass
class EnumCatalog:
    """Group flags and enumerants known to one output API."""

    # group name -> is bitmask. Only ever goes from False to True.
    groups: dict[str, bool] = field(default_factory=dict)
    # raw enumerant name -> member
    members: dict[str, EnumGroupMember] = field(default_factory=dict)

    def add_group(self, name: str, is_flag: bool) -> None:
        # PathFontStyle mixes GL_NONE (plain) with *_BIT_NV (bitmask) entries;
        # one bitmask entry makes the whole group a bitmask.
        self.groups[name] = self.groups.get(name, False) or is_flag

    def add_member(self, raw_name: str, member: EnumGroupMember) -> bool:
        if raw_name in self.members:
            return False
        self.members[raw_name] = member
        return True

    def lookup(self, raw_name: str) -> Optional[EnumGroupMember]:
        return self.members.get(raw_name)


def build_enum_catalogs(
    enums: tuple[EnumEntry, ...], settings: NameManglerSettings
) -> dict[OutputApi, EnumCatalog]:
    catalogs = {api: EnumCatalog() for api in OutputApi}

    for enum in enums:
        if enum.api == EnumApi.NONE:
            raise GenerationError(
                "DUPLICATE_OR_MISSING_API_FLAG",
                f"Enum {enum.name} does not apply to any API.",
            )

        is_flag = enum.is_bitmask
        for group_name, namespace in enum.groups:
            for api in FILE_OUTPUT_APIS[namespace]:
                catalogs[api].add_group(group_name, is_flag)

        member = EnumGroupMember(
            name=mangle_enum_name(enum.name, settings),
            value=enum.value,
            groups=enum.groups,
            is_flag=is_flag,
        )
        for flag, api in API_FLAGS.items():
            if flag in enum.api:
                if not catalogs[api].add_member(enum.name, member):
                    raise GenerationError(
                        "DUPLICATE_OR_MISSING_API_FLAG",
                        f"Enum {enum.name} is declared twice for {api.value}.",
                    )

    return catalogs
