"""Visibility of functions and enums per output API.

The <require>/<remove> entries of an API are first folded into one reference
record per command and per enum: the version that added it, the version that
removed it, its profile and the extensions that provide it. Those records then
decide what each output API variant exposes.
"""

from dataclasses import dataclass, field
from typing import Optional

from .enum_groups import EnumCatalog, EnumGroupMember
from .errors import GenerationError
from .multimap import MultiMap
from .overloads import OverloadedFunction
from .settings import GeneratorSettings
from .types import ApiFeatures, GLProfile, InputApi, OutputApi, Version

UINT32_MAX = 0xFFFFFFFF

INPUT_OUTPUT_APIS: dict[InputApi, tuple[OutputApi, ...]] = {
    # The compatibility profile is resolved from the same GL features.
    InputApi.GL: (OutputApi.GL, OutputApi.GLCOMPAT),
    InputApi.GLES1: (OutputApi.GLES1,),
    InputApi.GLES2: (OutputApi.GLES2,),
    InputApi.WGL: (OutputApi.WGL,),
    InputApi.GLX: (OutputApi.GLX,),
}

# Output APIs that drop removed and compatibility-only entries.
CORE_PROFILE_APIS = frozenset({OutputApi.GL, OutputApi.GLES2})


@dataclass(frozen=True)
class ExtensionRef:
    name: str  # "GL_ARB_sync"
    vendor: str  # "ARB"
    profile: GLProfile = GLProfile.NONE


@dataclass
class Reference:
    """Everything the feature lists say about one command or enum."""

    name: str
    added_in: Optional[Version] = None
    removed_in: Optional[Version] = None
    profile: GLProfile = GLProfile.NONE
    extensions: list[ExtensionRef] = field(default_factory=list)

    def require(self, version: Version, profile: GLProfile) -> None:
        if self.added_in is None:
            self.added_in = version
            self.profile = profile
            return
        self.added_in = min(self.added_in, version)
        # Compatibility-only as long as every version requiring it says so.
        if profile is not GLProfile.COMPATIBILITY:
            self.profile = profile

    def remove(self, version: Version) -> None:
        if self.removed_in is None or version < self.removed_in:
            self.removed_in = version

    def add_extension(self, extension: ExtensionRef) -> None:
        if extension not in self.extensions:
            self.extensions.append(extension)

    def removed_from(self, api: OutputApi) -> bool:
        return api in CORE_PROFILE_APIS and (
            self.removed_in is not None or self.profile is GLProfile.COMPATIBILITY
        )


def _fold(
    references: dict[str, Reference], features: ApiFeatures, attribute: str
) -> list[Reference]:
    for require in features.requires:
        for name in getattr(require, attribute):
            reference = references.setdefault(name, Reference(name))
            if require.version is not None:
                reference.require(require.version, require.profile)
            if require.extension is not None:
                reference.add_extension(
                    ExtensionRef(require.extension, require.vendor, require.profile)
                )

    for remove in features.removes:
        for name in getattr(remove, attribute):
            reference = references.get(name)
            if reference is not None:
                reference.remove(remove.version)

    return list(references.values())


def collect_references(features: ApiFeatures) -> tuple[list[Reference], list[Reference]]:
    """Fold the feature lists into (function references, enum references)."""
    return (
        _fold({}, features, "commands"),
        _fold({}, features, "enums"),
    )


@dataclass
class ResolvedFunctions:
    by_vendor: MultiMap[str, OverloadedFunction]
    referenced_groups: set[str]
    references: dict[str, Reference]


@dataclass
class ResolvedEnums:
    by_group: MultiMap[str, EnumGroupMember]
    all_members: list[EnumGroupMember]


def resolve_functions(
    api: OutputApi,
    references: list[Reference],
    functions: dict[str, OverloadedFunction],
    settings: GeneratorSettings,
) -> ResolvedFunctions:
    """Sort the functions visible in `api` into vendor buckets.

    Version requirements go to the core bucket "" unless `api` drops the
    function; extension requirements always go to the extension's vendor.
    """
    by_vendor: MultiMap[str, OverloadedFunction] = MultiMap()
    referenced_groups: set[str] = set()

    for reference in references:
        function = functions.get(reference.name)
        if function is None:
            if reference.name in settings.ignore_functions:
                continue
            raise GenerationError(
                "UNRESOLVED_FUNCTION_REFERENCE",
                f"Could not find function '{reference.name}' for {api.value}.",
                "Add it to GeneratorSettings.ignore_functions if it is expected.",
            )

        referenced = False
        if reference.added_in is not None and not reference.removed_from(api):
            by_vendor.add("", function)
            referenced = True

        for extension in reference.extensions:
            by_vendor.add(extension.vendor, function)
            referenced = True

        if referenced:
            referenced_groups.update(function.native_function.referenced_enum_groups)

    return ResolvedFunctions(
        by_vendor=by_vendor,
        referenced_groups=referenced_groups,
        references={reference.name: reference for reference in references},
    )


def resolve_enums(
    api: OutputApi,
    references: list[Reference],
    catalog: EnumCatalog,
    settings: GeneratorSettings,
) -> ResolvedEnums:
    by_group: MultiMap[str, EnumGroupMember] = MultiMap(identity=lambda m: m.name)
    all_members: dict[str, EnumGroupMember] = {}

    for reference in references:
        # Removal is not checked per extension for enums, unlike functions.
        if reference.removed_from(api):
            continue
        if reference.name in settings.ignore_enums:
            continue

        member = catalog.lookup(reference.name)
        if member is None:
            raise GenerationError(
                "UNKNOWN_ENUM_REFERENCE",
                f"Could not find any enum called '{reference.name}' for {api.value}.",
            )

        for group_name, _ in member.groups:
            by_group.add(group_name, member)

        if 0 <= member.value <= UINT32_MAX:
            all_members.setdefault(member.name, member)

    return ResolvedEnums(by_group=by_group, all_members=list(all_members.values()))
