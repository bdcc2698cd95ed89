"""Loading of pre-parsed specification and documentation records from JSON.

A specification file looks like:

    {
      "commands": [
        {"entry_point": "glClear",
         "return_type": {"type": {"primitive": "VOID"}},
         "parameters": [
           {"name": "mask",
            "type": {"type": {"primitive": "UINT"}, "group": "ClearBufferMask"}}
         ]}
      ],
      "enums": [
        {"name": "GL_COLOR_BUFFER_BIT", "value": "0x00004000",
         "groups": [["ClearBufferMask", "gl"]], "api": ["GL", "GLCOMPAT"],
         "kind": "bitmask"}
      ],
      "apis": [
        {"api": "gl",
         "requires": [{"version": "1.0", "commands": ["glClear"],
                       "enums": ["GL_COLOR_BUFFER_BIT"]}],
         "removes": []}
      ]
    }

A documentation file maps output API names to entry points:

    {"GL": {"glClear": {"purpose": "clear buffers to preset values",
                        "parameters": [{"name": "mask", "description": "..."}],
                        "ref_pages_link": "https://..."}}}
"""

import json
from pathlib import Path
from typing import Any

from .errors import GenerationError
from .types import (
    ApiFeatures,
    BaseType,
    Command,
    CommandDocumentation,
    CommandParameter,
    Documentation,
    EnumApi,
    EnumEntry,
    EnumKind,
    FlowDirection,
    GLFile,
    GLProfile,
    GroupRef,
    InputApi,
    LengthRelation,
    OutputApi,
    ParameterDocumentation,
    ParameterType,
    PointerType,
    PrimitiveType,
    RemoveEntry,
    RequireEntry,
    SpecType,
    Specification,
    Version,
    VersionDocumentation,
)


def parse_spec_type(raw: dict[str, Any]) -> SpecType:
    const = bool(raw.get("const", False))
    if "pointer" in raw:
        return PointerType(parse_spec_type(raw["pointer"]), const)
    return BaseType(PrimitiveType[raw["primitive"]], const)


def parse_parameter_type(raw: dict[str, Any], file: GLFile) -> ParameterType:
    group = raw.get("group")
    group_ref = None
    if isinstance(group, str):
        group_ref = GroupRef(group, file)
    elif group is not None:
        group_ref = GroupRef(group["name"], GLFile(group.get("namespace", file.value)))

    return ParameterType(
        type=parse_spec_type(raw["type"]),
        handle=raw.get("handle"),
        group=group_ref,
    )


def parse_length(raw: dict[str, Any]) -> LengthRelation:
    return LengthRelation(
        static_count=raw.get("static_count"),
        parameter=raw.get("parameter"),
        computed_from=tuple(raw.get("computed_from", ())),
    )


def parse_command(raw: dict[str, Any], file: GLFile) -> Command:
    parameters = []
    for raw_param in raw.get("parameters", []):
        length = raw_param.get("length")
        parameters.append(
            CommandParameter(
                name=raw_param["name"],
                type=parse_parameter_type(raw_param["type"], file),
                flow=FlowDirection(raw_param.get("flow", "in")),
                length=parse_length(length) if length is not None else None,
            )
        )

    return Command(
        entry_point=raw["entry_point"],
        return_type=parse_parameter_type(raw["return_type"], file),
        parameters=tuple(parameters),
    )


def parse_enum_value(raw: Any) -> int:
    if isinstance(raw, int):
        return raw
    # Registry values may carry C suffixes, e.g. 0xFFFFFFFFFFFFFFFFull
    text = str(raw).strip().rstrip("uUlL")
    return int(text, 0)


def parse_enum(raw: dict[str, Any]) -> EnumEntry:
    api = EnumApi.NONE
    for name in raw.get("api", []):
        api |= EnumApi[name]

    return EnumEntry(
        name=raw["name"],
        value=parse_enum_value(raw["value"]),
        groups=tuple((group, GLFile(namespace)) for group, namespace in raw.get("groups", [])),
        api=api,
        kind=EnumKind(raw.get("kind", "plain")),
    )


def parse_require(raw: dict[str, Any]) -> RequireEntry:
    version = raw.get("version")
    return RequireEntry(
        version=Version.parse(version) if version is not None else None,
        extension=raw.get("extension"),
        vendor=raw.get("vendor", ""),
        profile=GLProfile(raw.get("profile", "none")),
        commands=tuple(raw.get("commands", ())),
        enums=tuple(raw.get("enums", ())),
    )


def parse_remove(raw: dict[str, Any]) -> RemoveEntry:
    return RemoveEntry(
        version=Version.parse(raw["version"]),
        profile=GLProfile(raw.get("profile", "none")),
        commands=tuple(raw.get("commands", ())),
        enums=tuple(raw.get("enums", ())),
    )


def parse_api_features(raw: dict[str, Any]) -> ApiFeatures:
    try:
        api = InputApi(raw["api"])
    except ValueError:
        raise GenerationError(
            "UNKNOWN_INPUT_API",
            f"Unknown api: {raw['api']}",
            "Use one of: " + ", ".join(a.value for a in InputApi) + ".",
        ) from None

    return ApiFeatures(
        api=api,
        requires=tuple(parse_require(r) for r in raw.get("requires", [])),
        removes=tuple(parse_remove(r) for r in raw.get("removes", [])),
    )


def parse_specification(raw: dict[str, Any], file: GLFile) -> Specification:
    try:
        return Specification(
            commands=tuple(parse_command(c, file) for c in raw.get("commands", [])),
            enums=tuple(parse_enum(e) for e in raw.get("enums", [])),
            apis=tuple(parse_api_features(a) for a in raw.get("apis", [])),
        )
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise GenerationError("INVALID_RECORD", f"Malformed specification record: {e}") from e


def parse_documentation(raw: dict[str, Any]) -> Documentation:
    versions = {}
    try:
        for api_name, commands in raw.items():
            version_commands = {}
            for entry_point, doc in commands.items():
                version_commands[entry_point] = CommandDocumentation(
                    name=doc.get("name", entry_point),
                    purpose=doc.get("purpose", ""),
                    parameters=tuple(
                        ParameterDocumentation(p["name"], p.get("description", ""))
                        for p in doc.get("parameters", [])
                    ),
                    ref_pages_link=doc.get("ref_pages_link"),
                )
            versions[OutputApi(api_name)] = VersionDocumentation(version_commands)
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise GenerationError("INVALID_RECORD", f"Malformed documentation record: {e}") from e
    return Documentation(versions)


def _load_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise GenerationError("INVALID_RECORD", f"{path} is not valid JSON: {e}") from e


def load_specification(path: Path, file: GLFile) -> Specification:
    """Load a specification record file for one registry family."""
    return parse_specification(_load_json(path), file)


def load_documentation(path: Path) -> Documentation:
    return parse_documentation(_load_json(path))
