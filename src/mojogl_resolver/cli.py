"""Command line interface for the MojoGL resolver."""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Optional

from .errors import GenerationError
from .processor import FamilyInput, OutputData, run_families
from .records import load_documentation, load_specification
from .settings import FAMILY_SETTINGS
from .types import Documentation, GLFile


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve OpenGL, WGL and GLX records into per-API namespaces"
    )
    parser.add_argument("--gl-spec", type=Path, default=None, help="GL records (JSON)")
    parser.add_argument(
        "--gl-docs", type=Path, default=None, help="GL reference page records (JSON)"
    )
    parser.add_argument("--wgl-spec", type=Path, default=None, help="WGL records (JSON)")
    parser.add_argument("--glx-spec", type=Path, default=None, help="GLX records (JSON)")
    parser.add_argument(
        "--typesafe-handles",
        action="store_true",
        help="Wrap GL object handles in named structs instead of Int32",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def collect_families(args: argparse.Namespace) -> list[FamilyInput]:
    families = []
    for file, spec_path in (
        (GLFile.GL, args.gl_spec),
        (GLFile.WGL, args.wgl_spec),
        (GLFile.GLX, args.glx_spec),
    ):
        if spec_path is None:
            continue
        if not spec_path.exists():
            print(f"Specification records not found at {spec_path}.")
            sys.exit(1)

        settings = dataclasses.replace(
            FAMILY_SETTINGS[file], typesafe_handles=args.typesafe_handles
        )
        documentation = Documentation()
        # Only GL has reference pages.
        if file is GLFile.GL and args.gl_docs is not None:
            documentation = load_documentation(args.gl_docs)

        families.append(
            FamilyInput(settings, load_specification(spec_path, file), documentation)
        )
    return families


def format_summary(output: OutputData) -> str:
    lines = []
    for namespace in output.namespaces:
        function_count = sum(len(v.functions) for v in namespace.vendors.values())
        vendors = ", ".join(vendor or "core" for vendor in namespace.vendors)
        lines.append(
            f"  {namespace.api.value}: {function_count} functions, "
            f"{len(namespace.enum_groups)} enum groups ({vendors})"
        )
    for pointers in output.pointers:
        lines.append(
            f"  {pointers.file.name} pointer table: {len(pointers.functions)} entry points"
        )
    return "\n".join(lines) + "\n"


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_argument_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        families = collect_families(args)
        if not families:
            print("Nothing to do. Pass at least one of --gl-spec, --wgl-spec, --glx-spec.")
            sys.exit(1)

        outputs = run_families(families)
    except GenerationError as err:
        print(f"Generation error [{err.code}]: {err.message}")
        if err.suggestion:
            print(f"Hint: {err.suggestion}")
        sys.exit(1)

    for family, output in zip(families, outputs):
        print(f"Resolved {family.settings.file.name}:")
        print(format_summary(output), end="")


if __name__ == "__main__":
    main()
