# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the genconf command-line interface."""

import argparse
import sys
from pathlib import Path

from genconf.errors import GenconfError, SpecCompileError
from genconf.spec.loader import CompiledSpec, load_spec
from genconf.workspace.config import PROJECT_FILE_NAME, ProjectConfigError, load_project_config

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the genconf CLI."""
    parser = argparse.ArgumentParser(
        prog="genconf",
        description="genconf - parse and verify Apache-style configuration files",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check-spec subcommand
    check_spec_parser = subparsers.add_parser(
        "check-spec",
        help="Check that a specification compiles",
        description="Compile a specification file and report any errors.",
    )
    check_spec_parser.add_argument("spec", help="Path of the specification file")

    # verify subcommand
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify configuration files against a specification",
        description="Parse each configuration file and verify it against the specification.",
    )
    verify_parser.add_argument("spec", help="Path of the specification file")
    verify_parser.add_argument("configs", nargs="+", metavar="config", help="Configuration files to verify")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Verify the configuration files listed in a project file",
        description=f"Read {PROJECT_FILE_NAME} and verify every configuration file it lists.",
    )
    check_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help=f"Directory containing {PROJECT_FILE_NAME} (default: current directory)",
    )

    # dump subcommand
    dump_parser = subparsers.add_parser(
        "dump",
        help="Print the verified element tree of a configuration file as JSON",
        description="Verify a configuration file and print its element tree as JSON.",
    )
    dump_parser.add_argument("spec", help="Path of the specification file")
    dump_parser.add_argument("config", help="Configuration file to dump")
    dump_parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "check-spec":
        return _cmd_check_spec(args)
    if args.command == "verify":
        return _cmd_verify(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "dump":
        return _cmd_dump(args)
    return 0


def _load_spec_or_report(path: Path) -> CompiledSpec | None:
    """Compile the spec at *path*, printing the error and returning None on failure."""
    try:
        return load_spec(path)
    except SpecCompileError as exc:
        print(f"Error: {path}: {exc}", file=sys.stderr)
        return None


def _verify_files(spec: CompiledSpec, paths: list[Path]) -> int:
    """Verify each file against *spec*; report every failing file."""
    failures = 0
    for path in paths:
        try:
            spec.parse_file(path)
        except (OSError, UnicodeDecodeError) as exc:
            print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
            failures += 1
        except GenconfError as exc:
            print(f"Error: {path}: {exc}", file=sys.stderr)
            failures += 1
        else:
            print(f"{path}: OK")

    if failures:
        print(f"{failures} of {len(paths)} file(s) failed verification.", file=sys.stderr)
        return 1
    return 0


def _cmd_check_spec(args: argparse.Namespace) -> int:
    """Handle the check-spec subcommand."""
    spec_path = Path(args.spec)
    spec = _load_spec_or_report(spec_path)
    if spec is None:
        return 1
    print(f"{spec_path}: specification OK ({len(spec.meta_sections)} meta section(s)).")
    return 0


def _cmd_verify(args: argparse.Namespace) -> int:
    """Handle the verify subcommand."""
    spec = _load_spec_or_report(Path(args.spec))
    if spec is None:
        return 1
    return _verify_files(spec, [Path(config) for config in args.configs])


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    project_file = directory / PROJECT_FILE_NAME
    if not project_file.exists():
        print(f"Error: no {PROJECT_FILE_NAME} found in '{directory}'.", file=sys.stderr)
        return 1

    try:
        config = load_project_config(project_file)
    except ProjectConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    spec = _load_spec_or_report(config.spec_path(directory))
    if spec is None:
        return 1

    paths = config.config_paths(directory)
    if not paths:
        print("No configuration files listed in the project file.")
        return 0

    print(f"Verifying {len(paths)} configuration file(s)...")
    return _verify_files(spec, paths)


def _cmd_dump(args: argparse.Namespace) -> int:
    """Handle the dump subcommand."""
    spec = _load_spec_or_report(Path(args.spec))
    if spec is None:
        return 1
    config_path = Path(args.config)
    try:
        root = spec.parse_file(config_path)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: cannot read '{config_path}': {exc}", file=sys.stderr)
        return 1
    except GenconfError as exc:
        print(f"Error: {config_path}: {exc}", file=sys.stderr)
        return 1
    print(root.model_dump_json(indent=args.indent))
    return 0
