# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the prismgen command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from prismgen.compiler.artifact import serialize, write_artifact
from prismgen.compiler.pipeline import ParseResult, SchemaError, format_errors, parse, parse_file
from prismgen.formatter.printer import format_schema
from prismgen.validation.checks import check
from prismgen.workspace.config import (
    DEFAULT_SCHEMA_PATH,
    PROJECT_CONFIG_NAME,
    ProjectConfig,
    ProjectConfigError,
    load_project_config,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the prismgen CLI."""
    parser = argparse.ArgumentParser(
        prog="prismgen",
        description="prismgen: schema parser and validator for code generation",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v for info, -vv for debug)",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Initialize a new prismgen project",
        description="Create a project config file and a starter schema.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to initialize the project in (default: current directory)",
    )
    init_parser.add_argument(
        "--provider",
        default="postgresql",
        choices=["postgresql", "mysql", "sqlite"],
        help="Database provider of the starter datasource (default: postgresql)",
    )

    # validate subcommand
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate the schema",
        description="Check the schema for syntax and semantic errors.",
    )
    _add_schema_argument(validate_parser)
    validate_parser.add_argument(
        "--strict",
        action="store_true",
        help="Also resolve type and field references across the schema",
    )

    # format subcommand
    format_parser = subparsers.add_parser(
        "format",
        help="Format the schema",
        description="Rewrite the schema file in canonical form.",
    )
    _add_schema_argument(format_parser)
    format_parser.add_argument(
        "--check",
        action="store_true",
        help="Only check whether the file is formatted (does not write)",
    )

    # dump subcommand
    dump_parser = subparsers.add_parser(
        "dump",
        help="Write the parsed schema as a JSON artifact",
        description="Parse the schema and write its AST as JSON for downstream generators.",
    )
    _add_schema_argument(dump_parser)
    dump_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file (default: the configured artifact path, else stdout)",
    )

    args = parser.parse_args()
    _configure_logging(args.verbose)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_schema_argument(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "schema",
        nargs="?",
        default=None,
        help=f"Path to the schema file (default: from {PROJECT_CONFIG_NAME}, else {DEFAULT_SCHEMA_PATH})",
    )


def _configure_logging(verbosity: int) -> None:
    """Attach a stderr handler to the package logger.

    Args:
        verbosity: 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    root_logger = logging.getLogger("prismgen")
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "validate":
        return _cmd_validate(args)
    if args.command == "format":
        return _cmd_format(args)
    if args.command == "dump":
        return _cmd_dump(args)
    return 0


def _load_config(directory: Path) -> ProjectConfig:
    """Load the project config from *directory*, or return defaults if absent."""
    config_file = directory / PROJECT_CONFIG_NAME
    if not config_file.exists():
        logger.debug("No %s in %s; using defaults", PROJECT_CONFIG_NAME, directory)
        return ProjectConfig()
    config = load_project_config(config_file)
    logger.info("Loaded project config from %s", config_file)
    return config


def _resolve_schema_path(args: argparse.Namespace, config: ProjectConfig) -> Path:
    """An explicit argument wins over the configured path."""
    if args.schema is not None:
        return Path(args.schema)
    return Path.cwd() / config.schema_path


def _display_path(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd().resolve()))
    except ValueError:
        return str(path)


def _load_schema(args: argparse.Namespace) -> tuple[ProjectConfig, Path, ParseResult] | None:
    """Load config and parse the schema, printing any failure to stderr."""
    try:
        config = _load_config(Path.cwd())
    except ProjectConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None

    schema_path = _resolve_schema_path(args, config)
    print(f"Schema loaded from {_display_path(schema_path)}")
    try:
        result = parse_file(schema_path)
    except SchemaError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None
    return config, schema_path, result


def _print_errors(errors: list[str]) -> None:
    print("Schema validation errors:")
    print()
    print(format_errors(errors), end="")
    print()
    print(f"Validation Error Count: {len(errors)}")


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / PROJECT_CONFIG_NAME
    if config_file.exists():
        print(f"Error: project already exists at '{config_file}'.", file=sys.stderr)
        return 1

    schema_file = directory / DEFAULT_SCHEMA_PATH
    if schema_file.exists():
        print(f"Error: schema already exists at '{schema_file}'.", file=sys.stderr)
        return 1

    config_file.write_text(
        f"# prismgen project configuration\nschema: {DEFAULT_SCHEMA_PATH}\nstrict: false\n",
        encoding="utf-8",
    )
    schema_file.parent.mkdir(parents=True, exist_ok=True)
    schema_file.write_text(_STARTER_SCHEMA.format(provider=args.provider), encoding="utf-8")
    print(f"Initialized prismgen project at '{directory}'.")
    print(f"Created {DEFAULT_SCHEMA_PATH}")
    return 0


_STARTER_SCHEMA = """\
// This is your schema file.

datasource db {{
  provider = "{provider}"
  url      = env("DATABASE_URL")
}}

generator client {{
  provider = "prismgen-client"
  output   = "./generated"
}}
"""


def _cmd_validate(args: argparse.Namespace) -> int:
    """Handle the validate subcommand."""
    loaded = _load_schema(args)
    if loaded is None:
        return 1
    config, schema_path, result = loaded
    print()

    if result.errors:
        _print_errors(result.errors)
        return 1

    if args.strict or config.strict:
        check_result = check(result.schema)
        for warning in check_result.warnings:
            print(f"Warning: {warning.message}")
        if check_result.has_errors:
            _print_errors([e.message for e in check_result.errors])
            return 1

    print(f"The schema at {_display_path(schema_path)} is valid")
    return 0


def _cmd_format(args: argparse.Namespace) -> int:
    """Handle the format subcommand."""
    loaded = _load_schema(args)
    if loaded is None:
        return 1
    _, schema_path, result = loaded
    print()

    if result.errors:
        print("Errors found in schema:")
        print(format_errors(result.errors), end="")
        print("Error: cannot format a schema with errors; fix them first.", file=sys.stderr)
        return 1

    formatted = format_schema(result.schema)
    reparsed = parse(formatted)
    if reparsed.errors:
        print("Error: formatted output does not parse; the schema was left unchanged.", file=sys.stderr)
        print(format_errors(reparsed.errors), end="", file=sys.stderr)
        return 1

    original =schema_path.read_text(encoding="utf-8")
    if _normalize(original) == _normalize(formatted):
        if args.check:
            print("All files are formatted correctly!")
        else:
            print(f"The schema at {_display_path(schema_path)} is already formatted!")
        return 0

    if args.check:
        print("There are unformatted files. Run 'prismgen format' to format them.")
        return 1

    # Formatting drops comments, which the parser never sees.
    schema_path.write_text(formatted, encoding="utf-8")
    logger.info("Rewrote %s (%d bytes)", schema_path, len(formatted))
    print(f"Formatted {_display_path(schema_path)}")
    return 0


def _normalize(text: str) -> str:
    """Strip trailing whitespace per line and around the whole text."""
    return "\n".join(line.rstrip(" \t\r") for line in text.split("\n")).strip()


def _cmd_dump(args: argparse.Namespace) -> int:
    """Handle the dump subcommand."""
    try:
        config = _load_config(Path.cwd())
    except ProjectConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    schema_path = _resolve_schema_path(args, config)
    try:
        result = parse_file(schema_path)
    except SchemaError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if result.errors:
        print(f"Error: schema at {_display_path(schema_path)} has errors:", file=sys.stderr)
        print(format_errors(result.errors), end="", file=sys.stderr)
        return 1

    output = args.output if args.output is not None else config.artifact
    if output is None:
        print(serialize(result.schema))
        return 0

    output_path = Path(output)
    write_artifact(result.schema, output_path)
    print(f"Wrote artifact to {_display_path(output_path)}")
    return 0
