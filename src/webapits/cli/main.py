# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the webapits command-line interface."""

import argparse
import json
import sys
from pathlib import Path

from webapits.compiler.build import run
from webapits.compiler.errors import GenerationError
from webapits.config.settings import CONFIG_FILE_NAME, ConfigError, load_config
from webapits.emit.documents import OutputError
from webapits.metadata.provider import MetadataError

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the webapits CLI."""
    parser = argparse.ArgumentParser(
        prog="webapits",
        description="webapits - generate TypeScript clients from Web API metadata",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Write a starter configuration file",
        description=f"Create a {CONFIG_FILE_NAME} configuration file with default settings.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to write the configuration to (default: current directory)",
    )
    init_parser.add_argument(
        "--module",
        default="bin/WebApi.module.json",
        help="Path of the Web API module descriptor, relative to the configuration file",
    )

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate TypeScript endpoints, service, enums and interfaces",
        description="Read the module descriptor named in the configuration and write the TypeScript documents.",
    )
    generate_parser.add_argument(
        "config",
        nargs="?",
        default=CONFIG_FILE_NAME,
        help=f"Path to the configuration file (default: {CONFIG_FILE_NAME})",
    )

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
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "generate":
        return _cmd_generate(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME
    if config_file.exists():
        print(f"Error: configuration already exists at '{config_file}'.", file=sys.stderr)
        return 1

    starter = {
        "webApiModuleFileName": args.module,
        "endpointsOutputDirectory": "generated",
        "serviceOutputDirectory": "generated",
        "enumsOutputDirectory": "generated",
        "interfacesOutputDirectory": "generated",
        "generateEnums": True,
        "generateInterfaces": False,
        "scanOtherModules": True,
        "writeNamespaceAsModule": False,
        "typeMappings": [],
    }
    config_file.write_text(json.dumps(starter, indent=2) + "\n", encoding="utf-8")
    print(f"Initialized configuration at '{config_file}'.")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    config_path = Path(args.config).resolve()

    try:
        config = load_config(config_path)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Generating TypeScript from '{config.module_path}'...")
    try:
        result = run(config)
    except (MetadataError, GenerationError, OutputError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for warning in result.warnings:
        print(f"Warning: {warning.message}")

    print(f"Processed {len(result.controllers)} controller(s).")
    for document in result.documents:
        print(f"{document.path} created!")
    return 0
