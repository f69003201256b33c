# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Emitters for the enums and interfaces documents, and the document writer."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from webapits.compiler.registries import EnumRegistry, InterfaceRegistry
from webapits.config.settings import Config
from webapits.emit.block import Block

# ###############
# Public Interface
# ###############


class OutputError(Exception):
    """Raised when an output directory or document cannot be written."""


@dataclass(frozen=True)
class Document:
    """A fully rendered output file."""

    path: Path
    text: str


def emit_enums(config: Config, enums: EnumRegistry) -> Block:
    """Build the enums namespace from the registry."""
    return enums.write_to(Block(f"{config.namespace_keyword} {config.enums_namespace}"))


def emit_interfaces(config: Config, interfaces: InterfaceRegistry) -> Block:
    """Build the interfaces namespace from the registry."""
    return interfaces.write_to(Block(f"{config.namespace_keyword} {config.interfaces_namespace}"))


def write_documents(documents: Iterable[Document]) -> list[Path]:
    """Write each document, creating parent directories as needed.

    Documents are written in order and existing files are overwritten.

    Returns:
        The written paths.

    Raises:
        OutputError: If a directory cannot be created or a file cannot be written.
    """
    written: list[Path] = []
    for document in documents:
        try:
            document.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputError(f"Cannot create output directory '{document.path.parent}': {exc}") from exc
        try:
            document.path.write_text(document.text, encoding="utf-8")
        except OSError as exc:
            raise OutputError(f"Cannot write '{document.path}': {exc}") from exc
        written.append(document.path)
    return written
