# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Metadata providers that turn module descriptor files into descriptors.

A module descriptor file is a JSON or YAML reflection dump of one compiled
assembly: its name, the names of the assemblies it references, and its types.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

import yaml
from pydantic import ValidationError

from webapits.metadata.descriptors import ModuleDescriptor, TypeDescriptor

# ###############
# Public Interface
# ###############

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class MetadataError(Exception):
    """Raised when a module descriptor cannot be read or is invalid."""


class MetadataProvider(Protocol):
    """The capability the type descriptor store needs from a metadata source."""

    def load_module(self, path: Path) -> ModuleDescriptor: ...

    def get_types(self, module: ModuleDescriptor) -> Sequence[TypeDescriptor]: ...

    def get_references(self, module: ModuleDescriptor) -> Sequence[str]: ...


class FileMetadataProvider:
    """Reads module descriptors from JSON files, or YAML files ending in ``.yaml``/``.yml``."""

    def load_module(self, path: Path) -> ModuleDescriptor:
        """Load and validate the module descriptor at *path*.

        Raises:
            MetadataError: If the file cannot be read, is not valid JSON/YAML,
                or does not conform to the descriptor schema.
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise MetadataError(f"Module descriptor not found: {path}") from None
        except OSError as exc:
            raise MetadataError(f"Cannot read module descriptor '{path}': {exc}") from exc

        try:
            data = yaml.safe_load(raw) if path.suffix.lower() in YAML_SUFFIXES else json.loads(raw)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise MetadataError(f"Invalid module descriptor '{path}': {exc}") from exc

        if not isinstance(data, dict):
            raise MetadataError(f"{path}: module descriptor must be a mapping")

        try:
            return ModuleDescriptor.model_validate(data)
        except ValidationError as exc:
            raise MetadataError(f"Invalid module descriptor '{path}': {exc}") from exc

    def get_types(self, module: ModuleDescriptor) -> Sequence[TypeDescriptor]:
        return module.types

    def get_references(self, module: ModuleDescriptor) -> Sequence[str]:
        return module.references
