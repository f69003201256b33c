# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Queryable index over every type descriptor visible to one generation run."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from webapits.metadata.descriptors import TypeDescriptor, TypeKind, TypeRef
from webapits.metadata.provider import FileMetadataProvider, MetadataProvider

# ###############
# Public Interface
# ###############

API_CONTROLLER = "System.Web.Http.ApiController"
CONTROLLER_SUFFIX = "Controller"

# CLR value types that are usually defined outside the scanned modules.
CLR_VALUE_TYPES: frozenset[str] = frozenset(
    {
        "System.Boolean",
        "System.Byte",
        "System.SByte",
        "System.Char",
        "System.Int16",
        "System.Int32",
        "System.Int64",
        "System.UInt16",
        "System.UInt32",
        "System.UInt64",
        "System.Single",
        "System.Double",
        "System.Decimal",
        "System.DateTime",
        "System.DateTimeOffset",
        "System.TimeSpan",
        "System.Guid",
        "System.Nullable`1",
        "System.Collections.Generic.KeyValuePair`2",
    }
)


@dataclass(frozen=True)
class MissingReferenceWarning:
    """A referenced module whose descriptor file is absent on disk.

    Attributes:
        reference: Name of the referenced module.
        message: Human-readable description of the warning.
    """

    reference: str
    message: str


class TypeDescriptorStore:
    """Index of type descriptors from the primary module and its references.

    The primary module's types come first, followed by the types of each
    referenced module in declaration order. The first descriptor seen for a
    full name wins lookups.
    """

    def __init__(
        self,
        primary_types: Iterable[TypeDescriptor],
        referenced_types: Iterable[TypeDescriptor] = (),
        *,
        warnings: Iterable[MissingReferenceWarning] = (),
    ) -> None:
        self._primary = tuple(primary_types)
        self._all = self._primary + tuple(referenced_types)
        self._by_name: dict[str, TypeDescriptor] = {}
        for descriptor in self._all:
            self._by_name.setdefault(descriptor.full_name, descriptor)
        self.warnings: tuple[MissingReferenceWarning, ...] = tuple(warnings)

    @classmethod
    def load(
        cls,
        path: Path,
        provider: MetadataProvider | None = None,
        *,
        scan_references: bool = True,
    ) -> TypeDescriptorStore:
        """Load the module at *path* and, optionally, its referenced modules.

        Referenced modules are looked up next to *path*, using the same file
        name suffix as the primary module (``Acme.Api.module.json`` references
        ``Acme.Domain`` as ``Acme.Domain.module.json``). Missing files are
        recorded as warnings and skipped.

        Raises:
            MetadataError: If the primary module or a present reference is invalid.
        """
        provider = provider or FileMetadataProvider()
        primary = provider.load_module(path)
        referenced: list[TypeDescriptor] = []
        warnings: list[MissingReferenceWarning] = []

        if scan_references:
            suffix = _module_suffix(path, primary.name)
            seen: set[str] = {primary.name}
            for reference in provider.get_references(primary):
                if reference in seen:
                    continue
                seen.add(reference)
                candidate = path.parent / f"{reference}{suffix}"
                if not candidate.exists():
                    warnings.append(
                        MissingReferenceWarning(
                            reference=reference,
                            message=f"Referenced module '{reference}' not found at '{candidate}', skipping",
                        )
                    )
                    continue
                referenced.extend(provider.get_types(provider.load_module(candidate)))

        return cls(provider.get_types(primary), referenced, warnings=warnings)

    def all_types(self) -> Sequence[TypeDescriptor]:
        """Return every known descriptor in stable order."""
        return self._all

    def find(self, full_name: str) -> TypeDescriptor | None:
        """Return the descriptor for *full_name*, or None if it is not visible."""
        return self._by_name.get(full_name)

    def controllers(self, base_controller: str = API_CONTROLLER) -> list[TypeDescriptor]:
        """Return the primary module's concrete ``*Controller`` classes deriving from *base_controller*."""
        return [
            descriptor
            for descriptor in self._primary
            if descriptor.kind is TypeKind.CLASS
            and not descriptor.is_abstract
            and descriptor.name.endswith(CONTROLLER_SUFFIX)
            and self.derives_from(descriptor, base_controller)
        ]

    def derives_from(self, descriptor: TypeDescriptor, base_name: str) -> bool:
        """Walk the base-type chain of *descriptor* looking for *base_name*.

        The walk stops at the first base type that is not in the store.
        """
        seen: set[str] = {descriptor.full_name}
        current = descriptor.base_type
        while current is not None:
            if current.name == base_name:
                return True
            base = self.find(current.name)
            if base is None or base.full_name in seen:
                return False
            seen.add(base.full_name)
            current = base.base_type
        return False

    def is_value_type(self, ref: TypeRef) -> bool:
        """Decide whether *ref* is a CLR value type."""
        if ref.is_array:
            return False
        if ref.is_value_type:
            return True
        descriptor = self.find(ref.name)
        if descriptor is not None:
            return descriptor.is_value_type
        return ref.name in CLR_VALUE_TYPES


# ################
# Implementation
# ################


def _module_suffix(path: Path, module_name: str) -> str:
    """Return the part of *path*'s file name that follows the module name."""
    if path.name.startswith(module_name):
        return path.name[len(module_name) :]
    return path.suffix
