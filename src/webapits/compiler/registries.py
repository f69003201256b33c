# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Deduplicated, insertion-ordered registries of types to mirror in TypeScript."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from webapits.compiler.resolver import RegistrationKind, Resolution, ResolvedType, TypeResolver
from webapits.metadata.descriptors import TypeDescriptor, TypeKind

if TYPE_CHECKING:
    from webapits.emit.block import Block

# ###############
# Public Interface
# ###############


class EnumRegistry:
    """Enums referenced by the generated code, keyed by full name."""

    def __init__(self) -> None:
        self._enums: dict[str, TypeDescriptor] = {}

    def add(self, descriptor: TypeDescriptor) -> bool:
        """Register *descriptor*; return False if it was already registered."""
        if descriptor.full_name in self._enums:
            return False
        self._enums[descriptor.full_name] = descriptor
        return True

    def __contains__(self, full_name: object) -> bool:
        return full_name in self._enums

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(self._enums.values())

    def __len__(self) -> int:
        return len(self._enums)

    def write_to(self, block: Block) -> Block:
        """Write one ``export enum`` declaration per registered enum into *block*."""
        for descriptor in self:
            enum_block = block.add_block(f"export enum {descriptor.name}")
            for member in descriptor.members:
                enum_block.add_statement(f"{member.name} = {member.value},")
        return block


@dataclass(frozen=True)
class InterfaceField:
    name: str
    type_name: str


@dataclass(frozen=True)
class InterfaceEntry:
    """A class mirrored as a TypeScript interface.

    Attributes:
        descriptor: The mirrored class.
        fields: Its fields with their rendered TypeScript types.
        base: Rendered name of the mirrored base class, if any.
    """

    descriptor: TypeDescriptor
    fields: tuple[InterfaceField, ...]
    base: str | None = None


class InterfaceRegistry:
    """Classes referenced by the generated code, keyed by full name.

    Registering a class also registers the classes and enums its fields
    refer to, and its base class when that class is visible to the store.
    Field types that no rule resolves are emitted as ``any``.
    """

    def __init__(self, resolver: TypeResolver, enums: EnumRegistry) -> None:
        self._resolver = resolver
        self._enums = enums
        self._entries: dict[str, InterfaceEntry | None] = {}

    def add(self, descriptor: TypeDescriptor) -> bool:
        """Register *descriptor* and its dependencies; return False if already registered."""
        if descriptor.full_name in self._entries:
            return False
        # Reserve the slot first so self-referencing classes terminate.
        self._entries[descriptor.full_name] = None

        base = None
        base_descriptor = self._base_descriptor(descriptor)
        if base_descriptor is not None:
            self.add(base_descriptor)
            base = base_descriptor.name

        fields = []
        for field in descriptor.fields:
            resolution = self._resolver.resolve_type(field.type, fallback="any")
            resolved = apply_registrations(resolution, self._enums, self)
            fields.append(InterfaceField(name=field.name, type_name=resolved.rendered))

        self._entries[descriptor.full_name] = InterfaceEntry(descriptor=descriptor, fields=tuple(fields), base=base)
        return True

    def __contains__(self, full_name: object) -> bool:
        return full_name in self._entries

    def __iter__(self) -> Iterator[InterfaceEntry]:
        return (entry for entry in self._entries.values() if entry is not None)

    def __len__(self) -> int:
        return len(self._entries)

    def write_to(self, block: Block) -> Block:
        """Write one ``export interface`` declaration per registered class into *block*."""
        for entry in self:
            header = f"export interface {entry.descriptor.name}"
            if entry.base is not None:
                header += f" extends {entry.base}"
            interface_block = block.add_block(header)
            for field in entry.fields:
                interface_block.add_statement(f"{field.name}: {field.type_name};")
        return block

    def _base_descriptor(self, descriptor: TypeDescriptor) -> TypeDescriptor | None:
        if descriptor.base_type is None:
            return None
        base = self._resolver.store.find(descriptor.base_type.name)
        if base is None or base.kind is not TypeKind.CLASS:
            return None
        return base


def apply_registrations(resolution: Resolution, enums: EnumRegistry, interfaces: InterfaceRegistry) -> ResolvedType:
    """Apply the registration requests of *resolution* and return its resolved type."""
    for registration in resolution.registrations:
        if registration.kind is RegistrationKind.ENUM:
            enums.add(registration.descriptor)
        else:
            interfaces.add(registration.descriptor)
    return resolution.resolved
