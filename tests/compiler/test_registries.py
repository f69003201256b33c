# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the enum and interface registries."""

from pathlib import Path

from webapits.compiler.registries import EnumRegistry, InterfaceField, InterfaceRegistry, apply_registrations
from webapits.compiler.resolver import TypeResolver
from webapits.config import Config
from webapits.emit.block import Block
from webapits.metadata import TypeDescriptor, TypeDescriptorStore, parse_type_name

# ###############
# Test Helpers
# ###############

DATA_DIR = Path(__file__).parent.parent / "data" / "metadata"

_STORE = TypeDescriptorStore.load(DATA_DIR / "Acme.Api.module.yaml")


def _registries(**overrides: object) -> tuple[TypeResolver, EnumRegistry, InterfaceRegistry]:
    config = Config.model_validate({"web_api_module_file_name": "m.json", "generate_interfaces": True, **overrides})
    resolver = TypeResolver(_STORE, config)
    enums = EnumRegistry()
    return resolver, enums, InterfaceRegistry(resolver, enums)


def _descriptor(full_name: str) -> TypeDescriptor:
    descriptor = _STORE.find(full_name)
    assert descriptor is not None
    return descriptor


# ###############
# Enum registry
# ###############


class TestEnumRegistry:
    def test_add_is_idempotent(self) -> None:
        enums = EnumRegistry()
        assert enums.add(_descriptor("Acme.Domain.Color"))
        assert not enums.add(_descriptor("Acme.Domain.Color"))
        assert len(enums) == 1
        assert "Acme.Domain.Color" in enums

    def test_write_to(self) -> None:
        enums = EnumRegistry()
        enums.add(_descriptor("Acme.Domain.Color"))
        text = enums.write_to(Block("namespace Enums")).render()
        assert text == (
            "namespace Enums {\n"
            "    export enum Color {\n"
            "        Red = 0,\n"
            "        Green = 1,\n"
            "        Blue = 2,\n"
            "    }\n"
            "}\n"
        )

    def test_empty_registry_writes_empty_namespace(self) -> None:
        assert EnumRegistry().write_to(Block("namespace Enums")).render() == "namespace Enums {\n}\n"


# ###############
# Interface registry
# ###############


class TestInterfaceRegistry:
    def test_registers_dependencies_transitively(self) -> None:
        _, enums, interfaces = _registries()
        assert interfaces.add(_descriptor("Acme.Domain.Widget"))
        assert [entry.descriptor.full_name for entry in interfaces] == [
            "Acme.Domain.Widget",
            "Acme.Domain.Entity",
            "Acme.Domain.Part",
        ]
        assert [e.full_name for e in enums] == ["Acme.Domain.Color"]

    def test_fields_and_base(self) -> None:
        _, _, interfaces = _registries()
        interfaces.add(_descriptor("Acme.Domain.Widget"))
        widget = next(iter(interfaces))
        assert widget.base == "Entity"
        assert widget.fields == (
            InterfaceField("Name", "string"),
            InterfaceField("Color", "Enums.Color"),
            InterfaceField("Parts", "Interfaces.Part[]"),
        )

    def test_self_reference_terminates(self) -> None:
        _, _, interfaces = _registries()
        interfaces.add(_descriptor("Acme.Domain.Part"))
        part = next(iter(interfaces))
        assert part.fields[1] == InterfaceField("Owner", "Interfaces.Widget")
        assert not interfaces.add(_descriptor("Acme.Domain.Widget"))

    def test_unresolvable_field_falls_back_to_any(self) -> None:
        _, _, interfaces = _registries()
        interfaces.add(
            TypeDescriptor.model_validate(
                {
                    "full-name": "Acme.Domain.Shape",
                    "fields": [{"name": "Origin", "type": "Acme.Domain.Point"}],
                }
            )
        )
        assert next(iter(interfaces)).fields == (InterfaceField("Origin", "any"),)

    def test_unresolvable_collection_field_falls_back_to_any_array(self) -> None:
        _, _, interfaces = _registries()
        interfaces.add(
            TypeDescriptor.model_validate(
                {
                    "full-name": "Acme.Domain.Schedule",
                    "fields": [{"name": "Dates", "type": "System.Collections.Generic.List`1<System.DateTime>"}],
                }
            )
        )
        assert next(iter(interfaces)).fields == (InterfaceField("Dates", "any[]"),)

    def test_base_outside_store_is_omitted(self) -> None:
        _, _, interfaces = _registries()
        interfaces.add(
            TypeDescriptor.model_validate({"full-name": "Acme.Domain.Remote", "base-type": "Other.Lib.Base"})
        )
        assert next(iter(interfaces)).base is None

    def test_write_to(self) -> None:
        _, _, interfaces = _registries()
        interfaces.add(_descriptor("Acme.Domain.Entity"))
        interfaces.add(_descriptor("Acme.Domain.WidgetFilter"))
        text = interfaces.write_to(Block("namespace Interfaces")).render()
        assert text == (
            "namespace Interfaces {\n"
            "    export interface Entity {\n"
            "        Id: number;\n"
            "    }\n"
            "\n"
            "    export interface WidgetFilter {\n"
            "        Query: string;\n"
            "    }\n"
            "}\n"
        )

    def test_write_to_with_base(self) -> None:
        _, _, interfaces = _registries()
        interfaces.add(_descriptor("Acme.Domain.Widget"))
        text = interfaces.write_to(Block("namespace Interfaces")).render()
        assert "    export interface Widget extends Entity {\n" in text


# ###############
# Applying registrations
# ###############


def test_apply_registrations_returns_resolved_type() -> None:
    resolver, enums, interfaces = _registries()
    resolution = resolver.resolve_type(parse_type_name("Acme.Domain.WidgetFilter[]"))
    resolved = apply_registrations(resolution, enums, interfaces)
    assert resolved.rendered == "Interfaces.WidgetFilter[]"
    assert "Acme.Domain.WidgetFilter" in interfaces
    assert len(enums) == 0


def test_resolution_alone_registers_nothing() -> None:
    resolver, enums, interfaces = _registries()
    resolver.resolve_type(parse_type_name("Acme.Domain.Color"))
    assert len(enums) == 0
    assert len(interfaces) == 0
