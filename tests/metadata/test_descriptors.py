# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the metadata descriptor models and attribute queries."""

import pytest
from pydantic import ValidationError

from webapits.metadata import (
    AttributeDescriptor,
    MethodDescriptor,
    ModuleDescriptor,
    ParameterDescriptor,
    TypeDescriptor,
    TypeKind,
    TypeRef,
    find_tag,
    has_tag,
)

# ###############
# Type references
# ###############


def test_type_ref_accepts_string_shorthand() -> None:
    parameter = ParameterDescriptor.model_validate({"name": "ids", "type": "System.Int32[]"})
    assert parameter.type.is_array
    assert parameter.type.full_name == "System.Int32[]"


def test_type_ref_accepts_explicit_mapping() -> None:
    parameter = ParameterDescriptor.model_validate(
        {
            "name": "point",
            "type": {"name": "Acme.Point", "value-type": True},
        }
    )
    assert parameter.type == TypeRef(name="Acme.Point", is_value_type=True)


def test_generic_arguments_accept_strings() -> None:
    ref = TypeRef.model_validate({"name": "System.Nullable`1", "arguments": ["System.Int32"]})
    assert ref.full_name == "System.Nullable`1<System.Int32>"


def test_invalid_type_name_is_a_validation_error() -> None:
    with pytest.raises(ValidationError):
        ParameterDescriptor.model_validate({"name": "x", "type": "List`1<"})


def test_descriptors_are_frozen() -> None:
    parameter = ParameterDescriptor.model_validate({"name": "id", "type": "System.Int32"})
    with pytest.raises(ValidationError):
        parameter.name = "other"  # type: ignore[misc]


# ###############
# Type descriptors
# ###############


def test_type_descriptor_names() -> None:
    descriptor = TypeDescriptor.model_validate({"full-name": "Acme.Api.Controllers.WidgetsController"})
    assert descriptor.name == "WidgetsController"
    assert descriptor.namespace == "Acme.Api.Controllers"
    assert descriptor.kind is TypeKind.CLASS
    assert not descriptor.is_value_type


def test_enum_descriptor() -> None:
    descriptor = TypeDescriptor.model_validate(
        {
            "full-name": "Acme.Color",
            "kind": "enum",
            "members": [{"name": "Red", "value": 0}, {"name": "Blue", "value": 4}],
        }
    )
    assert descriptor.is_enum
    assert descriptor.is_value_type
    assert [(m.name, m.value) for m in descriptor.members] == [("Red", 0), ("Blue", 4)]


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ValidationError):
        TypeDescriptor.model_validate({"full-name": "Acme.X", "colour": "red"})


def test_module_descriptor_defaults() -> None:
    module = ModuleDescriptor(name="Acme.Api")
    assert module.references == ()
    assert module.types == ()


def test_method_flags_use_aliases() -> None:
    method = MethodDescriptor.model_validate({"name": "Helper", "public": False, "static": True})
    assert not method.is_public
    assert method.is_static


# ###############
# Attribute queries
# ###############


@pytest.mark.parametrize(
    "query",
    [
        "System.Web.Http.FromBodyAttribute",
        "FromBodyAttribute",
        "FromBody",
        "Other.Namespace.FromBody",
    ],
)
def test_has_tag_matches_full_and_short_names(query: str) -> None:
    parameter = ParameterDescriptor.model_validate(
        {"name": "x", "type": "System.String", "attributes": ["System.Web.Http.FromBodyAttribute"]}
    )
    assert has_tag(parameter, query)


def test_has_tag_is_false_for_other_attributes() -> None:
    parameter = ParameterDescriptor.model_validate(
        {"name": "x", "type": "System.String", "attributes": ["System.Web.Http.FromUriAttribute"]}
    )
    assert not has_tag(parameter, "FromBody")


def test_find_tag_returns_arguments() -> None:
    method = MethodDescriptor.model_validate(
        {
            "name": "Get",
            "attributes": [{"name": "System.Web.Http.RouteAttribute", "arguments": ["{id:int}"]}],
        }
    )
    tag = find_tag(method, "Route")
    assert tag == AttributeDescriptor(name="System.Web.Http.RouteAttribute", arguments=("{id:int}",))
    assert find_tag(method, "HttpGet") is None
