# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Descriptors for the reflected metadata of a compiled Web API module.

The descriptors mirror what a reflection dump of a .NET assembly exposes:
types with their fields, methods, parameters and attached attributes. They
are immutable once loaded. Anywhere a type reference is expected, a CLR type
name string such as ``System.Nullable`1<System.Int32>`` is accepted as well.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Protocol

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


def _coerce_type_ref(value: Any) -> Any:
    """Accept a CLR type name string wherever a TypeRef is expected."""
    if isinstance(value, str):
        from webapits.metadata.typenames import parse_type_name

        return parse_type_name(value)
    return value


def _coerce_attribute(value: Any) -> Any:
    """Accept a bare attribute name as an argument-less attribute."""
    if isinstance(value, str):
        return {"name": value}
    return value


_MODEL_CONFIG = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class TypeRef(BaseModel):
    """A reference to a CLR type as it appears on a parameter or field.

    Attributes:
        name: Full name of the (open) type, e.g. ``System.Nullable`1``.
        arguments: Generic arguments of a closed generic type.
        element_type: Element type when the reference is an array.
        is_value_type: True when the provider knows the type is a value type.
    """

    model_config = _MODEL_CONFIG

    name: str
    arguments: tuple[TypeRefInput, ...] = ()
    element_type: TypeRefInput | None = _Field(default=None, alias="element-type")
    is_value_type: bool = _Field(default=False, alias="value-type")

    @property
    def full_name(self) -> str:
        """The CLR full name, e.g. ``System.Collections.Generic.List`1<System.Int32>``."""
        if self.element_type is not None:
            return f"{self.element_type.full_name}[]"
        if self.arguments:
            return f"{self.name}<{','.join(a.full_name for a in self.arguments)}>"
        return self.name

    @property
    def is_array(self) -> bool:
        return self.element_type is not None

    @property
    def is_generic(self) -> bool:
        return bool(self.arguments)


TypeRefInput = Annotated[TypeRef, BeforeValidator(_coerce_type_ref)]


class AttributeDescriptor(BaseModel):
    """A custom attribute (metadata tag) attached to a type, method, or parameter."""

    model_config = _MODEL_CONFIG

    name: str
    arguments: tuple[str | int | float | bool | None, ...] = ()


AttributeInput = Annotated[AttributeDescriptor, BeforeValidator(_coerce_attribute)]


class ParameterDescriptor(BaseModel):
    """A method parameter."""

    model_config = _MODEL_CONFIG

    name: str
    type: TypeRefInput
    optional: bool = False
    attributes: tuple[AttributeInput, ...] = ()


class MethodDescriptor(BaseModel):
    """A method declared on a type."""

    model_config = _MODEL_CONFIG

    name: str
    is_public: bool = _Field(default=True, alias="public")
    is_static: bool = _Field(default=False, alias="static")
    is_constructor: bool = _Field(default=False, alias="constructor")
    is_special_name: bool = _Field(default=False, alias="special-name")
    parameters: tuple[ParameterDescriptor, ...] = ()
    attributes: tuple[AttributeInput, ...] = ()


class FieldDescriptor(BaseModel):
    """A public field or property of a class."""

    model_config = _MODEL_CONFIG

    name: str
    type: TypeRefInput


class EnumMember(BaseModel):
    """A named enum constant."""

    model_config = _MODEL_CONFIG

    name: str
    value: int


class TypeKind(Enum):
    """The shape of a described type."""

    CLASS = "class"
    STRUCT = "struct"
    ENUM = "enum"
    INTERFACE = "interface"
    PRIMITIVE = "primitive"


class TypeDescriptor(BaseModel):
    """A type defined in a scanned module."""

    model_config = _MODEL_CONFIG

    full_name: str = _Field(alias="full-name")
    kind: TypeKind = TypeKind.CLASS
    is_abstract: bool = _Field(default=False, alias="abstract")
    base_type: TypeRefInput | None = _Field(default=None, alias="base-type")
    attributes: tuple[AttributeInput, ...] = ()
    fields: tuple[FieldDescriptor, ...] = ()
    methods: tuple[MethodDescriptor, ...] = ()
    members: tuple[EnumMember, ...] = ()

    @property
    def name(self) -> str:
        """Short type name without namespace or declaring types."""
        return self.full_name.rsplit(".", 1)[-1].rsplit("/", 1)[-1]

    @property
    def namespace(self) -> str:
        head, _, _ = self.full_name.rpartition(".")
        return head

    @property
    def is_enum(self) -> bool:
        return self.kind is TypeKind.ENUM

    @property
    def is_value_type(self) -> bool:
        return self.kind in (TypeKind.STRUCT, TypeKind.ENUM, TypeKind.PRIMITIVE)


class ModuleDescriptor(BaseModel):
    """The metadata of one compiled module (assembly)."""

    model_config = _MODEL_CONFIG

    name: str
    references: tuple[str, ...] = ()
    types: tuple[TypeDescriptor, ...] = ()


class HasAttributes(Protocol):
    """Anything that carries custom attributes."""

    @property
    def attributes(self) -> tuple[AttributeDescriptor, ...]: ...


def has_tag(target: HasAttributes, tag_name: str) -> bool:
    """Return True if *target* carries the attribute *tag_name*.

    Full names and short names match each other, and the ``Attribute``
    suffix is optional on both sides: ``FromBody`` matches
    ``System.Web.Http.FromBodyAttribute``.
    """
    return find_tag(target, tag_name) is not None


def find_tag(target: HasAttributes, tag_name: str) -> AttributeDescriptor | None:
    """Return the first attribute on *target* matching *tag_name*, if any."""
    wanted = tag_key(tag_name)
    for attribute in target.attributes:
        if tag_key(attribute.name) == wanted:
            return attribute
    return None


def tag_key(name: str) -> str:
    """Normalize an attribute name to its short name without the ``Attribute`` suffix."""
    short = name.rsplit(".", 1)[-1]
    return short.removesuffix("Attribute")


# Resolve forward references for models that use TypeRefInput.
TypeRef.model_rebuild()
ParameterDescriptor.model_rebuild()
FieldDescriptor.model_rebuild()
TypeDescriptor.model_rebuild()
