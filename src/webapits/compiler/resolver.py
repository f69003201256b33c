# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolution of CLR parameter types to TypeScript types.

Rules are tried in order and the first applicable one wins:

1. A configured type mapping (by type-name prefix, attribute, or route constraint).
2. ``Nullable<T>`` and single-argument collections are unwrapped.
3. Enums become references into the enums namespace (or ``number``).
4. Known primitives map through a fixed table.
5. Classes and interfaces visible to the store become references into the
   interfaces namespace (or ``IHaveQueryParams``).

Anything else is an :class:`UnsupportedTypeError`. Resolution never touches
the registries: enum and interface registrations come back as requests that
the caller applies.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from webapits.compiler.errors import UnsupportedTypeError
from webapits.compiler.routes import to_camel_case
from webapits.config.settings import Config, TypeMapping
from webapits.metadata.descriptors import ParameterDescriptor, TypeDescriptor, TypeKind, TypeRef, has_tag
from webapits.metadata.store import TypeDescriptorStore

if TYPE_CHECKING:
    from webapits.compiler.actions import RoutePart

# ###############
# Public Interface
# ###############

HAVE_QUERY_PARAMS = "IHaveQueryParams"

TYPESCRIPT_PRIMITIVES: frozenset[str] = frozenset({"string", "number", "boolean", "any"})

PRIMITIVE_TYPES: dict[str, str] = {
    "System.String": "string",
    "System.Char": "string",
    "System.Guid": "string",
    "System.Boolean": "boolean",
    "System.Byte": "number",
    "System.SByte": "number",
    "System.Int16": "number",
    "System.Int32": "number",
    "System.Int64": "number",
    "System.UInt16": "number",
    "System.UInt32": "number",
    "System.UInt64": "number",
    "System.Single": "number",
    "System.Double": "number",
    "System.Decimal": "number",
    "System.Object": "any",
}

NULLABLE_TYPE = "System.Nullable`1"

COLLECTION_TYPES: frozenset[str] = frozenset(
    {
        "System.Collections.Generic.List`1",
        "System.Collections.Generic.IList`1",
        "System.Collections.Generic.ICollection`1",
        "System.Collections.Generic.IEnumerable`1",
        "System.Collections.Generic.IReadOnlyList`1",
        "System.Collections.Generic.IReadOnlyCollection`1",
        "System.Collections.Generic.HashSet`1",
        "System.Collections.Generic.ISet`1",
        "System.Collections.ObjectModel.Collection`1",
    }
)


@dataclass(frozen=True)
class ResolvedType:
    """The TypeScript type chosen for a CLR type.

    Attributes:
        type_name: TypeScript type name without the array suffix.
        is_primitive: True for ``string``, ``number``, ``boolean`` and ``any``.
        is_enum: True for enums (and for mapped primitives, which serialize alike).
        is_collection: True when the CLR type was an array or collection.
        mapping: The type mapping that produced this type, if any.
    """

    type_name: str
    is_primitive: bool = False
    is_enum: bool = False
    is_collection: bool = False
    mapping: TypeMapping | None = None

    @property
    def rendered(self) -> str:
        """The type as written in TypeScript, with ``[]`` for collections."""
        return f"{self.type_name}[]" if self.is_collection else self.type_name

    @property
    def is_string(self) -> bool:
        return self.type_name == "string" and not self.is_collection


class RegistrationKind(Enum):
    ENUM = "enum"
    INTERFACE = "interface"


@dataclass(frozen=True)
class Registration:
    """A request to mirror a type in the enum or interface registry."""

    kind: RegistrationKind
    descriptor: TypeDescriptor


@dataclass(frozen=True)
class Resolution:
    """The result of resolving one type: the type and the registrations it needs."""

    resolved: ResolvedType
    registrations: tuple[Registration, ...] = ()


class TypeResolver:
    """Resolves CLR types against the type store and the configured mappings."""

    def __init__(self, store: TypeDescriptorStore, config: Config) -> None:
        self._store = store
        self._config = config

    @property
    def store(self) -> TypeDescriptorStore:
        return self._store

    def resolve(self, part: RoutePart) -> Resolution:
        """Resolve the type of the parameter bound to *part*."""
        return self.resolve_type(part.parameter.type, parameter=part.parameter, constraints=part.constraints)

    def resolve_type(
        self,
        ref: TypeRef,
        *,
        parameter: ParameterDescriptor | None = None,
        constraints: Sequence[str] = (),
        fallback: str | None = None,
    ) -> Resolution:
        """Resolve *ref* to a TypeScript type.

        Args:
            ref: The CLR type reference.
            parameter: The parameter declaring *ref*; enables attribute mappings.
            constraints: Route constraints of the placeholder bound to the parameter.
            fallback: Type name to use instead of raising when nothing matches.

        Raises:
            UnsupportedTypeError: If nothing matches and no *fallback* is given.
        """
        mapping = self.find_mapping(ref, parameter=parameter, constraints=constraints)
        if mapping is not None:
            type_name = mapping.type_script_type_name
            is_primitive = type_name in TYPESCRIPT_PRIMITIVES
            return Resolution(
                ResolvedType(
                    type_name=type_name,
                    is_primitive=is_primitive,
                    is_enum=is_primitive or type_name.startswith(self._config.enums_namespace),
                    mapping=mapping,
                )
            )

        inner = _strip_nullable(ref)
        element = _strip_collection(inner)
        is_collection = element is not None
        if element is not None:
            inner = _strip_nullable(element)

        descriptor = self._store.find(inner.name)

        if descriptor is not None and descriptor.is_enum:
            if not self._config.generate_enums:
                return Resolution(ResolvedType("number", is_primitive=True, is_enum=True, is_collection=is_collection))
            return Resolution(
                ResolvedType(
                    f"{self._config.enums_namespace}.{descriptor.name}",
                    is_enum=True,
                    is_collection=is_collection,
                ),
                (Registration(RegistrationKind.ENUM, descriptor),),
            )

        primitive = PRIMITIVE_TYPES.get(inner.full_name)
        if primitive is not None:
            return Resolution(ResolvedType(primitive, is_primitive=True, is_collection=is_collection))

        is_class = descriptor is not None and descriptor.kind in (TypeKind.CLASS, TypeKind.INTERFACE)
        if is_class and not inner.is_generic and not inner.is_array:
            if not self._config.generate_interfaces:
                return Resolution(ResolvedType(HAVE_QUERY_PARAMS, is_collection=is_collection))
            return Resolution(
                    ResolvedType(
                        f"{self._config.interfaces_namespace}.{descriptor.name}",
                        is_collection=is_collection,
                    ),
                    (Registration(RegistrationKind.INTERFACE, descriptor),),
                )

        if fallback is not None:
            return Resolution(
                ResolvedType(fallback, is_primitive=fallback in TYPESCRIPT_PRIMITIVES, is_collection=is_collection)
            )
        raise UnsupportedTypeError(ref.full_name, parameter.name if parameter is not None else None)

    def find_mapping(
        self,
        ref: TypeRef,
        *,
        parameter: ParameterDescriptor | None = None,
        constraints: Sequence[str] = (),
    ) -> TypeMapping | None:
        """Return the first configured mapping matching *ref*, or None."""
        type_name = ref.full_name
        for mapping in self._config.type_mappings:
            if type_name.startswith(mapping.web_api_type_name):
                return mapping
            if (
                mapping.treat_as_attribute
                and parameter is not None
                and has_tag(parameter, f"{mapping.web_api_type_name}Attribute")
            ):
                return mapping
            if mapping.treat_as_constraint and to_camel_case(mapping.web_api_type_name) in constraints:
                return mapping
        return None

    def is_optional(self, parameter: ParameterDescriptor) -> bool:
        """A parameter is optional when declared so, when it is a reference type, or when it is nullable."""
        ref = parameter.type
        return parameter.optional or not self._store.is_value_type(ref) or ref.name == NULLABLE_TYPE


# ################
# Implementation
# ################


def _strip_nullable(ref: TypeRef) -> TypeRef:
    if ref.name == NULLABLE_TYPE and len(ref.arguments) == 1:
        return ref.arguments[0]
    return ref


def _strip_collection(ref: TypeRef) -> TypeRef | None:
    if ref.element_type is not None:
        return ref.element_type
    if ref.name in COLLECTION_TYPES and len(ref.arguments) == 1:
        return ref.arguments[0]
    return None
