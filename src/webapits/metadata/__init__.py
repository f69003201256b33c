# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reflected metadata of Web API modules: descriptors, providers, and the type store."""

from webapits.metadata.descriptors import (
    AttributeDescriptor,
    EnumMember,
    FieldDescriptor,
    MethodDescriptor,
    ModuleDescriptor,
    ParameterDescriptor,
    TypeDescriptor,
    TypeKind,
    TypeRef,
    find_tag,
    has_tag,
)
from webapits.metadata.provider import FileMetadataProvider, MetadataError, MetadataProvider
from webapits.metadata.store import (
    API_CONTROLLER,
    MissingReferenceWarning,
    TypeDescriptorStore,
)
from webapits.metadata.typenames import TypeNameError, parse_type_name

__all__ = [
    # Descriptors
    "AttributeDescriptor",
    "EnumMember",
    "FieldDescriptor",
    "MethodDescriptor",
    "ModuleDescriptor",
    "ParameterDescriptor",
    "TypeDescriptor",
    "TypeKind",
    "TypeRef",
    "find_tag",
    "has_tag",
    # Type names
    "TypeNameError",
    "parse_type_name",
    # Providers
    "FileMetadataProvider",
    "MetadataError",
    "MetadataProvider",
    # Store
    "API_CONTROLLER",
    "MissingReferenceWarning",
    "TypeDescriptorStore",
]
