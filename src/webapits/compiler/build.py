# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""The generation pipeline: metadata in, rendered TypeScript documents out.

A run loads the type store, builds the action model (resolving every
parameter type and registering mirrored enums and interfaces along the way),
and renders each enabled document in memory. Nothing touches the output
directories until every document has been built, so a fatal error leaves
previous output untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from webapits.compiler.actions import Controller, ModelBuilder
from webapits.compiler.registries import EnumRegistry, InterfaceRegistry
from webapits.compiler.resolver import TypeResolver
from webapits.config.settings import Config
from webapits.emit.documents import Document, emit_enums, emit_interfaces, write_documents
from webapits.emit.endpoints import EndpointsEmitter
from webapits.emit.service import ServiceEmitter
from webapits.metadata.provider import MetadataProvider
from webapits.metadata.store import MissingReferenceWarning, TypeDescriptorStore

# ###############
# Public Interface
# ###############


@dataclass
class GenerationResult:
    """Everything a run produced.

    Attributes:
        documents: Rendered documents in write order.
        controllers: The action model the documents were generated from.
        warnings: Non-fatal conditions met while loading metadata.
    """

    documents: list[Document] = field(default_factory=list)
    controllers: list[Controller] = field(default_factory=list)
    warnings: list[MissingReferenceWarning] = field(default_factory=list)


def generate(config: Config, store: TypeDescriptorStore) -> GenerationResult:
    """Generate every enabled document for the controllers in *store*.

    Raises:
        GenerationError: If a parameter type is unsupported, an action has no
            verb, or a route placeholder has no parameter.
    """
    resolver = TypeResolver(store, config)
    enums = EnumRegistry()
    interfaces = InterfaceRegistry(resolver, enums)
    controllers = ModelBuilder(resolver, enums, interfaces).build(store.controllers())

    documents = [
        Document(config.endpoints_path, EndpointsEmitter(config).emit(controllers).render()),
        Document(config.service_path, ServiceEmitter(config).emit(controllers).render()),
    ]
    if config.generate_enums:
        documents.append(Document(config.enums_path, emit_enums(config, enums).render()))
    if config.generate_interfaces:
        documents.append(Document(config.interfaces_path, emit_interfaces(config, interfaces).render()))

    return GenerationResult(documents=documents, controllers=controllers, warnings=list(store.warnings))


def run(config: Config, provider: MetadataProvider | None = None) -> GenerationResult:
    """Load the configured module, generate all documents, and write them.

    Raises:
        MetadataError: If a module descriptor is invalid.
        GenerationError: On any fatal generation error; nothing is written.
        OutputError: If a document cannot be written.
    """
    store = TypeDescriptorStore.load(config.module_path, provider, scan_references=config.scan_other_modules)
    result = generate(config, store)
    write_documents(result.documents)
    return result
