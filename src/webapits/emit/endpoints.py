# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Emitter for the endpoints document: one interface/class pair per action entry."""

from __future__ import annotations

from collections.abc import Sequence

from webapits.compiler.actions import ActionEntry, Controller, RoutePart
from webapits.compiler.resolver import HAVE_QUERY_PARAMS
from webapits.config.settings import Config
from webapits.emit.block import Block

# ###############
# Public Interface
# ###############

IENDPOINT = "IEndpoint"


class EndpointsEmitter:
    """Writes endpoint descriptor classes.

    Each class stores its route and query parameters, renders its address
    with ``toString()``, and exposes its HTTP verb. The matching interface
    adds the ``call`` signature that the service attaches at runtime.
    """

    def __init__(self, config: Config) -> None:
        self._config = config

    def emit(self, controllers: Sequence[Controller]) -> Block:
        """Build the endpoints namespace block.

        Raises:
            UnboundRoutePartError: If an entry has a placeholder without a parameter.
        """
        keyword = self._config.namespace_keyword
        namespace = Block(f"{keyword} {self._config.endpoints_namespace}")
        (
            namespace.add_block(f"export interface {IENDPOINT}")
            .add_statement("verb: string;")
            .add_statement("toString(): string;")
        )
        namespace.add_block(f"export interface {HAVE_QUERY_PARAMS}").add_statement("getQueryParams(): Object;")

        for controller in controllers:
            controller_block = namespace.add_block(f"export {keyword} {controller.name}")
            for entry in controller.entries:
                entry.ensure_bound()
                self._write_interface(controller_block, entry)
                self._write_class(controller_block, entry)
        return namespace

    def _write_interface(self, controller_block: Block, entry: ActionEntry) -> None:
        interface_block = controller_block.add_block(f"export interface I{entry.name} extends {IENDPOINT}")
        for part in entry.constructor_parts:
            interface_block.add_statement(f"{parameter_string(part)};")
        body = ", ".join(parameter_string(part, with_optional=False) for part in call_parts(entry))
        interface_block.add_statement(f"call({body}): ng.IHttpPromise<any>;")

    def _write_class(self, controller_block: Block, entry: ActionEntry) -> None:
        class_block = controller_block.add_block(f"export class {entry.name} implements {IENDPOINT}")
        class_block.add_statement(f"verb = '{entry.verb.method}';")
        self._write_constructor(class_block, entry)
        self._write_query_string(class_block, entry)
        self._write_to_string(class_block, entry)

    def _write_constructor(self, class_block: Block, entry: ActionEntry) -> None:
        parts = entry.constructor_parts
        if not parts:
            return
        parameters = ", ".join(f"public {parameter_string(part)}" for part in parts)
        constructor_block = class_block.add_block(f"constructor({parameters})")
        for part in parts:
            mapping = part.resolved.mapping
            if mapping is not None and mapping.auto_initialize:
                (
                    constructor_block.add_block(f"if (this.{part.name} == null)")
                    .add_statement(f"this.{part.name} = new {mapping.type_script_type_name}();")
                )

    def _write_query_string(self, class_block: Block, entry: ActionEntry) -> None:
        parts = entry.query_parts
        if not parts:
            return
        query_block = class_block.add_block("private getQueryString = (): string =>")
        query_block.add_statement("var parameters: string[] = [];")

        for part in parts:
            name = part.name
            guard = query_block.add_block(f"if (this.{name} != null)")
            resolved = part.resolved
            if resolved.is_primitive or resolved.is_enum:
                if resolved.is_collection:
                    guard.add_statement(f"parameters.push(`{name}=${{this.{name}.join(',')}}`);")
                else:
                    guard.add_statement(
                        f"parameters.push(`{name}=${{encodeURIComponent(this.{name}.toString())}}`);"
                    )
                continue

            if self._is_mirrored_interface(part):
                guard.add_statement(f"var {name}Params = this.{name};")
            else:
                guard.add_statement(f"var {name}Params = this.{name}.getQueryParams();")
            (
                guard.add_block(f"Object.keys({name}Params).forEach((key) =>", is_function=True, termination=";")
                .add_block(f"if ({name}Params[key] != null)")
                .add_statement(f"parameters.push(`${{key}}=${{encodeURIComponent({name}Params[key].toString())}}`);")
            )

        query_block.add_block("if (parameters.length > 0)").add_statement("return '?' + parameters.join('&');")
        query_block.add_statement("return '';")

    def _is_mirrored_interface(self, part: RoutePart) -> bool:
        """True for plain data interfaces, whose own keys are the query parameters."""
        resolved = part.resolved
        return resolved.mapping is None and resolved.type_name.startswith(f"{self._config.interfaces_namespace}.")

    def _write_to_string(self, class_block: Block, entry: ActionEntry) -> None:
        query_string = " + this.getQueryString()" if entry.query_parts else ""
        class_block.add_block("toString = (): string =>").add_statement(f"return `{entry.address}`{query_string};")


def parameter_string(part: RoutePart, *, with_optional: bool = True) -> str:
    """Render *part* as a TypeScript parameter, e.g. ``name?: string``."""
    marker = "?" if with_optional and part.optional else ""
    return f"{part.name}{marker}: {part.resolved.rendered}"


def call_parts(entry: ActionEntry) -> tuple[RoutePart, ...]:
    """The body parts sent as payload; empty for verbs without a body."""
    return entry.body_parts if entry.verb.carries_body else ()
