# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Emitter for the Angular service that turns endpoint objects into HTTP calls."""

from __future__ import annotations

from collections.abc import Sequence

from webapits.compiler.actions import ActionEntry, Controller, RoutePart
from webapits.config.settings import Config
from webapits.emit.block import Block
from webapits.emit.endpoints import IENDPOINT, call_parts, parameter_string

# ###############
# Public Interface
# ###############

SERVICE_CLASS = "AngularEndpointsService"


class ServiceEmitter:
    """Writes ``AngularEndpointsService``.

    The service holds a static ``call`` dispatcher around ``$http`` and one
    object per controller. Each member of that object constructs an endpoint
    and attaches a ``call`` hook that forwards the body values.
    """

    def __init__(self, config: Config) -> None:
        self._config = config

    def emit(self, controllers: Sequence[Controller]) -> Block:
        keyword = self._config.namespace_keyword
        endpoints_namespace = self._config.endpoints_namespace
        namespace = Block(f"{keyword} {self._config.service_namespace}")

        service_block = (
            namespace.add_block(f"export class {SERVICE_CLASS}")
            .add_statement("static $inject = ['$http'];")
            .add_statement("static $http: ng.IHttpService;")
        )
        service_block.add_block("constructor($http: ng.IHttpService)").add_statement(f"{SERVICE_CLASS}.$http = $http;")
        (
            service_block.add_block(f"static call(endpoint: {endpoints_namespace}.{IENDPOINT}, data)")
            .add_block(f"return {SERVICE_CLASS}.$http(", is_function=True, termination=";")
            .add_statement("method: endpoint.verb,")
            .add_statement("url: endpoint.toString(),")
            .add_statement("data: data")
        )

        for controller in controllers:
            self._write_controller(service_block, controller)
        return namespace

    def _write_controller(self, service_block: Block, controller: Controller) -> None:
        controller_block = service_block.add_block(f"public {controller.name} =", termination=";")
        entries = controller.entries
        for index, entry in enumerate(entries):
            self._write_entry(controller_block, controller, entry, is_last=index == len(entries) - 1)

    def _write_entry(
        self, controller_block: Block, controller: Controller, entry: ActionEntry, *, is_last: bool
    ) -> None:
        qualified = f"{self._config.endpoints_namespace}.{controller.name}"
        parts = entry.constructor_parts
        parameters = ", ".join(parameter_string(part) for part in parts)
        names = ", ".join(part.name for part in parts)
        arguments = ", ".join(parameter_string(part, with_optional=False) for part in call_parts(entry))

        entry_block = controller_block.add_block(
            f"{entry.name}: ({parameters}): {qualified}.I{entry.name} =>",
            termination="" if is_last else ",",
        )
        entry_block.add_statement(f"var endpoint = new {qualified}.{entry.name}({names});")
        (
            entry_block.add_block("var callHook =", termination=";")
            .add_block(f"call({arguments})")
            .add_statement(f"return {SERVICE_CLASS}.call(this, {call_values(entry)});")
        )
        entry_block.add_statement("return _.extend(endpoint, callHook);")


def call_values(entry: ActionEntry) -> str:
    """Render the payload arguments of *entry*.

    String values are sent wrapped in double quotes so that the server reads
    them as JSON strings; other values pass through unchanged.
    """
    values = [_call_value(part) for part in call_parts(entry)]
    return ", ".join(values) if values else "null"


def _call_value(part: RoutePart) -> str:
    value = f'`"${{{part.name}}}"`' if part.resolved.is_string else part.name
    return f"{part.name} != null ? {value} : null"
