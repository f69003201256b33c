# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the Angular service emitter."""

from pathlib import Path

from webapits.compiler.actions import Controller, ModelBuilder
from webapits.compiler.registries import EnumRegistry, InterfaceRegistry
from webapits.compiler.resolver import TypeResolver
from webapits.config import Config
from webapits.emit.service import ServiceEmitter, call_values
from webapits.metadata import FileMetadataProvider, TypeDescriptor, TypeDescriptorStore

# ###############
# Test Helpers
# ###############

DATA_DIR = Path(__file__).parent.parent / "data" / "metadata"

_PROVIDER = FileMetadataProvider()
_DOMAIN_TYPES = _PROVIDER.get_types(_PROVIDER.load_module(DATA_DIR / "Acme.Domain.module.yaml"))


def _build(*methods: dict, **overrides: object) -> tuple[Config, list[Controller]]:
    config = Config.model_validate({"web_api_module_file_name": "m.json", **overrides})
    descriptor = TypeDescriptor.model_validate(
        {
            "full-name": "Acme.Api.WidgetsController",
            "base-type": "System.Web.Http.ApiController",
            "attributes": [{"name": "RoutePrefix", "arguments": ["api/widgets"]}],
            "methods": list(methods),
        }
    )
    store = TypeDescriptorStore([descriptor], _DOMAIN_TYPES)
    resolver = TypeResolver(store, config)
    enums = EnumRegistry()
    return config, ModelBuilder(resolver, enums, InterfaceRegistry(resolver, enums)).build(store.controllers())


def _emit(*methods: dict, **overrides: object) -> str:
    config, controllers = _build(*methods, **overrides)
    return ServiceEmitter(config).emit(controllers).render()


GET_BY_ID = {
    "name": "Get",
    "attributes": ["HttpGet", {"name": "Route", "arguments": ["{id:int}"]}],
    "parameters": [{"name": "id", "type": "System.Int32"}, {"name": "name", "type": "System.String"}],
}

SAVE = {
    "name": "Save",
    "attributes": ["HttpPost"],
    "parameters": [
        {"name": "title", "type": "System.String"},
        {"name": "count", "type": "System.Int32"},
    ],
}


# ###############
# Document layout
# ###############


def test_service_document() -> None:
    assert _emit(GET_BY_ID) == (
        "namespace Endpoints {\n"
        "    export class AngularEndpointsService {\n"
        "        static $inject = ['$http'];\n"
        "        static $http: ng.IHttpService;\n"
        "\n"
        "        constructor($http: ng.IHttpService) {\n"
        "            AngularEndpointsService.$http = $http;\n"
        "        }\n"
        "\n"
        "        static call(endpoint: Endpoints.IEndpoint, data) {\n"
        "            return AngularEndpointsService.$http({\n"
        "                method: endpoint.verb,\n"
        "                url: endpoint.toString(),\n"
        "                data: data\n"
        "            });\n"
        "        }\n"
        "\n"
        "        public Widgets = {\n"
        "            Get: (id: number, name?: string): Endpoints.Widgets.IGet => {\n"
        "                var endpoint = new Endpoints.Widgets.Get(id, name);\n"
        "\n"
        "                var callHook = {\n"
        "                    call() {\n"
        "                        return AngularEndpointsService.call(this, null);\n"
        "                    }\n"
        "                };\n"
        "                return _.extend(endpoint, callHook);\n"
        "            }\n"
        "        };\n"
        "    }\n"
        "}\n"
    )


def test_members_are_comma_separated() -> None:
    text = _emit(GET_BY_ID, {"name": "GetAll"})
    assert "            },\n\n            GetAll: (): Endpoints.Widgets.IGetAll => {\n" in text
    assert "                return _.extend(endpoint, callHook);\n            }\n        };\n" in text


def test_separate_service_namespace() -> None:
    text = _emit(GET_BY_ID, service_namespace="Services", endpoints_namespace="Api")
    assert text.startswith("namespace Services {\n")
    assert "static call(endpoint: Api.IEndpoint, data)" in text
    assert "var endpoint = new Api.Widgets.Get(id, name);" in text


# ###############
# Call hooks
# ###############


def test_post_forwards_body_values() -> None:
    text = _emit(SAVE)
    assert "Save: (): Endpoints.Widgets.ISave =>" in text
    assert "call(title: string, count: number) {" in text
    assert (
        'return AngularEndpointsService.call(this, title != null ? `"${title}"` : null, count != null ? count : null);'
        in text
    )


def test_call_values() -> None:
    _, controllers = _build(SAVE, GET_BY_ID)
    save, get = controllers[0].entries
    assert call_values(save) == 'title != null ? `"${title}"` : null, count != null ? count : null'
    assert call_values(get) == "null"


def test_string_collection_is_not_quoted() -> None:
    _, controllers = _build(
        {
            "name": "Tag",
            "attributes": ["HttpPut"],
            "parameters": [{"name": "tags", "type": "System.String[]"}],
        }
    )
    assert call_values(controllers[0].entries[0]) == "tags != null ? tags : null"
