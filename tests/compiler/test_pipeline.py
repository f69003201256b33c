# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""End-to-end tests for the generation pipeline."""

import json
from pathlib import Path

import pytest

from webapits.compiler.build import generate, run
from webapits.compiler.errors import UnsupportedTypeError
from webapits.config import Config, load_config
from webapits.metadata import MetadataError, TypeDescriptorStore

# ###############
# Test Helpers
# ###############

DATA_DIR = Path(__file__).parent.parent / "data" / "metadata"
API_MODULE = DATA_DIR / "Acme.Api.module.yaml"

DATE_MAPPING = {"webApiTypeName": "System.DateTime", "typeScriptTypeName": "Date"}


def _write_config(tmp_path: Path, **settings: object) -> Config:
    """Write a webapits.json sending all output to tmp_path/out and load it."""
    data = {
        "webApiModuleFileName": str(API_MODULE),
        "endpointsOutputDirectory": "out",
        "serviceOutputDirectory": "out",
        "enumsOutputDirectory": "out",
        "interfacesOutputDirectory": "out",
        "typeMappings": [DATE_MAPPING],
        **settings,
    }
    config_file = tmp_path / "webapits.json"
    config_file.write_text(json.dumps(data), encoding="utf-8")
    return load_config(config_file)


def _write_module(tmp_path: Path, parameter_type: str) -> Path:
    path = tmp_path / "Acme.Broken.module.json"
    module = {
        "name": "Acme.Broken",
        "types": [
            {
                "full-name": "Acme.Broken.ShapesController",
                "base-type": "System.Web.Http.ApiController",
                "methods": [{"name": "GetShape", "parameters": [{"name": "origin", "type": parameter_type}]}],
                "fields": [],
            },
            {"full-name": "Acme.Broken.Point", "kind": "struct"},
        ],
    }
    path.write_text(json.dumps(module), encoding="utf-8")
    return path


def _files(directory: Path) -> list[str]:
    if not directory.exists():
        return []
    return sorted(p.name for p in directory.iterdir())


# ###############
# Full sample run
# ###############


class TestSampleRun:
    def test_writes_all_documents(self, tmp_path: Path) -> None:
        config = _write_config(tmp_path, generateInterfaces=True)
        result = run(config)

        assert _files(tmp_path / "out") == ["Endpoints.ts", "Enums.ts", "Interfaces.ts", "Service.ts"]
        assert [c.name for c in result.controllers] == ["Widgets", "Orders"]
        assert [w.reference for w in result.warnings] == ["System.Web.Http"]

    def test_documents_reference_each_other(self, tmp_path: Path) -> None:
        config = _write_config(tmp_path, generateInterfaces=True)
        run(config)
        endpoints = (tmp_path / "out" / "Endpoints.ts").read_text(encoding="utf-8")
        service = (tmp_path / "out" / "Service.ts").read_text(encoding="utf-8")
        enums = (tmp_path / "out" / "Enums.ts").read_text(encoding="utf-8")
        interfaces = (tmp_path / "out" / "Interfaces.ts").read_text(encoding="utf-8")

        assert (
            "constructor(public colors?: Enums.Color[], public page?: number, public filter?: Interfaces.WidgetFilter)"
            in endpoints
        )
        assert "export enum Color {" in enums
        assert "export interface WidgetFilter {" in interfaces
        assert "export interface Widget extends Entity {" in interfaces
        assert "call(widget: Interfaces.Widget) {" in service
        assert "return `/api/Orders/${this.orderId}`;" in endpoints
        assert "constructor(public since: Date)" in endpoints

    def test_rerun_overwrites(self, tmp_path: Path) -> None:
        config = _write_config(tmp_path)
        run(config)
        first = (tmp_path / "out" / "Endpoints.ts").read_text(encoding="utf-8")
        run(config)
        assert (tmp_path / "out" / "Endpoints.ts").read_text(encoding="utf-8") == first

    def test_interfaces_disabled_by_default(self, tmp_path: Path) -> None:
        run(_write_config(tmp_path))
        assert "Interfaces.ts" not in _files(tmp_path / "out")

    def test_without_reference_scan_classes_are_unknown(self, tmp_path: Path) -> None:
        config = _write_config(tmp_path, scanOtherModules=False, generateEnums=False)
        with pytest.raises(UnsupportedTypeError, match="Acme.Domain"):
            run(config)
        assert _files(tmp_path / "out") == []


# ###############
# Scenarios
# ###############


def test_get_address_with_optional_query(tmp_path: Path) -> None:
    config = _write_config(tmp_path)
    result = generate(config, TypeDescriptorStore.load(config.module_path))
    endpoints = result.documents[0].text
    assert "return `/api/widgets/${this.id}` + this.getQueryString();" in endpoints
    assert "if (this.name != null) {" in endpoints
    assert "return '';" in endpoints


def test_disabled_enums(tmp_path: Path) -> None:
    config = _write_config(tmp_path, generateEnums=False)
    result = run(config)

    search = next(e for e in result.controllers[0].entries if e.name == "Search")
    colors = search.query_parts[0].resolved
    assert (colors.type_name, colors.is_primitive, colors.is_collection) == ("number", True, True)
    assert "Enums.ts" not in _files(tmp_path / "out")
    assert "Enums." not in (tmp_path / "out" / "Endpoints.ts").read_text(encoding="utf-8")


def test_unsupported_value_type_writes_nothing(tmp_path: Path) -> None:
    module = _write_module(tmp_path, "Acme.Broken.Point")
    config = _write_config(tmp_path, webApiModuleFileName=str(module))

    with pytest.raises(UnsupportedTypeError, match="Acme.Broken.Point"):
        run(config)
    assert _files(tmp_path / "out") == []


def test_unmapped_date_writes_nothing(tmp_path: Path) -> None:
    config = _write_config(tmp_path, typeMappings=[])
    with pytest.raises(UnsupportedTypeError, match="System.DateTime"):
        run(config)
    assert _files(tmp_path / "out") == []


def test_missing_module_raises(tmp_path: Path) -> None:
    config = _write_config(tmp_path, webApiModuleFileName="missing.module.json")
    with pytest.raises(MetadataError):
        run(config)
