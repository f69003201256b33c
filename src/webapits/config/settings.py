# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run configuration: output locations, namespaces, feature switches, and type mappings."""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = "webapits.json"
YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


class TypeMapping(BaseModel):
    """A user-configured override forcing a TypeScript type for matching parameters.

    A mapping matches a parameter when the parameter's CLR type name starts
    with ``web_api_type_name``, when the parameter carries the attribute
    ``<web_api_type_name>Attribute`` (``treat_as_attribute``), or when the
    route placeholder bound to it has the camel-cased name as a constraint
    (``treat_as_constraint``).
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    web_api_type_name: str = Field(alias="webApiTypeName")
    type_script_type_name: str = Field(alias="typeScriptTypeName")
    treat_as_attribute: bool = Field(default=False, alias="treatAsAttribute")
    treat_as_constraint: bool = Field(default=False, alias="treatAsConstraint")
    auto_initialize: bool = Field(default=False, alias="autoInitialize")


class Config(BaseModel):
    """The configuration of one generation run.

    Directory fields left unset default to the directory of the configuration
    file once loaded through :func:`load_config`.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    web_api_module_file_name: str = Field(alias="webApiModuleFileName")

    endpoints_output_directory: str | None = Field(default=None, alias="endpointsOutputDirectory")
    endpoints_file_name: str = Field(default="Endpoints.ts", alias="endpointsFileName")
    endpoints_namespace: str = Field(default="Endpoints", alias="endpointsNamespace")

    service_output_directory: str | None = Field(default=None, alias="serviceOutputDirectory")
    service_file_name: str = Field(default="Service.ts", alias="serviceFileName")
    service_namespace: str = Field(default="Endpoints", alias="serviceNamespace")

    generate_enums: bool = Field(default=True, alias="generateEnums")
    enums_output_directory: str | None = Field(default=None, alias="enumsOutputDirectory")
    enums_file_name: str = Field(default="Enums.ts", alias="enumsFileName")
    enums_namespace: str = Field(default="Enums", alias="enumsNamespace")

    generate_interfaces: bool = Field(default=False, alias="generateInterfaces")
    interfaces_output_directory: str | None = Field(default=None, alias="interfacesOutputDirectory")
    interfaces_file_name: str = Field(default="Interfaces.ts", alias="interfacesFileName")
    interfaces_namespace: str = Field(default="Interfaces", alias="interfacesNamespace")

    scan_other_modules: bool = Field(default=True, alias="scanOtherModules")
    write_namespace_as_module: bool = Field(default=False, alias="writeNamespaceAsModule")

    type_mappings: list[TypeMapping] = Field(default_factory=list, alias="typeMappings")

    @property
    def namespace_keyword(self) -> str:
        """The TypeScript keyword used for emitted namespaces."""
        return "module" if self.write_namespace_as_module else "namespace"

    @property
    def module_path(self) -> Path:
        return Path(self.web_api_module_file_name)

    @property
    def endpoints_path(self) -> Path:
        return _output_path(self.endpoints_output_directory, self.endpoints_file_name)

    @property
    def service_path(self) -> Path:
        return _output_path(self.service_output_directory, self.service_file_name)

    @property
    def enums_path(self) -> Path:
        return _output_path(self.enums_output_directory, self.enums_file_name)

    @property
    def interfaces_path(self) -> Path:
        return _output_path(self.interfaces_output_directory, self.interfaces_file_name)


def load_config(path: Path) -> Config:
    """Load and validate a configuration file.

    The file is JSON, or YAML when its suffix is ``.yaml`` or ``.yml``.
    Relative paths inside it are resolved against the directory containing
    the file, and unset output directories default to that directory.

    Args:
        path: Path to the configuration file.

    Returns:
        A validated Config with absolute paths.

    Raises:
        ConfigError: If the file cannot be read, cannot be parsed, or does not
            conform to the configuration schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration file: {exc}") from exc

    config = _parse_config(text, source_label=str(path), is_yaml=path.suffix.lower() in YAML_SUFFIXES)
    return _resolve_paths(config, path.parent.resolve())


# ################
# Implementation
# ################


def _parse_config(text: str, source_label: str = "<string>", *, is_yaml: bool = False) -> Config:
    try:
        data = yaml.safe_load(text) if is_yaml else json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid configuration in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: configuration must be a JSON object")

    try:
        return Config.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {source_label}: {exc}") from exc


def _resolve_paths(config: Config, base_directory: Path) -> Config:
    def resolve(value: str | None) -> str:
        if value is None:
            return str(base_directory)
        return str(base_directory / value)

    return config.model_copy(
        update={
            "web_api_module_file_name": resolve(config.web_api_module_file_name),
            "endpoints_output_directory": resolve(config.endpoints_output_directory),
            "service_output_directory": resolve(config.service_output_directory),
            "enums_output_directory": resolve(config.enums_output_directory),
            "interfaces_output_directory": resolve(config.interfaces_output_directory),
        }
    )


def _output_path(directory: str | None, file_name: str) -> Path:
    return Path(directory or ".") / file_name
