# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Fatal errors raised while building the action model or emitting code."""

from __future__ import annotations

# ###############
# Public Interface
# ###############


class GenerationError(Exception):
    """Base class for errors that abort a generation run before anything is written."""


class UnsupportedTypeError(GenerationError):
    """Raised when no resolution rule produces a TypeScript type for a CLR type, or the
    type cannot travel where its parameter is bound.

    Attributes:
        type_name: CLR full name of the offending type.
        parameter_name: Name of the parameter or field using it, if known.
    """

    def __init__(self, type_name: str, parameter_name: str | None = None, reason: str | None = None) -> None:
        where = f" of parameter '{parameter_name}'" if parameter_name else ""
        reason = reason or (
            "it is not matched by a type mapping and is not an enum, a primitive, or a class "
            "(generic types other than Nullable<T> and single-argument collections are not supported)"
        )
        super().__init__(f"Unsupported type '{type_name}'{where}: {reason}")
        self.type_name = type_name
        self.parameter_name = parameter_name


class UnboundRoutePartError(GenerationError):
    """Raised when a route template placeholder has no matching method parameter."""

    def __init__(self, controller: str, action: str, placeholder: str) -> None:
        super().__init__(
            f"Route placeholder '{{{placeholder}}}' of action '{controller}.{action}' "
            "does not match any method parameter"
        )
        self.controller = controller
        self.action = action
        self.placeholder = placeholder


class MissingVerbError(GenerationError):
    """Raised when an action method declares no HTTP verb and its name implies none."""

    def __init__(self, controller: str, action: str) -> None:
        super().__init__(
            f"Action '{controller}.{action}' has no HTTP verb: add an Http<Verb> attribute "
            "or start the method name with Get, Post, Put, Patch, or Delete"
        )
        self.controller = controller
        self.action = action
