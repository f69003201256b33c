# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic core: type resolution, mirrored-type registries, and the action model.

The end-to-end pipeline lives in :mod:`webapits.compiler.build`.
"""

from webapits.compiler.actions import (
    Action,
    ActionEntry,
    Controller,
    HttpVerb,
    ModelBuilder,
    RouteLocation,
    RoutePart,
    action_verbs,
)
from webapits.compiler.errors import GenerationError, MissingVerbError, UnboundRoutePartError, UnsupportedTypeError
from webapits.compiler.registries import EnumRegistry, InterfaceRegistry, apply_registrations
from webapits.compiler.resolver import (
    HAVE_QUERY_PARAMS,
    Registration,
    RegistrationKind,
    Resolution,
    ResolvedType,
    TypeResolver,
)
from webapits.compiler.routes import RouteSegment, join_route, parse_route_template, render_route_template

__all__ = [
    # Errors
    "GenerationError",
    "MissingVerbError",
    "UnboundRoutePartError",
    "UnsupportedTypeError",
    # Resolution
    "HAVE_QUERY_PARAMS",
    "Registration",
    "RegistrationKind",
    "Resolution",
    "ResolvedType",
    "TypeResolver",
    # Registries
    "EnumRegistry",
    "InterfaceRegistry",
    "apply_registrations",
    # Routes
    "RouteSegment",
    "join_route",
    "parse_route_template",
    "render_route_template",
    # Action model
    "Action",
    "ActionEntry",
    "Controller",
    "HttpVerb",
    "ModelBuilder",
    "RouteLocation",
    "RoutePart",
    "action_verbs",
]
