# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Action model: controllers, actions, and the route parts feeding their parameters.

The builder walks every controller type, reads its route prefix, and turns
each eligible action method into one entry per applicable HTTP verb. Method
parameters are partitioned into route, query-string, and body parts and
bound in two phases: placeholders and parameters are collected first, then
immutable :class:`RoutePart` objects are created with their resolved types.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from webapits.compiler.errors import MissingVerbError, UnboundRoutePartError, UnsupportedTypeError
from webapits.compiler.registries import EnumRegistry, InterfaceRegistry, apply_registrations
from webapits.compiler.resolver import ResolvedType, TypeResolver
from webapits.compiler.routes import RouteSegment, join_route, parse_route_template, render_route_template
from webapits.metadata.descriptors import (
    MethodDescriptor,
    ParameterDescriptor,
    TypeDescriptor,
    find_tag,
    has_tag,
    tag_key,
)
from webapits.metadata.store import CONTROLLER_SUFFIX

# ###############
# Public Interface
# ###############

ROUTE_PREFIX_TAG = "System.Web.Http.RoutePrefixAttribute"
ROUTE_TAG = "System.Web.Http.RouteAttribute"
ACCEPT_VERBS_TAG = "System.Web.Http.AcceptVerbsAttribute"
NON_ACTION_TAG = "System.Web.Http.NonActionAttribute"
FROM_URI_TAG = "System.Web.Http.FromUriAttribute"
FROM_BODY_TAG = "System.Web.Http.FromBodyAttribute"


class HttpVerb(Enum):
    """HTTP verbs an action can answer to."""

    GET = ("GET", "Get")
    POST = ("POST", "Post")
    PUT = ("PUT", "Put")
    PATCH = ("PATCH", "Patch")
    DELETE = ("DELETE", "Delete")

    def __init__(self, method: str, display_name: str) -> None:
        self.method = method
        self.display_name = display_name

    @property
    def tag(self) -> str:
        """Attribute name selecting this verb, e.g. ``HttpGetAttribute``."""
        return f"Http{self.display_name}Attribute"

    @property
    def carries_body(self) -> bool:
        """True for verbs whose body parameters are sent as the request payload."""
        return self in (HttpVerb.POST, HttpVerb.PUT)


class RouteLocation(Enum):
    """Where a parameter's value travels in a request."""

    CONTROLLER = "controller"
    ACTION = "action"
    QUERY = "query"
    BODY = "body"


@dataclass(frozen=True)
class RoutePart:
    """One parameter occurrence in an action's addressing.

    Attributes:
        name: The parameter name.
        location: Route segment (controller or action), query string, or body.
        parameter: The method parameter feeding this part.
        resolved: The TypeScript type of the parameter.
        optional: True when the parameter may be omitted by callers.
        constraints: Route constraints of the bound placeholder, if any.
    """

    name: str
    location: RouteLocation
    parameter: ParameterDescriptor
    resolved: ResolvedType
    optional: bool = False
    constraints: tuple[str, ...] = ()

    @property
    def is_route(self) -> bool:
        return self.location in (RouteLocation.CONTROLLER, RouteLocation.ACTION)


@dataclass(frozen=True)
class ActionEntry:
    """One (action, verb) pair, emitted as one endpoint class.

    Attributes:
        name: Unique name within the controller.
        verb: The HTTP verb.
        address: Absolute address with placeholders rewritten as ``${this.<name>}``.
        parts: All bound parts in method parameter order.
        unbound: Placeholders of the route templates with no matching parameter.
    """

    controller_name: str
    action_name: str
    name: str
    verb: HttpVerb
    address: str
    parts: tuple[RoutePart, ...]
    unbound: tuple[str, ...] = ()

    @property
    def route_parts(self) -> tuple[RoutePart, ...]:
        return tuple(p for p in self.parts if p.is_route)

    @property
    def query_parts(self) -> tuple[RoutePart, ...]:
        return tuple(p for p in self.parts if p.location is RouteLocation.QUERY)

    @property
    def body_parts(self) -> tuple[RoutePart, ...]:
        return tuple(p for p in self.parts if p.location is RouteLocation.BODY)

    @property
    def constructor_parts(self) -> tuple[RoutePart, ...]:
        """Route and query parts, required before optional, otherwise in parameter order."""
        candidates = [p for p in self.parts if p.location is not RouteLocation.BODY]
        return tuple(sorted(candidates, key=lambda p: p.optional))

    def ensure_bound(self) -> None:
        """Raise UnboundRoutePartError if a route placeholder has no parameter."""
        if self.unbound:
            raise UnboundRoutePartError(self.controller_name, self.action_name, self.unbound[0])


@dataclass(frozen=True)
class Action:
    name: str
    method: MethodDescriptor
    verbs: tuple[HttpVerb, ...]
    route_template: str
    entries: tuple[ActionEntry, ...]


@dataclass
class Controller:
    """A controller with its base endpoint and actions.

    Attributes:
        name: Type name without the ``Controller`` suffix.
        full_name: CLR full name of the controller type.
        base_endpoint: Route prefix as an absolute path template.
        segments: Placeholders of the route prefix.
        actions: Actions in method declaration order.
    """

    name: str
    full_name: str
    base_endpoint: str
    segments: tuple[RouteSegment, ...] = ()
    actions: list[Action] = field(default_factory=list)

    @property
    def entries(self) -> list[ActionEntry]:
        return [entry for action in self.actions for entry in action.entries]


class ModelBuilder:
    """Builds the action model, registering mirrored types as parameters resolve."""

    def __init__(self, resolver: TypeResolver, enums: EnumRegistry, interfaces: InterfaceRegistry) -> None:
        self._resolver = resolver
        self._enums = enums
        self._interfaces = interfaces

    def build(self, controllers: Iterable[TypeDescriptor]) -> list[Controller]:
        """Build the model for each controller type, in order."""
        return [self.build_controller(descriptor) for descriptor in controllers]

    def build_controller(self, descriptor: TypeDescriptor) -> Controller:
        """Build the model for one controller type.

        Raises:
            MissingVerbError: If an action has no applicable HTTP verb.
            UnsupportedTypeError: If a parameter type cannot be resolved.
        """
        name = descriptor.name.removesuffix(CONTROLLER_SUFFIX)
        prefix_tag = find_tag(descriptor, ROUTE_PREFIX_TAG)
        if prefix_tag is not None and prefix_tag.arguments:
            prefix = str(prefix_tag.arguments[0])
        else:
            prefix = f"api/{name}"

        controller = Controller(
            name=name,
            full_name=descriptor.full_name,
            base_endpoint=join_route("", prefix),
            segments=tuple(parse_route_template(prefix)),
        )
        used_names: set[str] = set()
        for method in descriptor.methods:
            if _is_action(method):
                controller.actions.append(self._build_action(controller, method, used_names))
        return controller

    def _build_action(self, controller: Controller, method: MethodDescriptor, used_names: set[str]) -> Action:
        verbs = action_verbs(method)
        if not verbs:
            raise MissingVerbError(controller.name, method.name)

        route_tag = find_tag(method, ROUTE_TAG)
        route = str(route_tag.arguments[0]) if route_tag is not None and route_tag.arguments else ""
        if route.startswith("~/"):
            controller_segments: tuple[RouteSegment, ...] = ()
        else:
            controller_segments = controller.segments
        action_segments = tuple(parse_route_template(route))
        address = render_route_template(join_route(controller.base_endpoint, route))

        entries = []
        for verb in verbs:
            entry_name = method.name if len(verbs) == 1 else f"{method.name}{verb.display_name}"
            entry_name = _unique_name(entry_name, used_names)
            parts = self._bind_parts(method, verb, controller_segments, action_segments)
            bound = {part.name for part in parts}
            unbound = tuple(s.name for s in (*controller_segments, *action_segments) if s.name not in bound)
            entries.append(
                ActionEntry(
                    controller_name=controller.name,
                    action_name=method.name,
                    name=entry_name,
                    verb=verb,
                    address=address,
                    parts=tuple(parts),
                    unbound=unbound,
                )
            )

        return Action(
            name=method.name,
            method=method,
            verbs=tuple(verbs),
            route_template=route,
            entries=tuple(entries),
        )

    def _bind_parts(
        self,
        method: MethodDescriptor,
        verb: HttpVerb,
        controller_segments: Sequence[RouteSegment],
        action_segments: Sequence[RouteSegment],
    ) -> list[RoutePart]:
        # Phase one: decide a location and constraints for each parameter.
        controller_by_name = {s.name: s for s in controller_segments}
        action_by_name = {s.name: s for s in action_segments}
        candidates: list[tuple[ParameterDescriptor, RouteLocation, tuple[str, ...]]] = []
        for parameter in method.parameters:
            if parameter.name in controller_by_name:
                candidates.append(
                    (parameter, RouteLocation.CONTROLLER, controller_by_name[parameter.name].constraints)
                )
            elif parameter.name in action_by_name:
                candidates.append((parameter, RouteLocation.ACTION, action_by_name[parameter.name].constraints))
            else:
                candidates.append((parameter, _default_location(parameter, verb), ()))

        # Phase two: resolve types and create the immutable parts.
        parts = []
        for parameter, location, constraints in candidates:
            resolution = self._resolver.resolve_type(parameter.type, parameter=parameter, constraints=constraints)
            resolved = resolution.resolved
            scalar = resolved.is_primitive or resolved.is_enum
            if location is RouteLocation.QUERY and resolved.is_collection and not scalar:
                # Query strings carry lists of scalars only.
                raise UnsupportedTypeError(
                    parameter.type.full_name,
                    parameter.name,
                    "collections of objects cannot be sent in the query string; send them in the body",
                )
            parts.append(
                RoutePart(
                    name=parameter.name,
                    location=location,
                    parameter=parameter,
                    resolved=apply_registrations(resolution, self._enums, self._interfaces),
                    optional=self._resolver.is_optional(parameter),
                    constraints=constraints,
                )
            )
        return parts


def action_verbs(method: MethodDescriptor) -> list[HttpVerb]:
    """Return the verbs of *method* from its attributes, or from its name prefix.

    Only a verb word at the start of the name counts: ``GetWidget`` is a GET,
    ``ArchivePost`` has no verb.
    """
    verbs: list[HttpVerb] = []
    for attribute in method.attributes:
        key = tag_key(attribute.name)
        for verb in HttpVerb:
            if key == tag_key(verb.tag) and verb not in verbs:
                verbs.append(verb)
        if key == tag_key(ACCEPT_VERBS_TAG):
            for argument in attribute.arguments:
                verb = _verb_by_method(str(argument))
                if verb is not None and verb not in verbs:
                    verbs.append(verb)
    if verbs:
        return verbs

    for verb in HttpVerb:
        if method.name.startswith(verb.display_name):
            return [verb]
    return []


# ################
# Implementation
# ################


def _is_action(method: MethodDescriptor) -> bool:
    return (
        method.is_public
        and not method.is_static
        and not method.is_constructor
        and not method.is_special_name
        and not has_tag(method, NON_ACTION_TAG)
    )


def _default_location(parameter: ParameterDescriptor, verb: HttpVerb) -> RouteLocation:
    if has_tag(parameter, FROM_URI_TAG):
        return RouteLocation.QUERY
    if has_tag(parameter, FROM_BODY_TAG):
        return RouteLocation.BODY
    return RouteLocation.BODY if verb.carries_body else RouteLocation.QUERY


def _verb_by_method(method: str) -> HttpVerb | None:
    for verb in HttpVerb:
        if verb.method == method.upper():
            return verb
    return None


def _unique_name(name: str, used_names: set[str]) -> str:
    """Return *name*, or *name* with the smallest numeric suffix not yet used."""
    candidate = name
    counter = 2
    while candidate in used_names:
        candidate = f"{name}{counter}"
        counter += 1
    used_names.add(candidate)
    return candidate
