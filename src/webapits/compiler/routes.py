# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Route template parsing.

Web API route templates such as ``api/widgets/{id:int}/parts/{name?}`` carry
placeholders with optional constraints, defaults, and an optional marker.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class RouteSegment:
    """One ``{...}`` placeholder of a route template.

    Attributes:
        name: Parameter name the placeholder binds to.
        constraints: Inline constraints in declaration order, e.g. ``("int", "min(1)")``.
        optional: True for ``{name?}`` and for placeholders with a default value.
    """

    name: str
    constraints: tuple[str, ...] = ()
    optional: bool = False


def parse_route_template(template: str) -> list[RouteSegment]:
    """Return the placeholders of *template* in order of appearance."""
    return [_parse_placeholder(body) for _, _, body in _placeholders(template)]


def render_route_template(template: str) -> str:
    """Rewrite placeholders as TypeScript template-literal interpolations.

    ``api/widgets/{id:int}`` becomes ``api/widgets/${this.id}``.
    """
    pieces = []
    position = 0
    for start, end, body in _placeholders(template):
        pieces.append(template[position:start])
        pieces.append(f"${{this.{_parse_placeholder(body).name}}}")
        position = end
    pieces.append(template[position:])
    return "".join(pieces)


def join_route(base: str, route: str) -> str:
    """Join a controller prefix and an action route into an absolute path.

    A route starting with ``~/`` replaces the prefix.
    """
    if route.startswith("~/"):
        return "/" + route[2:].strip("/")
    parts = [p.strip("/") for p in (base, route) if p.strip("/")]
    return "/" + "/".join(parts)


def to_camel_case(name: str) -> str:
    """Lower-case the first character of *name*."""
    return name[:1].lower() + name[1:]


# ################
# Implementation
# ################

def _placeholders(template: str) -> Iterator[tuple[int, int, str]]:
    """Yield ``(start, end, body)`` for each outermost ``{...}`` in *template*.

    Braces nested inside a placeholder, as in ``{code:regex(^[A-Z]{3}$)}``,
    belong to its body. An unclosed brace is left as literal text.
    """
    depth = 0
    start = 0
    for index, char in enumerate(template):
        if char == "{":
            if depth == 0:
                start = index
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                yield start, index + 1, template[start + 1 : index]


def _split_top_level(text: str, separator: str) -> list[str]:
    """Split *text* on *separator* where it is not inside parentheses or braces."""
    pieces = []
    depth = 0
    start = 0
    for index, char in enumerate(text):
        if char in "({":
            depth += 1
        elif char in ")}" and depth > 0:
            depth -= 1
        elif char == separator and depth == 0:
            pieces.append(text[start:index])
            start = index + 1
    pieces.append(text[start:])
    return pieces


def _parse_placeholder(body: str) -> RouteSegment:
    optional = False
    body = body.strip().lstrip("*")
    body, *default = _split_top_level(body, "=")
    if default:
        optional = True
    if body.endswith("?"):
        body = body[:-1]
        optional = True
    name, *constraints = _split_top_level(body, ":")
    return RouteSegment(name=name.strip(), constraints=tuple(c.strip() for c in constraints), optional=optional)
