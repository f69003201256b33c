# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for CLR type names.

Understands the notation reflection tools print for type references::

    System.Int32
    System.Nullable`1<System.Int32>
    System.Collections.Generic.Dictionary`2<System.String,Acme.Widget>
    Acme.Outer/Inner[]
"""

from __future__ import annotations

from webapits.metadata.descriptors import TypeRef

# ###############
# Public Interface
# ###############


class TypeNameError(ValueError):
    """Raised when a CLR type name cannot be parsed.

    Attributes:
        column: 1-based column at which parsing failed.
    """

    def __init__(self, message: str, text: str, column: int) -> None:
        super().__init__(f"Invalid type name '{text}' at column {column}: {message}")
        self.column = column


def parse_type_name(text: str) -> TypeRef:
    """Parse a CLR type name into a TypeRef.

    Args:
        text: The type name, e.g. ``System.Collections.Generic.List`1<System.Int32>``.

    Returns:
        The parsed reference. Value-type flags are left unset; the type
        descriptor store decides value-typeness.

    Raises:
        TypeNameError: If *text* is not a well-formed type name.
    """
    return _TypeNameParser(text).parse()


# ################
# Implementation
# ################

_NAME_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_.`/+$")


class _TypeNameParser:
    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def parse(self) -> TypeRef:
        ref = self._parse_type()
        self._skip_whitespace()
        if self._pos != len(self._text):
            self._fail(f"unexpected character '{self._text[self._pos]}'")
        return ref

    def _parse_type(self) -> TypeRef:
        self._skip_whitespace()
        name = self._parse_name()
        arguments: list[TypeRef] = []
        if self._peek() == "<":
            self._pos += 1
            arguments.append(self._parse_type())
            self._skip_whitespace()
            while self._peek() == ",":
                self._pos += 1
                arguments.append(self._parse_type())
                self._skip_whitespace()
            self._expect(">")
        ref = TypeRef(name=name, arguments=tuple(arguments))
        while self._text.startswith("[]", self._pos):
            self._pos += 2
            ref = TypeRef(name=f"{ref.full_name}[]", element_type=ref)
        return ref

    def _parse_name(self) -> str:
        start = self._pos
        while self._pos < len(self._text) and self._text[self._pos] in _NAME_CHARS:
            self._pos += 1
        name = self._text[start : self._pos]
        if not name:
            self._fail("expected a type name")
        if name.startswith(".") or name.endswith("."):
            self._fail(f"malformed name '{name}'")
        return name

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            self._fail(f"expected '{char}'")
        self._pos += 1

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._text) and self._text[self._pos].isspace():
            self._pos += 1

    def _fail(self, message: str) -> None:
        raise TypeNameError(message, self._text, self._pos + 1)
