# Copyright 2026 webapits Contributors
# SPDX-License-Identifier: Apache-2.0

"""A generic tree of nested, brace-delimited blocks that renders indented source text.

Blocks know nothing about what they hold: namespaces, classes, interfaces,
function bodies and object literals are all built the same way::

    root = Block("namespace Endpoints")
    root.add_block("export interface IEndpoint").add_statement("verb: string;").close()
    print(root.render())
"""

from __future__ import annotations

# ###############
# Public Interface
# ###############

DEFAULT_INDENT = "    "


class Block:
    """A header line followed by a brace-delimited body of statements and nested blocks.

    Attributes:
        header: The line introducing the block; empty for a bare container.
        is_function: Render as the argument of a call: ``header({`` … ``})``.
        termination: Text appended after the closing delimiter, e.g. ``;`` or ``,``.
        parent: The enclosing block, or None for a root.
        children: Statements (``str``, empty for a blank line) and nested blocks in order.
    """

    def __init__(
        self,
        header: str = "",
        *,
        is_function: bool = False,
        termination: str = "",
        parent: Block | None = None,
    ) -> None:
        self.header = header
        self.is_function = is_function
        self.termination = termination
        self.parent = parent
        self.children: list[Block | str] = []

    def add_block(self, header: str, *, is_function: bool = False, termination: str = "") -> Block:
        """Append a nested block and return it."""
        child = Block(header, is_function=is_function, termination=termination, parent=self)
        self.children.append(child)
        return child

    def add_statement(self, line: str) -> Block:
        """Append a statement line and return this block."""
        self.children.append(line)
        return self

    def add_blank_line(self) -> Block:
        self.children.append("")
        return self

    def close(self) -> Block:
        """Return the enclosing block.

        Raises:
            ValueError: If this block is a root.
        """
        if self.parent is None:
            raise ValueError(f"Block '{self.header}' has no parent to return to")
        return self.parent

    def render(self, indent: str = DEFAULT_INDENT) -> str:
        """Render the block and its descendants as text ending in a newline."""
        lines: list[str] = []
        if self.header:
            self._render_block(lines, 0, indent)
        else:
            self._render_children(lines, 0, indent)
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()

    # ################
    # Implementation
    # ################

    def _render_block(self, lines: list[str], depth: int, indent: str) -> None:
        prefix = indent * depth
        if self.is_function and self.header.endswith("("):
            lines.append(f"{prefix}{self.header}{{")
        else:
            lines.append(f"{prefix}{self.header} {{")
        self._render_children(lines, depth + 1, indent)
        closer = "})" if self.is_function else "}"
        lines.append(f"{prefix}{closer}{self.termination}")

    def _render_children(self, lines: list[str], depth: int, indent: str) -> None:
        previous: Block | str | None = None
        for child in self.children:
            if isinstance(child, Block):
                # Separate a nested block from whatever precedes it.
                if previous is not None and previous != "":
                    lines.append("")
                child._render_block(lines, depth, indent)
            elif child:
                lines.append(f"{indent * depth}{child}")
            else:
                lines.append("")
            previous = child
