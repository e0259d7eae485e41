"""Node tree — the immutable, parsed shape of a Markdown source.

Nodes are produced once by the parser adapter
(:mod:`howser.infrastructure.markdown`) and never mutated afterwards.
Leaf nodes carry ``literal`` text; container nodes carry children.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum


class Category(StrEnum):
    """Top-level placement of a node: block structure or inline text."""

    BLOCK = "block"
    INLINE = "inline"


@dataclass(frozen=True)
class Span:
    """Source range of a node (1-based lines)."""

    start_line: int
    end_line: int
    start_column: int = 1
    end_column: int | None = None

    def at_end(self) -> Span:
        """Zero-width span positioned on the last line of this one."""
        return Span(start_line=self.end_line, end_line=self.end_line)


@dataclass(frozen=True)
class Node:
    """A node in the Markdown tree.

    Attributes:
        kind: Node type (``paragraph``, ``h2``, ``text``, ``comment`` ...).
        category: Block or inline.
        span: Source range.
        literal: Text of a leaf node; ``None`` for containers.
        info: Extra comparable attribute (fence language, link target).
        children: Child nodes in document order.
    """

    kind: str
    category: Category
    span: Span
    literal: str | None = None
    info: str = ""
    children: tuple[Node, ...] = field(default_factory=tuple)

    @property
    def is_leaf(self) -> bool:
        return self.literal is not None

    def depth_first(self) -> Iterator[Node]:
        """Traverse the tree depth-first, yielding self then descendants."""
        yield self
        for child in self.children:
            yield from child.depth_first()

    def describe(self) -> str:
        """Short human description used in problem messages."""
        if self.literal is None:
            return self.kind
        text = self.literal.strip()
        if len(text) > 40:
            text = text[:37] + "..."
        return f"{self.kind} {text!r}" if text else self.kind
