"""Directive classification — which nodes control matching.

A node is a directive iff it is a ``comment`` whose stripped body is one of
:data:`KEYWORDS`, or a ``text`` leaf whose whole stripped text is a
``[[prompt]]``.  Everything else is verbatim content, including comments
that merely resemble a keyword.

Modifier directives (optional, repeat, ignore) tag the sibling that
immediately follows them.  A modifier that opens a list item tags the item
itself, since Markdown has no room for a comment between two items.
:func:`annotate` pairs each content node with its modifier so the matcher
never re-inspects comment text.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import StrEnum

from howser.domain.nodes import Node


class Directive(StrEnum):
    VERBATIM = "verbatim"
    PLACEHOLDER = "placeholder"
    OPTIONAL = "optional"
    REPEATABLE = "repeatable"
    SUBSTITUTION = "substitution"
    IGNORE = "ignore"


KEYWORDS: dict[str, Directive] = {
    "rx:any": Directive.PLACEHOLDER,
    "rx:optional": Directive.OPTIONAL,
    "rx:repeat": Directive.REPEATABLE,
    "rx:ignore": Directive.IGNORE,
}

MODIFIERS = frozenset({Directive.OPTIONAL, Directive.REPEATABLE, Directive.IGNORE})

PROMPT_PATTERN = re.compile(r"\[\[\s*[^\s\[\]][^\[\]]*\]\]")

LEADING_COMMENT_PATTERN = re.compile(r"\s*<!--((?:(?!-->).)*)-->", re.DOTALL)

_KEYWORD_BY_DIRECTIVE = {directive: keyword for keyword, directive in KEYWORDS.items()}


def classify(node: Node) -> Directive:
    """Return the directive a node represents (``VERBATIM`` for plain content)."""
    if node.kind == "comment" and node.literal is not None:
        return KEYWORDS.get(node.literal.strip(), Directive.VERBATIM)
    if node.kind == "text" and node.literal is not None and is_prompt(node.literal):
        return Directive.SUBSTITUTION
    return Directive.VERBATIM


def is_prompt(text: str) -> bool:
    """True when *text* is exactly one ``[[prompt]]`` token."""
    return PROMPT_PATTERN.fullmatch(text.strip()) is not None


def keyword_for(directive: Directive) -> str:
    """Source keyword of a comment directive (for messages)."""
    return _KEYWORD_BY_DIRECTIVE.get(directive, directive.value)


@dataclass(frozen=True)
class Element:
    """One prescription sibling as seen by the matcher.

    Attributes:
        node: The content node to match against the document.
        directive: How ``node`` itself matches (verbatim, placeholder,
            substitution).
        modifier: The preceding optional/repeat/ignore directive, if any.
        marker: The comment node that carried ``modifier``.
    """

    node: Node
    directive: Directive
    modifier: Directive | None = None
    marker: Node | None = None

    @property
    def required(self) -> bool:
        return self.modifier is None


def annotate(siblings: Sequence[Node]) -> list[Element]:
    """Build the directive-annotated view of a sibling sequence.

    A modifier with nothing to tag is dropped; a modifier followed by
    another modifier is superseded by it.  Both are authoring errors that
    :func:`howser.domain.authoring.check_placement` reports before a
    prescription can exist.
    """
    elements: list[Element] = []
    pending: tuple[Directive, Node] | None = None
    for node in siblings:
        directive = classify(node)
        if directive in MODIFIERS:
            pending = (directive, node)
            continue
        if pending is None:
            pending = _leading_modifier(node)
            if pending is not None:
                node = replace(node, children=node.children[1:])
        if pending is None:
            elements.append(Element(node=node, directive=directive))
        else:
            elements.append(
                Element(node=node, directive=directive, modifier=pending[0], marker=pending[1])
            )
            pending = None
    return elements


def _leading_modifier(node: Node) -> tuple[Directive, Node] | None:
    if node.kind != "list_item" or len(node.children) < 2:
        return None
    directive = classify(node.children[0])
    if directive not in MODIFIERS:
        return None
    return directive, node.children[0]


def fused_directive(node: Node) -> Directive | None:
    """Directive of an ``rx:`` comment that opens a raw HTML block.

    A comment only becomes a directive when it stands alone on its line;
    with other content on the same line the parser yields one verbatim
    ``html_block`` for the whole line.
    """
    if node.kind != "html_block" or node.literal is None:
        return None
    match = LEADING_COMMENT_PATTERN.match(node.literal)
    if match is None:
        return None
    return KEYWORDS.get(match.group(1).strip())
