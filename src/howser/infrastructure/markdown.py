"""Markdown parser adapter — markdown-it-py syntax tree to :class:`Node`.

markdown-it-py does the parsing (CommonMark plus tables and
strikethrough, raw HTML enabled so comments survive).  This module only
reshapes its ``SyntaxTreeNode`` into the immutable node tree the domain
layer consumes:

- ``inline`` wrappers of paragraphs and headings are flattened;
- adjacent text leaves are merged;
- HTML consisting of a single ``<!-- ... -->`` becomes a ``comment`` node.

markdown-it reports line ranges for block tokens only, so inline nodes
inherit the range of the block that contains them.
"""

from __future__ import annotations

import re
from functools import lru_cache

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from howser.domain.errors import InvalidSource
from howser.domain.nodes import Category, Node, Span

COMMENT_PATTERN = re.compile(r"<!--((?:(?!-->).)*)-->", re.DOTALL)

# Token types whose content is the node's literal text.
_LEAF_TYPES = frozenset(
    {
        "text",
        "code_inline",
        "fence",
        "code_block",
        "html_block",
        "html_inline",
        "softbreak",
        "hardbreak",
        "hr",
    }
)

# Attribute compared verbatim alongside kind and literal.
_INFO_ATTRS = {
    "link": "href",
    "image": "src",
    "ordered_list": "start",
    "th": "style",
    "td": "style",
}


@lru_cache(maxsize=1)
def _parser() -> MarkdownIt:
    return MarkdownIt("commonmark").enable(["table", "strikethrough"])


def parse_markdown(source: str | bytes, origin: str | None = None) -> Node:
    """Parse Markdown *source* into a ``document`` node tree.

    Raises:
        InvalidSource: *source* is bytes that are not valid UTF-8.
    """
    if isinstance(source, bytes):
        try:
            source = source.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise InvalidSource(f"{origin or '<source>'} is not valid UTF-8 text") from exc

    tree = SyntaxTreeNode(_parser().parse(source))
    children = tuple(_convert_blocks(tree.children))
    line_count = max(1, source.count("\n") + (0 if source.endswith("\n") else 1))
    end_line = max([line_count, *(child.span.end_line for child in children)])
    return Node(
        kind="document",
        category=Category.BLOCK,
        span=Span(start_line=1, end_line=end_line),
        children=children,
    )


def _block_span(node: SyntaxTreeNode, fallback: Span | None = None) -> Span:
    if node.map:
        start, end = node.map
        return Span(start_line=start + 1, end_line=max(start + 1, end))
    return fallback or Span(start_line=1, end_line=1)


def _convert_blocks(nodes: list[SyntaxTreeNode], parent: Span | None = None) -> list[Node]:
    converted: list[Node] = []
    for node in nodes:
        span = _block_span(node, parent)
        if node.type == "inline":
            converted.extend(_convert_inline(node.children, span))
            continue
        converted.append(_convert(node, Category.BLOCK, span))
    return converted


def _convert_inline(nodes: list[SyntaxTreeNode], span: Span) -> list[Node]:
    converted: list[Node] = []
    for node in nodes:
        child = _convert(node, Category.INLINE, span)
        previous = converted[-1] if converted else None
        if (
            previous is not None
            and previous.kind == "text"
            and child.kind == "text"
            and not child.children
        ):
            converted[-1] = Node(
                kind="text",
                category=Category.INLINE,
                span=previous.span,
                literal=(previous.literal or "") + (child.literal or ""),
            )
            continue
        converted.append(child)
    return converted


def _convert(node: SyntaxTreeNode, category: Category, span: Span) -> Node:
    kind = node.type
    if kind == "heading":
        kind = node.tag

    if kind in _LEAF_TYPES:
        literal = node.content
        if kind in ("html_block", "html_inline"):
            comment = COMMENT_PATTERN.fullmatch(literal.strip())
            if comment is not None:
                kind = "comment"
                literal = comment.group(1)
        info = node.info.strip() if kind == "fence" else ""
        return Node(kind=kind, category=category, span=span, literal=literal, info=info)

    attr = _INFO_ATTRS.get(kind)
    info = str(node.attrs.get(attr, "")) if attr else ""
    if category is Category.INLINE:
        children = tuple(_convert_inline(node.children, span))
    else:
        children = tuple(_convert_blocks(node.children, span))
    return Node(kind=kind, category=category, span=span, info=info, children=children)
