"""Tests for the immutable node tree."""

from __future__ import annotations

import dataclasses

import pytest

from howser.domain.nodes import Category, Node, Span


def _text(literal: str, line: int = 1) -> Node:
    return Node(kind="text", category=Category.INLINE, span=Span(line, line), literal=literal)


class TestSpan:
    def test_at_end_is_zero_width_on_last_line(self) -> None:
        span = Span(start_line=3, end_line=7)
        end = span.at_end()
        assert end.start_line == 7
        assert end.end_line == 7

    def test_default_column(self) -> None:
        assert Span(1, 1).start_column == 1


class TestNode:
    def test_leaf_and_container(self) -> None:
        leaf = _text("hello")
        para = Node(kind="paragraph", category=Category.BLOCK, span=Span(1, 1), children=(leaf,))
        assert leaf.is_leaf
        assert not para.is_leaf

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            _text("x").kind = "code_inline"  # type: ignore[misc]

    def test_depth_first_order(self) -> None:
        a, b = _text("a"), _text("b")
        em = Node(kind="em", category=Category.INLINE, span=Span(1, 1), children=(b,))
        para = Node(kind="paragraph", category=Category.BLOCK, span=Span(1, 1), children=(a, em))
        assert [n.kind for n in para.depth_first()] == ["paragraph", "text", "em", "text"]

    def test_describe_leaf(self) -> None:
        assert _text("  Hello  ").describe() == "text 'Hello'"

    def test_describe_truncates_long_text(self) -> None:
        described = _text("x" * 100).describe()
        assert described.endswith("...'")
        assert len(described) < 60

    def test_describe_container(self) -> None:
        node = Node(kind="blockquote", category=Category.BLOCK, span=Span(1, 2))
        assert node.describe() == "blockquote"
