"""Tests for directive placement rules."""

from __future__ import annotations

from howser.domain.authoring import check_placement
from howser.domain.nodes import Category, Node, Span
from howser.domain.problems import DIRECTIVE_MISPLACED, Severity
from howser.infrastructure.markdown import parse_markdown


def _lint(text: str) -> list:
    return check_placement(parse_markdown(text), "rx.md")


class TestCheckPlacement:
    def test_well_formed_prescription(self) -> None:
        rx = (
            "# [[Project name]]\n"
            "\n"
            "<!-- rx:optional -->\n"
            "## Installation\n"
            "\n"
            "<!-- rx:repeat -->\n"
            "[[Paragraph]]\n"
            "\n"
            "<!-- rx:any -->\n"
        )
        assert _lint(rx) == []

    def test_no_directives(self) -> None:
        assert _lint("# Title\n\nSome text.\n") == []

    def test_placeholder_may_end_a_sequence(self) -> None:
        assert _lint("# Title\n\n<!-- rx:any -->\n") == []

    def test_trailing_modifier(self) -> None:
        problems = _lint("# Title\n\n<!-- rx:repeat -->\n")
        assert len(problems) == 1
        problem = problems[0]
        assert problem.severity is Severity.WARNING
        assert problem.code == DIRECTIVE_MISPLACED
        assert "rx:repeat" in problem.message
        assert problem.rx is not None
        assert problem.rx.origin == "rx.md"
        assert problem.rx.line == 3
        assert problem.doc is None

    def test_modifier_followed_by_modifier(self) -> None:
        problems = _lint("<!-- rx:optional -->\n<!-- rx:repeat -->\nText.\n")
        assert len(problems) == 1
        assert problems[0].rx.line == 1
        assert "rx:optional" in problems[0].message
        assert "rx:repeat" in problems[0].message

    def test_modifier_tagging_empty_container(self) -> None:
        marker = Node(
            kind="comment", category=Category.BLOCK, span=Span(1, 1), literal=" rx:optional "
        )
        quote = Node(kind="blockquote", category=Category.BLOCK, span=Span(2, 2))
        root = Node(
            kind="document", category=Category.BLOCK, span=Span(1, 2), children=(marker, quote)
        )
        problems = check_placement(root)
        assert len(problems) == 1
        assert "empty blockquote" in problems[0].message

    def test_nested_trailing_modifier(self) -> None:
        problems = _lint("> Quote.\n>\n> <!-- rx:optional -->\n")
        assert len(problems) == 1
        assert problems[0].rx.line == 3

    def test_problems_in_line_order(self) -> None:
        rx = (
            "> Quote.\n"
            ">\n"
            "> <!-- rx:ignore -->\n"
            "\n"
            "Middle.\n"
            "\n"
            "<!-- rx:repeat -->\n"
        )
        problems = _lint(rx)
        assert [p.rx.line for p in problems] == [3, 7]

    def test_lookalike_comment_is_not_checked(self) -> None:
        assert _lint("# Title\n\n<!-- rx:repeats -->\n") == []

    def test_directive_sharing_a_line_with_content(self) -> None:
        problems = _lint("# Features\n\n- <!-- rx:repeat --> [[Feature]]\n")
        assert len(problems) == 1
        assert problems[0].code == DIRECTIVE_MISPLACED
        assert "rx:repeat" in problems[0].message
        assert "line of its own" in problems[0].message
        assert problems[0].rx.line == 3

    def test_raw_html_without_directive_is_not_checked(self) -> None:
        assert _lint("<!-- note --> <b>bold</b>\n") == []
        assert _lint("<!-- rx:repeats --> x\n") == []
        assert _lint("<div>hi</div>\n") == []
