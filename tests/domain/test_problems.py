"""Tests for Problem values and their ordering."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from howser.domain.nodes import Span
from howser.domain.problems import MISMATCH, Location, Problem, Severity, sort_problems


def _at(line: int, message: str = "m") -> Problem:
    return Problem(
        severity=Severity.ERROR,
        code=MISMATCH,
        message=message,
        doc=Location(origin="doc.md", line=line),
    )


class TestLocation:
    def test_from_span(self) -> None:
        loc = Location.from_span("rx.md", Span(start_line=4, end_line=6))
        assert loc.line == 4
        assert loc.end_line == 6
        assert loc.column == 1

    def test_str(self) -> None:
        assert str(Location(origin="doc.md", line=3)) == "doc.md:3:1"
        assert str(Location(line=3)) == "<source>:3:1"


class TestProblem:
    def test_requires_a_location(self) -> None:
        with pytest.raises(ValidationError):
            Problem(severity=Severity.ERROR, code=MISMATCH, message="nowhere")

    def test_location_prefers_document_side(self) -> None:
        problem = Problem(
            severity=Severity.ERROR,
            code=MISMATCH,
            message="m",
            rx=Location(origin="rx.md", line=1),
            doc=Location(origin="doc.md", line=9),
        )
        assert problem.location.origin == "doc.md"

    def test_location_falls_back_to_prescription(self) -> None:
        problem = Problem(
            severity=Severity.WARNING,
            code="directive_misplaced",
            message="m",
            rx=Location(origin="rx.md", line=2),
        )
        assert problem.location.origin == "rx.md"

    def test_json_dump(self) -> None:
        data = _at(5).model_dump(mode="json")
        assert data["severity"] == "error"
        assert data["doc"]["line"] == 5
        assert data["rx"] is None


class TestSortProblems:
    def test_orders_by_document_position(self) -> None:
        problems = [_at(20), _at(5), _at(12)]
        assert [p.doc.line for p in sort_problems(problems)] == [5, 12, 20]

    def test_prescription_only_problems_first(self) -> None:
        rx_only = Problem(
            severity=Severity.WARNING,
            code="directive_misplaced",
            message="m",
            rx=Location(line=30),
        )
        ordered = sort_problems([_at(2), rx_only])
        assert ordered[0] is rx_only

    def test_stable_for_equal_positions(self) -> None:
        first, second = _at(7, "first"), _at(7, "second")
        assert [p.message for p in sort_problems([first, second])] == ["first", "second"]
