"""Tests for the exception taxonomy."""

from __future__ import annotations

import pytest

from howser.domain.errors import (
    ConstructionError,
    EmptyDocument,
    HowserError,
    InvalidSource,
    LoadError,
    PrescriptionError,
    error_chain,
)
from howser.domain.problems import Location, Problem, Severity


class TestHierarchy:
    def test_construction_errors(self) -> None:
        assert issubclass(EmptyDocument, ConstructionError)
        assert issubclass(InvalidSource, ConstructionError)
        assert issubclass(ConstructionError, HowserError)

    def test_codes_are_distinct(self) -> None:
        codes = {EmptyDocument.code, InvalidSource.code, LoadError.code, PrescriptionError.code}
        assert len(codes) == 4


class TestPrescriptionError:
    def test_carries_first_problem(self) -> None:
        problems = [
            Problem(
                severity=Severity.WARNING,
                code="directive_misplaced",
                message=f"warning {n}",
                rx=Location(line=n),
            )
            for n in (1, 2)
        ]
        exc = PrescriptionError(problems)
        assert exc.problem is problems[0]
        assert str(exc) == "warning 1"

    def test_requires_problems(self) -> None:
        with pytest.raises(ValueError):
            PrescriptionError([])


class TestErrorChain:
    def test_explicit_cause(self) -> None:
        try:
            try:
                raise FileNotFoundError("no such file: a.md")
            except FileNotFoundError as inner:
                raise LoadError("File not found: a.md") from inner
        except LoadError as exc:
            assert error_chain(exc) == ["File not found: a.md", "no such file: a.md"]

    def test_implicit_context(self) -> None:
        try:
            try:
                raise KeyError("Specs")
            except KeyError:
                raise LoadError("no table") from None
        except LoadError as exc:
            assert error_chain(exc) == ["no table"]

    def test_empty_message_uses_type_name(self) -> None:
        assert error_chain(ValueError()) == ["ValueError"]
