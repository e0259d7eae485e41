"""Problem — the uniform result of authoring checks and conformance checks.

Problems are immutable values.  Every problem is anchored to at least one
concrete location: on the prescription side (``rx``), the document side
(``doc``), or both.  Problems are never deduplicated.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Self

from pydantic import BaseModel, model_validator

if TYPE_CHECKING:
    from howser.domain.nodes import Span


class Severity(StrEnum):
    WARNING = "warning"
    ERROR = "error"


# Problem codes
DIRECTIVE_MISPLACED = "directive_misplaced"
MISMATCH = "mismatch"
CATEGORY_MISMATCH = "category_mismatch"
UNSUBSTITUTED_PLACEHOLDER = "unsubstituted_placeholder"
MISSING_CONTENT = "missing_content"
EXTRA_CONTENT = "extra_content"


class Location(BaseModel):
    """A position inside a named source."""

    model_config = {"frozen": True}

    origin: str | None = None
    line: int
    column: int = 1
    end_line: int | None = None

    @classmethod
    def from_span(cls, origin: str | None, span: Span) -> Location:
        return cls(
            origin=origin,
            line=span.start_line,
            column=span.start_column,
            end_line=span.end_line,
        )

    def __str__(self) -> str:
        return f"{self.origin or '<source>'}:{self.line}:{self.column}"


class Problem(BaseModel):
    """A single located warning or error.

    Attributes:
        severity: ``warning`` (authoring) or ``error`` (conformance).
        code: Machine-readable problem code.
        message: Human-readable description.
        rx: Location in the prescription, if any.
        doc: Location in the document under test, if any.
    """

    model_config = {"frozen": True}

    severity: Severity
    code: str
    message: str
    rx: Location | None = None
    doc: Location | None = None

    @model_validator(mode="after")
    def _require_location(self) -> Self:
        if self.rx is None and self.doc is None:
            raise ValueError("a problem must be anchored to at least one location")
        return self

    @property
    def location(self) -> Location:
        """Primary location: document side when present, else prescription side."""
        return self.doc or self.rx  # type: ignore[return-value]


def sort_problems(problems: list[Problem]) -> list[Problem]:
    """Order problems by document position; unanchored ones come first.

    The sort is stable, so problems at the same position keep the order in
    which matching produced them.
    """

    def key(problem: Problem) -> tuple[int, int, int]:
        if problem.doc is None:
            return (0, 0, 0)
        return (1, problem.doc.line, problem.doc.column)

    return sorted(problems, key=key)
