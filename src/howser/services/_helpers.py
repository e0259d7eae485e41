"""Shared service-layer helper functions."""

from __future__ import annotations

from typing import Any

from howser.domain.document import Document
from howser.domain.problems import Problem, Severity
from howser.infrastructure.markdown import parse_markdown


def load_document(source: str | bytes, origin: str | None = None) -> Document:
    """Parse *source* and wrap it as a Document."""
    return Document(parse_markdown(source, origin), origin)


def summarize(problems: list[Problem]) -> dict[str, Any]:
    """Result payload for a list of problems.

    Examples:
        >>> summarize([])["count"]
        0
    """
    errors = sum(1 for p in problems if p.severity is Severity.ERROR)
    return {
        "problems": [p.model_dump(mode="json") for p in problems],
        "count": len(problems),
        "error_count": errors,
        "warning_count": len(problems) - errors,
    }
