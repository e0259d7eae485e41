"""Exception taxonomy for howser.

Fatal conditions unwind as exceptions chained with ``raise ... from``.
Conformance and authoring problems are plain data
(:class:`howser.domain.problems.Problem`); the only exception that carries
problems is :class:`PrescriptionError`, which :func:`check_source` turns
back into a list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from howser.domain.problems import Problem


class HowserError(Exception):
    """Base class for every error raised by howser."""

    code = "HOWSER_ERROR"


class ConstructionError(HowserError):
    """A source could not be turned into a Document."""

    code = "CONSTRUCTION_ERROR"


class EmptyDocument(ConstructionError):
    """The parsed tree has no content nodes."""

    code = "EMPTY_DOCUMENT"


class InvalidSource(ConstructionError):
    """The source is not a parsed tree (missing root, undecodable bytes)."""

    code = "INVALID_SOURCE"


class FatalError(HowserError):
    """The tree is structurally corrupt independent of any directive."""

    code = "FATAL_ERROR"


class LoadError(HowserError):
    """Environment-level failure: missing files, malformed pharmacy entries."""

    code = "LOAD_ERROR"


class PrescriptionError(HowserError):
    """A prescription misuses the directive vocabulary.

    Attributes:
        problem: The first authoring warning, in document order.
        problems: Every authoring warning found.
    """

    code = "PRESCRIPTION_ERROR"

    def __init__(self, problems: list[Problem]) -> None:
        if not problems:
            raise ValueError("PrescriptionError requires at least one problem")
        super().__init__(problems[0].message)
        self.problems = problems
        self.problem = problems[0]


def error_chain(exc: BaseException) -> list[str]:
    """Describe *exc* followed by each of its causes, outermost first."""
    messages: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        messages.append(str(current) or type(current).__name__)
        if current.__cause__ is not None or current.__suppress_context__:
            current = current.__cause__
        else:
            current = current.__context__
    return messages
