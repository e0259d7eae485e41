"""CheckService — is a prescription itself well formed?

Follows the linter pattern: authoring warnings are returned as data, a
source that cannot be read or parsed is a fatal error.
"""

from __future__ import annotations

import logging

from howser.domain.errors import HowserError, PrescriptionError
from howser.domain.problems import Problem
from howser.infrastructure.filesystem import read_source
from howser.services._helpers import load_document, summarize
from howser.services.base import BaseService
from howser.services.result import ServiceResult
from howser.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


def check_source(source: str | bytes, origin: str | None = None) -> list[Problem]:
    """Authoring problems of a prescription source.

    An empty list means the prescription is ready to use.  Otherwise the
    list holds the first authoring warning.

    Raises:
        ConstructionError: The source is empty or not parseable.
        FatalError: The parsed tree is structurally corrupt.
    """
    document = load_document(source, origin)
    try:
        document.into_prescription()
    except PrescriptionError as exc:
        return [exc.problem]
    return []


class CheckService(BaseService):
    """Checks prescription files."""

    @traced
    def check(self, path: str) -> ServiceResult:
        """Report authoring warnings for the prescription at *path*."""
        try:
            with trace_span("read"):
                source = read_source(path)
            with trace_span("check"):
                problems = check_source(source, path)
        except HowserError as exc:
            return self._failure("check", exc)

        logger.debug("Checked %s: %d problems", path, len(problems))
        return ServiceResult(
            ok=True,
            op="check",
            data={"prescription": path, "well_formed": not problems, **summarize(problems)},
        )
