"""ValidateService — documents against prescriptions, singly or in batches.

A pharmacy run processes its pairs strictly in file order.  With
``fail_early`` the run stops at the first pair that yields an error and
reports only that pair; pairs never attempted are not mentioned.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from howser.domain.errors import HowserError
from howser.domain.matcher import MatchPolicy, Validator
from howser.domain.problems import Problem, Severity
from howser.infrastructure.filesystem import load_pharmacy, read_source
from howser.services._helpers import load_document, summarize
from howser.services.base import BaseService
from howser.services.result import ServiceResult
from howser.services.telemetry import get_current_span, trace_span, traced

logger = logging.getLogger(__name__)


def validate_sources(
    rx_source: str | bytes,
    doc_source: str | bytes,
    *,
    rx_origin: str | None = None,
    doc_origin: str | None = None,
    policy: MatchPolicy | None = None,
) -> list[Problem]:
    """Conformance errors of a document against a prescription.

    An empty list means the document fully conforms.

    Raises:
        ConstructionError: Either source is empty or not parseable.
        PrescriptionError: The prescription misuses a directive.
        FatalError: A parsed tree is structurally corrupt.
    """
    with trace_span("parse"):
        prescription = load_document(rx_source, rx_origin).into_prescription()
        document = load_document(doc_source, doc_origin)
    with trace_span("match"):
        return Validator(policy).validate(prescription, document)


class ValidateService(BaseService):
    """Validates documents against prescriptions."""

    def _validate_files(self, rx_path: str, doc_path: str) -> list[Problem]:
        with trace_span("read"):
            rx_source = read_source(rx_path)
            doc_source = read_source(doc_path)
        return validate_sources(
            rx_source,
            doc_source,
            rx_origin=rx_path,
            doc_origin=doc_path,
            policy=self.policy,
        )

    @traced
    def validate(self, rx_path: str, doc_path: str) -> ServiceResult:
        """Validate the document at *doc_path* against *rx_path*."""
        try:
            problems = self._validate_files(rx_path, doc_path)
        except HowserError as exc:
            return self._failure("validate", exc)

        logger.debug("Validated %s against %s: %d problems", doc_path, rx_path, len(problems))
        return ServiceResult(
            ok=True,
            op="validate",
            data={
                "prescription": rx_path,
                "document": doc_path,
                "conforms": not problems,
                **summarize(problems),
            },
        )

    @traced
    def pharmacy(self, path: str | Path, *, fail_early: bool | None = None) -> ServiceResult:
        """Validate every pair listed in the pharmacy file at *path*."""
        if fail_early is None:
            fail_early = self._settings.pharmacy.fail_early

        problems: list[Problem] = []
        pairs: list[dict[str, Any]] = []
        stopped_early = False
        try:
            entries = load_pharmacy(path, self._settings.pharmacy.table)
            for rx_path, doc_path in entries:
                pair_problems = self._validate_files(rx_path, doc_path)
                pairs.append(
                    {"prescription": rx_path, "document": doc_path, "count": len(pair_problems)}
                )
                has_error = any(p.severity is Severity.ERROR for p in pair_problems)
                if fail_early and has_error:
                    problems = pair_problems
                    stopped_early = len(pairs) < len(entries)
                    break
                problems.extend(pair_problems)
        except HowserError as exc:
            return self._failure("pharmacy", exc)

        span = get_current_span()
        if span is not None:
            span.annotate("pairs", len(pairs))

        logger.debug("Pharmacy %s: %d pairs, %d problems", path, len(pairs), len(problems))
        return ServiceResult(
            ok=True,
            op="pharmacy",
            data={
                "pharmacy": str(path),
                "pairs": pairs,
                "stopped_early": stopped_early,
                "conforms": not problems,
                **summarize(problems),
            },
        )
