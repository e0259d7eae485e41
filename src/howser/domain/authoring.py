"""Authoring rules — is a prescription's directive usage well placed?

Violations are warnings located on the prescription side.  They never
raise; :meth:`howser.domain.document.Document.into_prescription` decides
what to do with them.
"""

from __future__ import annotations

import logging

from howser.domain.directives import MODIFIERS, classify, fused_directive, keyword_for
from howser.domain.nodes import Node
from howser.domain.problems import DIRECTIVE_MISPLACED, Location, Problem, Severity

logger = logging.getLogger(__name__)


def check_placement(root: Node, origin: str | None = None) -> list[Problem]:
    """Return every directive placement violation under *root*, in document order."""
    problems: list[Problem] = []
    for parent in root.depth_first():
        problems.extend(_check_siblings(parent.children, origin))
    problems.sort(key=lambda p: (p.rx.line, p.rx.column) if p.rx else (0, 0))
    if problems:
        logger.debug("Found %d misplaced directives in %s", len(problems), origin)
    return problems


def _check_siblings(siblings: tuple[Node, ...], origin: str | None) -> list[Problem]:
    problems: list[Problem] = []
    for index, node in enumerate(siblings):
        fused = fused_directive(node)
        if fused is not None:
            message = (
                f"'{keyword_for(fused)}' directive shares its line with other content "
                "and is matched as verbatim HTML; put it on a line of its own"
            )
            problems.append(_warning(message, node, origin))
            continue

        directive = classify(node)
        if directive not in MODIFIERS:
            continue
        keyword = keyword_for(directive)
        tagged = siblings[index + 1] if index + 1 < len(siblings) else None

        if tagged is None:
            message = f"'{keyword}' directive tags an empty subtree (nothing follows it)"
        elif classify(tagged) in MODIFIERS:
            message = (
                f"'{keyword}' directive is immediately followed by "
                f"'{keyword_for(classify(tagged))}' with no content between them"
            )
        elif not tagged.is_leaf and not tagged.children:
            message = f"'{keyword}' directive tags an empty {tagged.kind}"
        else:
            continue
        problems.append(_warning(message, node, origin))
    return problems


def _warning(message: str, node: Node, origin: str | None) -> Problem:
    return Problem(
        severity=Severity.WARNING,
        code=DIRECTIVE_MISPLACED,
        message=message,
        rx=Location.from_span(origin, node.span),
    )
