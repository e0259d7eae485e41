"""Matcher — aligns a prescription tree against a document tree.

Each pair of sibling sequences (prescription children vs. document
children) is aligned with two cursors.  Straight-line elements advance both
cursors and collect problems without stopping.  Optional and repeatable
elements branch: every branch yields a list of problems, an empty list is a
consistent alignment, and the first clean branch in policy order wins.
When no branch is clean the one with the fewest problems is reported.

The parser merges adjacent document text, while inline directives split the
prescription's text into several leaves.  A third cursor therefore counts
the characters of a document text leaf already consumed, and a prescription
text leaf may consume a prefix of it.

Alignment states ``(i, j, k)`` are memoized per sequence pair and every
branch advances ``i``.  States are resolved from an explicit stack, so the
depth of the Python stack only grows with the nesting of the tree.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

from howser.domain.directives import Directive, Element, annotate, is_prompt
from howser.domain.document import Document, Prescription
from howser.domain.nodes import Node
from howser.domain.problems import (
    CATEGORY_MISMATCH,
    EXTRA_CONTENT,
    MISMATCH,
    MISSING_CONTENT,
    UNSUBSTITUTED_PLACEHOLDER,
    Location,
    Problem,
    Severity,
    sort_problems,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchPolicy:
    """Tie-break order for the backtracking search.

    Attributes:
        prefer_present: Optional elements try "present" before "absent".
        greedy_repeat: Repeatable elements try the longest run first.
    """

    prefer_present: bool = True
    greedy_repeat: bool = True


class Validator:
    """Checks documents against prescriptions.

    A Validator holds no per-run state; ``validate`` can be called any
    number of times with the same inputs and returns equal results.
    """

    def __init__(self, policy: MatchPolicy | None = None) -> None:
        self.policy = policy or MatchPolicy()

    def validate(self, prescription: Prescription, document: Document) -> list[Problem]:
        """Return every conformance error, ordered by document position."""
        if not isinstance(prescription, Prescription):
            raise TypeError(
                "validate() requires a Prescription; call Document.into_prescription() first"
            )
        run = _Run(self.policy, prescription.origin, document.origin)
        problems = run.match_children(prescription.root, document.root)
        logger.debug(
            "Validated %s against %s: %d problems",
            document.origin,
            prescription.origin,
            len(problems),
        )
        return sort_problems(problems)


class _Run:
    """One validate() call: origins plus the active policy."""

    def __init__(self, policy: MatchPolicy, rx_origin: str | None, doc_origin: str | None) -> None:
        self.policy = policy
        self.rx_origin = rx_origin
        self.doc_origin = doc_origin

    # ------------------------------------------------------------------
    # Problem construction
    # ------------------------------------------------------------------

    def _error(self, code: str, message: str, rx: Node | None, doc: Node | None) -> Problem:
        return Problem(
            severity=Severity.ERROR,
            code=code,
            message=message,
            rx=Location.from_span(self.rx_origin, rx.span) if rx is not None else None,
            doc=Location.from_span(self.doc_origin, doc.span) if doc is not None else None,
        )

    def _missing(self, element: Element, docs: Sequence[Node], doc_parent: Node) -> Problem:
        anchor = docs[-1].span if docs else doc_parent.span
        return Problem(
            severity=Severity.ERROR,
            code=MISSING_CONTENT,
            message=f"required content missing: {element.node.describe()}",
            rx=Location.from_span(self.rx_origin, element.node.span),
            doc=Location.from_span(self.doc_origin, anchor.at_end()),
        )

    def _extra(self, doc: Node) -> Problem:
        return self._error(
            EXTRA_CONTENT, f"unexpected extra content: {doc.describe()}", None, doc
        )

    # ------------------------------------------------------------------
    # Single elements
    # ------------------------------------------------------------------

    def match_element(self, element: Element, doc: Node) -> list[Problem]:
        """Match one prescription element against one document node."""
        if element.directive is Directive.PLACEHOLDER:
            return self._match_placeholder(element.node, doc)
        if element.directive is Directive.SUBSTITUTION:
            return self._match_substitution(element.node, doc)
        return self.match_node(element.node, doc)

    def _match_placeholder(self, rx: Node, doc: Node) -> list[Problem]:
        if doc.category != rx.category:
            return [
                self._error(
                    CATEGORY_MISMATCH,
                    f"expected any {rx.category} content, found {doc.category} {doc.kind}",
                    rx,
                    doc,
                )
            ]
        return []

    def _match_substitution(self, rx: Node, doc: Node) -> list[Problem]:
        prompt = (rx.literal or "").strip()
        if doc.kind != rx.kind or doc.literal is None:
            return [
                self._error(
                    MISMATCH,
                    f"expected {rx.kind} replacing {prompt}, found {doc.describe()}",
                    rx,
                    doc,
                )
            ]
        text = doc.literal.strip()
        if not text or text == prompt or is_prompt(text):
            return [
                self._error(
                    UNSUBSTITUTED_PLACEHOLDER,
                    f"unsubstituted placeholder {prompt}",
                    rx,
                    doc,
                )
            ]
        return []

    def match_node(self, rx: Node, doc: Node) -> list[Problem]:
        """Verbatim comparison of two subtrees."""
        if rx.kind != doc.kind:
            return [
                self._error(
                    MISMATCH, f"expected {rx.describe()}, found {doc.describe()}", rx, doc
                )
            ]
        if rx.info != doc.info:
            return [
                self._error(
                    MISMATCH,
                    f"{rx.kind} differs: expected {rx.info!r}, found {doc.info!r}",
                    rx,
                    doc,
                )
            ]
        if rx.is_leaf:
            if rx.literal != doc.literal:
                return [
                    self._error(
                        MISMATCH,
                        f"{rx.kind} differs: expected {rx.literal!r}, found {doc.literal!r}",
                        rx,
                        doc,
                    )
                ]
            return []
        return self.match_children(rx, doc)

    # ------------------------------------------------------------------
    # Sibling sequences
    # ------------------------------------------------------------------

    def match_children(self, rx_parent: Node, doc_parent: Node) -> list[Problem]:
        """Align the children of two containers."""
        return _Alignment(self, annotate(rx_parent.children), doc_parent).align()


State = tuple[int, int, int]
Option = tuple[list[Problem], State | None]


class _Alignment:
    """Backtracking alignment of one pair of sibling sequences.

    A state ``(i, j, k)`` aligns ``elements[i:]`` with ``docs[j:]`` where the
    first ``k`` characters of the text leaf ``docs[j]`` are already matched.
    Each state expands into options: problems found on the way plus the state
    that follows.  A state with one option is a straight-line step.
    """

    def __init__(self, run: _Run, elements: list[Element], doc_parent: Node) -> None:
        self.run = run
        self.policy = run.policy
        self.elements = elements
        self.doc_parent = doc_parent
        self.docs = doc_parent.children
        self._memo: dict[State, list[Problem]] = {}
        self._clean: dict[tuple[int, int], bool] = {}

    def align(self, i: int = 0, j: int = 0, k: int = 0) -> list[Problem]:
        """Problems for aligning ``elements[i:]`` with ``docs[j:]``."""
        target = (i, j, k)
        expanded: dict[State, list[Option]] = {}
        stack = [target]
        while stack:
            state = stack[-1]
            if state in self._memo:
                stack.pop()
                continue
            options = expanded.get(state)
            if options is None:
                options = expanded[state] = self._options(*state)
            pending = [nxt for _, nxt in options if nxt is not None and nxt not in self._memo]
            if pending:
                stack.extend(pending)
                continue
            self._memo[state] = self._resolve(state, options)
            del expanded[state]
            stack.pop()
        return self._memo[target]

    def _resolve(self, state: State, options: list[Option]) -> list[Problem]:
        candidates: list[list[Problem]] = []
        for found, nxt in options:
            rest = self._memo[nxt] if nxt is not None else []
            branch = found + rest if found else rest
            if not branch:
                return []
            candidates.append(branch)
        if len(candidates) > 1:
            element = self.elements[state[0]]
            logger.debug(
                "No clean alignment for %s element at rx line %d",
                element.modifier or element.directive,
                element.node.span.start_line,
            )
        return min(candidates, key=len)

    def _options(self, i: int, j: int, k: int) -> list[Option]:
        if i == len(self.elements):
            extra = [self.run._extra(self._remainder(j, k))] if j < len(self.docs) else []
            extra.extend(self.run._extra(doc) for doc in self.docs[j + 1 :])
            return [(extra, None)]
        element = self.elements[i]
        if element.modifier is Directive.IGNORE:
            return [([], (i + 1, j, k))]
        if element.modifier is Directive.OPTIONAL:
            return self._optional(element, i, j, k)
        if element.modifier is Directive.REPEATABLE:
            return self._repeatable(element, i, j, k)
        if j == len(self.docs):
            return [([self.run._missing(element, self.docs, self.doc_parent)], (i + 1, j, k))]
        return [(found, (i + 1, nj, nk)) for found, nj, nk in self._steps(element, j, k)]

    def _remainder(self, j: int, k: int) -> Node:
        doc = self.docs[j]
        if not k:
            return doc
        return replace(doc, literal=(doc.literal or "")[k:])

    def _steps(self, element: Element, j: int, k: int) -> list[tuple[list[Problem], int, int]]:
        """Ways *element* can consume document content at ``(j, k)``.

        The first step always consumes the rest of ``docs[j]``.  Against
        document text, a prescription text leaf may also consume a prefix of
        it and a placeholder any non-empty part of it.
        """
        doc = self._remainder(j, k)
        steps = [(self.run.match_element(element, doc), j + 1, 0)]
        if doc.kind != "text" or element.node.category != doc.category:
            return steps
        text = doc.literal or ""
        if element.directive is Directive.PLACEHOLDER:
            steps.extend(([], j, k + end) for end in range(len(text) - 1, 0, -1))
        elif element.directive is Directive.VERBATIM and element.node.kind == "text":
            prefix = element.node.literal or ""
            if prefix and len(prefix) < len(text) and text.startswith(prefix):
                steps.append(([], j, k + len(prefix)))
        return steps

    def _fits(self, i: int, j: int) -> bool:
        """Does ``docs[j]`` match ``elements[i]`` without any problem?"""
        key = (i, j)
        if key not in self._clean:
            self._clean[key] = not self.run.match_element(self.elements[i], self.docs[j])
        return self._clean[key]

    def _optional(self, element: Element, i: int, j: int, k: int) -> list[Option]:
        absent: list[Option] = [([], (i + 1, j, k))]
        if j == len(self.docs):
            return absent
        present: list[Option] = [
            (found, (i + 1, nj, nk)) for found, nj, nk in self._steps(element, j, k)
        ]
        return present + absent if self.policy.prefer_present else absent + present

    def _repeatable(self, element: Element, i: int, j: int, k: int) -> list[Option]:
        run_length = 0
        if not k:
            while j + run_length < len(self.docs) and self._fits(i, j + run_length):
                run_length += 1

        if self.policy.greedy_repeat:
            counts = range(run_length, -1, -1)
        else:
            counts = range(0, run_length + 1)

        options: list[Option] = []
        next_index = j + run_length
        if next_index < len(self.docs):
            # The first node that broke the run, reported as a malformed repetition.
            found, nj, nk = self._steps(element, next_index, k)[0]
            options.append((found, (i + 1, nj, nk)))
        options.extend(([], (i + 1, j + count, k)) for count in counts)
        return options
