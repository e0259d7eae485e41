"""Document and Prescription — validated node trees.

``Document`` guarantees a non-empty parsed tree.  ``Prescription`` is a
``Document`` whose directives have been checked for placement; the only
way to obtain one is :meth:`Document.into_prescription`.
"""

from __future__ import annotations

import logging

from howser.domain.authoring import check_placement
from howser.domain.errors import EmptyDocument, FatalError, InvalidSource, PrescriptionError
from howser.domain.nodes import Category, Node
from howser.domain.problems import Problem

logger = logging.getLogger(__name__)

ROOT_KIND = "document"


class Document:
    """A named, parsed Markdown tree.

    Args:
        root: Root node produced by the parser adapter.
        origin: Source name used in problem locations (usually a path).

    Raises:
        InvalidSource: *root* is missing or is not a parsed document root.
        EmptyDocument: The tree has no content nodes.
    """

    def __init__(self, root: Node | None, origin: str | None = None) -> None:
        if root is None or not isinstance(root, Node):
            raise InvalidSource(f"No parsed tree for {origin or '<source>'}")
        if root.kind != ROOT_KIND:
            raise InvalidSource(
                f"{origin or '<source>'}: expected a '{ROOT_KIND}' root, got '{root.kind}'"
            )
        if not root.children:
            raise EmptyDocument(f"{origin or '<source>'} has no content")
        self._root = root
        self._origin = origin

    @property
    def root(self) -> Node:
        return self._root

    @property
    def origin(self) -> str | None:
        return self._origin

    def __repr__(self) -> str:
        return f"{type(self).__name__}(origin={self._origin!r})"

    def lint(self) -> list[Problem]:
        """All directive placement warnings, in document order."""
        return check_placement(self._root, self._origin)

    def into_prescription(self) -> Prescription:
        """Narrow this document into a ready-to-match Prescription.

        Raises:
            FatalError: The tree is structurally corrupt.
            PrescriptionError: A directive is misplaced; carries the
                warning problem(s).
        """
        _check_structure(self._root, self._origin)
        problems = self.lint()
        if problems:
            raise PrescriptionError(problems)
        logger.debug("Accepted prescription %s", self._origin)
        return Prescription._from_document(self)


class Prescription(Document):
    """A Document whose directives are known to be well placed."""

    @classmethod
    def _from_document(cls, document: Document) -> Prescription:
        rx = cls.__new__(cls)
        rx._root = document.root
        rx._origin = document.origin
        return rx

    def into_prescription(self) -> Prescription:
        return self


def _check_structure(root: Node, origin: str | None) -> None:
    """Reject shared nodes and nodes whose shape the parser never produces."""
    seen: set[int] = set()
    for node in root.depth_first():
        if id(node) in seen:
            _corrupt(origin, node, "appears more than once in the tree")
        seen.add(id(node))
        if node.is_leaf and node.children:
            _corrupt(origin, node, "is a leaf but has children")
        if not isinstance(node.category, Category):
            _corrupt(origin, node, f"has unknown category {node.category!r}")
        if node.span.end_line < node.span.start_line:
            _corrupt(origin, node, "ends before it starts")
        if node.category is Category.INLINE and any(
            child.category is Category.BLOCK for child in node.children
        ):
            _corrupt(origin, node, "is inline but contains block content")


def _corrupt(origin: str | None, node: Node, detail: str) -> None:
    raise FatalError(f"{origin or '<source>'}:{node.span.start_line}: {node.kind} node {detail}")
