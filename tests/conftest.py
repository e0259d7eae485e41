"""Shared pytest fixtures and test helpers for howser tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from howser.domain.document import Document, Prescription
from howser.domain.matcher import MatchPolicy, Validator
from howser.domain.problems import Problem
from howser.infrastructure.markdown import parse_markdown
from howser.services.telemetry import disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep HOWSER_* env vars, telemetry and logging state out of each test."""
    for name in ("HOWSER_CONFIG", "HOWSER_JSON_OUTPUT", "HOWSER_QUIET", "HOWSER_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    howser_logger = logging.getLogger("howser")
    howser_level = howser_logger.level
    yield
    disable_telemetry()
    root.handlers = original_handlers
    root.setLevel(original_level)
    howser_logger.setLevel(howser_level)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the test from an empty temp directory.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on command test
    classes so relative paths and config discovery stay inside tmp_path.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_md(directory: Path, name: str, text: str) -> Path:
    """Write a Markdown file and return its path."""
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def make_document(text: str, origin: str = "doc.md") -> Document:
    """Parse *text* into a Document."""
    return Document(parse_markdown(text, origin), origin)


def make_prescription(text: str, origin: str = "rx.md") -> Prescription:
    """Parse *text* into a Prescription, asserting it is well formed."""
    return make_document(text, origin).into_prescription()


def conformance(rx: str, doc: str, policy: MatchPolicy | None = None) -> list[Problem]:
    """Validate Markdown *doc* against Markdown *rx*."""
    return Validator(policy).validate(make_prescription(rx), make_document(doc))
