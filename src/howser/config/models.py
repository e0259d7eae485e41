"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``howser.toml`` only contains
overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class ReportConfig(BaseModel):
    """[report] section."""

    model_config = {"frozen": True}

    verbose: bool = False


class MatchConfig(BaseModel):
    """[match] section — backtracking tie-break order."""

    model_config = {"frozen": True}

    prefer_present: bool = True
    greedy_repeat: bool = True


class PharmacyConfig(BaseModel):
    """[pharmacy] section."""

    model_config = {"frozen": True}

    table: str = "Specs"
    fail_early: bool = False

