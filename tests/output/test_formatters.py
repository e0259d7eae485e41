"""Tests for output-mode selection."""

import json

from howser.output.formatters import OutputSettings, format_result
from howser.services.result import ServiceResult

_RESULT = ServiceResult(
    ok=True,
    op="check",
    data={"prescription": "rx.md", "problems": [], "count": 0},
)


class TestFormatResult:
    def test_default_is_rich(self) -> None:
        assert format_result(_RESULT) == "OK  rx.md is a well-formed prescription."

    def test_json(self) -> None:
        output = format_result(_RESULT, settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["op"] == "check"
        assert data["data"]["count"] == 0

    def test_quiet(self) -> None:
        assert format_result(_RESULT, settings=OutputSettings(quiet=True)) == "OK: check"

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(_RESULT, settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["ok"] is True
