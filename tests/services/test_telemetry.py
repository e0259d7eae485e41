"""Tests for service timing spans."""

from __future__ import annotations

from pathlib import Path

from howser.config.settings import HowserSettings
from howser.services.result import ServiceResult
from howser.services.telemetry import (
    enable_telemetry,
    get_current_span,
    trace_span,
    traced,
)
from howser.services.validate import ValidateService
from tests.conftest import write_md


class _Probe:
    @traced
    def run(self) -> ServiceResult:
        with trace_span("inner") as span:
            if span is not None:
                span.annotate("items", 2)
        return ServiceResult(ok=True, op="probe")

    @traced
    def plain(self) -> int:
        return 42


class TestDisabled:
    def test_no_meta_when_disabled(self) -> None:
        result = _Probe().run()
        assert result.meta is None

    def test_trace_span_yields_none(self) -> None:
        with trace_span("anything") as span:
            assert span is None
        assert get_current_span() is None


class TestEnabled:
    def test_span_tree_attached(self) -> None:
        enable_telemetry()
        result = _Probe().run()
        telemetry = result.meta["telemetry"]
        assert telemetry["name"].endswith("run")
        assert telemetry["duration_ms"] >= 0
        inner = telemetry["children"][0]
        assert inner["name"] == "inner"
        assert inner["annotations"] == {"items": 2}

    def test_non_result_return_values_pass_through(self) -> None:
        enable_telemetry()
        assert _Probe().plain() == 42

    def test_current_span_outside_traced_call(self) -> None:
        enable_telemetry()
        assert get_current_span() is None

    def test_validate_records_phases(self, tmp_path: Path) -> None:
        enable_telemetry()
        rx = write_md(tmp_path, "rx.md", "# [[Title]]\n")
        doc = write_md(tmp_path, "doc.md", "# Title\n")
        svc = ValidateService(HowserSettings.from_cli(start=tmp_path))
        result = svc.validate(str(rx), str(doc))
        names = [child["name"] for child in result.meta["telemetry"]["children"]]
        assert names == ["read", "parse", "match"]
