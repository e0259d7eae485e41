"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  Renderers
are dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.

Problem text is always printed through ``Text`` objects, never markup, so
prompts like ``[[Title]]`` survive intact.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.text import Text

from howser.output.console import create_console, get_output, style_for_severity

if TYPE_CHECKING:
    from rich.console import Console

    from howser.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output: one terse line per problem, or ``OK``."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    problems = result.data.get("problems") or []
    if not problems:
        return f"OK: {result.op}"
    return "\n".join(problem_line(p) for p in problems)


def problem_line(problem: dict[str, Any]) -> str:
    """``origin:line:column: severity: message`` for a serialized problem."""
    location = problem.get("doc") or problem.get("rx") or {}
    where = _location_text(location)
    return f"{where}: {problem.get('severity', 'error')}: {problem.get('message', '')}"


# ── Helpers ───────────────────────────────────────────────────────────


def _location_text(location: dict[str, Any]) -> str:
    origin = location.get("origin") or "<source>"
    return f"{origin}:{location.get('line', '?')}:{location.get('column', 1)}"


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    console.print(Text(f"  {key}: ", style="howser.key"), Text(str(value)), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_span(console, value, indent=4)
        else:
            console.print(Text(f"    {key}: {value}"))


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
    line = Text(" " * indent)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {span.get('name', '?')}")
    for key, value in (span.get("annotations") or {}).items():
        line.append(f"  {key}={value}", style="dim")
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


def _render_problem(console: Console, problem: dict[str, Any], *, verbose: bool) -> None:
    severity = str(problem.get("severity", "error"))
    if not verbose:
        location = problem.get("doc") or problem.get("rx") or {}
        line = Text(f"{_location_text(location)}: ", style="howser.path")
        line.append(severity, style=style_for_severity(severity))
        line.append(f": {problem.get('message', '')}")
        console.print(line)
        return

    header = Text(severity, style=style_for_severity(severity))
    header.append(f"[{problem.get('code', '')}]", style="howser.code")
    header.append(f": {problem.get('message', '')}")
    console.print(header)
    if problem.get("doc"):
        _field(console, "--> document    ", _location_text(problem["doc"]))
    if problem.get("rx"):
        _field(console, "--> prescription", _location_text(problem["rx"]))
    console.print()


def _render_problems(
    result: ServiceResult, console: Console, *, verbose: bool, ok_line: str
) -> None:
    problems = result.data.get("problems", [])
    if not problems:
        console.print(Text("OK", style="howser.ok"), Text(f"  {ok_line}"), sep="")
        return
    for problem in problems:
        _render_problem(console, problem, verbose=verbose)
    errors = result.data.get("error_count", 0)
    warnings = result.data.get("warning_count", 0)
    if not verbose:
        console.print()
    console.print(f"{errors} errors, {warnings} warnings")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="howser.error"),
        Text(f"  {result.op}", style="howser.op"),
        Text(f" — {msg}"),
        sep="",
    )
    if err is None:
        return
    for cause in err.detail.get("causes", []):
        console.print(Text(f"  caused by: {cause}"))
    if verbose:
        console.print(Text(f"  code: {err.code}", style="howser.key"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    rx = result.data.get("prescription", "")
    ok_line = f"{rx} is a well-formed prescription."
    _render_problems(result, console, verbose=verbose, ok_line=ok_line)
    if verbose:
        _render_meta(console, result)


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    doc = result.data.get("document", "")
    rx = result.data.get("prescription", "")
    _render_problems(result, console, verbose=verbose, ok_line=f"{doc} conforms to {rx}.")
    if verbose:
        _render_meta(console, result)


def _render_pharmacy(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    pairs = result.data.get("pairs", [])
    if verbose:
        for pair in pairs:
            _field(console, pair["document"], f"{pair['prescription']} ({pair['count']} problems)")
        console.print()
    _render_problems(
        result, console, verbose=verbose, ok_line=f"All {len(pairs)} documents conform."
    )
    if result.data.get("stopped_early"):
        console.print(Text("Stopped after the first failing pair.", style="howser.warning"))
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    console.print(Text("OK", style="howser.ok"), Text(f"  {result.op}", style="howser.op"), sep="")
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "check": _render_check,
    "validate": _render_validate,
    "pharmacy": _render_pharmacy,
}
