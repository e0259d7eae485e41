"""Rich Console factory and theme for howser output.

Consoles render to a StringIO buffer so renderers return plain strings.
In non-TTY environments (tests, pipes) Rich drops the color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

HOWSER_THEME = Theme(
    {
        "howser.ok": "bold green",
        "howser.error": "bold red",
        "howser.warning": "bold yellow",
        "howser.op": "bold cyan",
        "howser.key": "dim",
        "howser.path": "bold blue",
        "howser.code": "magenta",
    }
)

_SEVERITY_STYLES: dict[str, str] = {
    "error": "howser.error",
    "warning": "howser.warning",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps long problem lines unwrapped).
    """
    return Console(
        file=StringIO(),
        theme=HOWSER_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 160,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_severity(severity: str) -> str:
    """Rich style name for a problem severity."""
    return _SEVERITY_STYLES.get(severity, "")
