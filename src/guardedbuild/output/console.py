"""Rich Console factory and theme for guardedbuild output.

Consoles render into a StringIO buffer so formatting stays a pure
``ServiceResult -> str`` function.  In non-TTY environments (tests,
pipes) Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

GB_THEME = Theme(
    {
        "gb.ok": "bold green",
        "gb.error": "bold red",
        "gb.op": "bold cyan",
        "gb.key": "dim",
        "gb.field": "bold",
        "gb.required": "yellow",
        "gb.kind.missing_required_field": "yellow",
        "gb.kind.invalid_field_value": "red",
        "gb.kind.constraint_violation": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    return Console(
        file=StringIO(),
        theme=GB_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Rich style name for a problem kind."""
    return f"gb.kind.{kind}"
