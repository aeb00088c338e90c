"""Format a ServiceResult for display.

Three modes, picked from :class:`OutputSettings`:

- JSON: the full result, ``model_dump_json``.
- Quiet: one status line.
- Human: Rich-rendered, dispatched by ``result.op``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from guardedbuild.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from guardedbuild.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return _quiet_line(result)

    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_fields)
        renderer(result, console)
    else:
        _render_error(result, console, verbose=settings.verbose)
    return get_output(console).rstrip("\n")


def _quiet_line(result: ServiceResult) -> str:
    if result.ok:
        return f"OK: {result.op}"
    msg = result.error.message if result.error else "Unknown error"
    return f"ERROR: {result.op} — {msg}"


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "gb.ok"), "  ", (result.op, "gb.op")))


def _render_fields(result: ServiceResult, console: Console) -> None:
    """Key-value listing of the result data (built values land here)."""
    _status_line(console, result)
    for key, value in result.data.items():
        console.print(Text.assemble((f"  {key}: ", "gb.key"), _display(value)))


def _display(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) or "(none)"
    if value == "":
        return '""'
    return str(value)


def _render_describe(result: ServiceResult, console: Console) -> None:
    data = result.data
    _status_line(console, result)
    console.print(Text(f"  {data['kind']} -> {data['model']}", style="gb.field"))

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", style="gb.field")
    table.add_column("Requirement")
    table.add_column("Default")
    table.add_column("Description", style="dim")
    for item in data["fields"]:
        requirement = item["requirement"]
        table.add_row(
            item["name"],
            Text(requirement, style="gb.required" if requirement == "required" else ""),
            "yes" if item["has_default"] else "",
            item["description"],
        )
    console.print(table)

    for constraint in data["constraints"]:
        console.print(
            Text.assemble(
                (f"  constraint {constraint['name']}: ", "gb.key"),
                constraint["description"],
            )
        )


def _render_kinds(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Kind", style="gb.field")
    table.add_column("Model")
    for item in result.data["items"]:
        table.add_row(item["kind"], item["model"])
    console.print(table)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    error = result.error
    message = error.message if error else "Unknown error"
    console.print(
        Text.assemble(("ERROR", "gb.error"), "  ", (result.op, "gb.op"), f" — {message}")
    )
    if error is None:
        return

    problems = error.detail.get("problems", [])
    if problems:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Field", style="gb.field")
        table.add_column("Problem")
        table.add_column("Reason")
        for problem in problems:
            table.add_row(
                problem["field"],
                Text(problem["kind"], style=style_for_kind(problem["kind"])),
                problem["reason"],
            )
        console.print(table)
    elif "available" in error.detail:
        console.print(Text(f"  available: {', '.join(error.detail['available'])}", style="dim"))
    elif "fields" in error.detail:
        console.print(Text(f"  fields: {', '.join(error.detail['fields'])}", style="dim"))

    if verbose:
        console.print(Text(f"  code: {error.code}", style="dim"))


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "describe_builder": _render_describe,
    "list_kinds": _render_kinds,
}
