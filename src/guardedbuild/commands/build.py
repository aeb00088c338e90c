"""Command: build a value from a registered builder."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from guardedbuild.commands._base import GbCommand

if TYPE_CHECKING:
    from guardedbuild.commands._context import AppContext

_BUILD_EXAMPLES = """\
  guardedbuild build report --set title="Monthly Report"
  guardedbuild build report --set title=Q3 --set period=2026-09 --tag finance --tag quarterly
  guardedbuild --json build notification --set message="Deploy done" --set email=ops@example.com"""


def _parse_assignments(
    _ctx: click.Context, _param: click.Parameter, value: tuple[str, ...]
) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for item in value:
        name, sep, raw = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected FIELD=VALUE, got {item!r}")
        pairs.append((name.strip(), raw))
    return pairs


@click.command(cls=GbCommand, examples=_BUILD_EXAMPLES)
@click.argument("kind")
@click.option(
    "--set",
    "assignments",
    multiple=True,
    metavar="FIELD=VALUE",
    callback=_parse_assignments,
    help="Set a field (repeatable; the last value for a field wins).",
)
@click.option("--tag", "tags", multiple=True, help="Add a tag (repeatable).")
@click.pass_obj
def build(
    app: AppContext,
    kind: str,
    assignments: list[tuple[str, str]],
    tags: tuple[str, ...],
) -> None:
    """Build a KIND value from field assignments, reporting every problem."""
    values: dict[str, Any] = {}
    for name, raw in assignments:
        values[name] = raw
    if tags:
        values["tags"] = tags
    app.emit(app.service.build(kind, values))
