"""Command: show the declared fields of a builder."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from guardedbuild.commands._base import GbCommand

if TYPE_CHECKING:
    from guardedbuild.commands._context import AppContext


@click.command(
    cls=GbCommand,
    examples="  guardedbuild fields report\n  guardedbuild --json fields notification",
)
@click.argument("kind")
@click.pass_obj
def fields(app: AppContext, kind: str) -> None:
    """List the fields, requirements, and constraints of KIND."""
    app.emit(app.service.describe(kind))
