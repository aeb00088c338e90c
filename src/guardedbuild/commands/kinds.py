"""Command: list registered builder kinds."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from guardedbuild.commands._context import AppContext


@click.command()
@click.pass_obj
def kinds(app: AppContext) -> None:
    """List the builder kinds available to ``build``."""
    app.emit(app.service.kinds())
