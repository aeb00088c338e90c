"""Subcommand modules for guardedbuild.

Provides register_commands() which uses deferred imports to keep
``guardedbuild --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from guardedbuild.commands.build import build
    from guardedbuild.commands.fields import fields
    from guardedbuild.commands.kinds import kinds

    cli.add_command(build)
    cli.add_command(fields)
    cli.add_command(kinds)
