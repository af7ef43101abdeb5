"""CLI helpers for profile resolution."""

from __future__ import annotations

import click
from gstprep.domain.entities import Profile
from gstprep.domain.errors import NotFoundError
from gstprep.domain.profile import ProfileService


def resolve_profile_or_exit(ctx: click.Context, name: str) -> Profile:
    """Look up a profile by name, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    service = ProfileService(ctx.obj["db"])
    try:
        return service.require_profile(name)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        click.echo("Create it first with 'gstprep profile create NAME'.", err=True)
        ctx.exit(1)
