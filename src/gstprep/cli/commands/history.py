"""Upload history command."""

from datetime import UTC, datetime, time, timedelta

import click
from gstprep.cli.profile_resolution import resolve_profile_or_exit
from gstprep.utils.date_parser import parse_date


def _local_midnight_utc(day) -> datetime:
    """Local midnight of ``day`` as a naive UTC datetime, matching stored timestamps."""
    return datetime.combine(day, time.min).astimezone(UTC).replace(tzinfo=None)


def resolve_history_range(ctx, since: str | None, until: str | None):
    """Turn ``--since``/``--until`` into a half-open datetime range."""
    start = None
    end = None
    if since:
        try:
            start = _local_midnight_utc(parse_date(since))
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)
    if until:
        try:
            end = _local_midnight_utc(parse_date(until) + timedelta(days=1))
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)
    return start, end


@click.command("history")
@click.option("--profile", "profile_name", required=True, help="Profile name")
@click.option("--since", help="Start date (YYYY-MM-DD, 'last month', ...)")
@click.option("--until", help="End date, inclusive")
@click.pass_context
def show_history(ctx, profile_name: str, since: str, until: str):
    """Show processed uploads, newest first."""
    profile = resolve_profile_or_exit(ctx, profile_name)
    start, end = resolve_history_range(ctx, since, until)
    records = ctx.obj["db"].list_upload_records(profile.id, start=start, end=end)

    if not records:
        click.echo("No uploads found.")
        return

    click.echo(f"\nUpload history for '{profile.name}':")
    for record in records:
        uploaded = record.uploaded_at.replace(tzinfo=UTC).astimezone()
        click.echo(
            f"  {uploaded:%Y-%m-%d %H:%M}  {record.bank:<9} "
            f"{record.total_transactions:>5} transactions  {', '.join(record.file_names)}"
        )


def register_commands(cli):
    """Register history command with main CLI."""
    cli.add_command(show_history)
