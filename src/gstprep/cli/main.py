"""Main CLI entry point."""

import click
from gstprep.database.factories import create_sqlite_database
from gstprep.logging_setup import configure_logging

# Import and register all commands at module level
from gstprep.cli.commands import (
    accounts,
    banks,
    history,
    mapping,
    process,
    profile,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides GSTPREP_DB_PATH environment variable)",
    envvar="GSTPREP_DB_PATH",
)
@click.option(
    "--log-level",
    help="Logging level, e.g. INFO or DEBUG (overrides GSTPREP_LOG_LEVEL)",
    envvar="GSTPREP_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """gstprep - GST return preparation.

    Import bank CSV exports, classify transactions into account categories
    and prepare the New Zealand GST return and journal.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None and "db" not in ctx.obj:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
banks.register_commands(cli)
profile.register_commands(cli)
accounts.register_commands(cli)
mapping.register_commands(cli)
process.register_commands(cli)
history.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
