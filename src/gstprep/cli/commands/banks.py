"""Bank listing command."""

import click
from gstprep.domain.bank_formats import BANK_FORMATS


@click.command("banks")
def list_banks():
    """List supported banks and the columns read as payee."""
    click.echo("\nSupported banks:")
    for name, bank_format in BANK_FORMATS.items():
        fields = ", ".join(bank_format.description_fields)
        click.echo(f"  {name:<10} payee from: {fields}")


def register_commands(cli):
    """Register banks command with main CLI."""
    cli.add_command(list_banks)
