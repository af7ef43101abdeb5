"""Payee mapping commands."""

import click
from gstprep.cli.error_handling import handle_domain_error
from gstprep.cli.profile_resolution import resolve_profile_or_exit
from gstprep.domain.errors import DomainError
from gstprep.domain.payee_mapping import PayeeMappingService


@click.group()
def mapping_group():
    """Manage learned payee to category mappings."""
    pass


@mapping_group.command("list")
@click.option("--profile", "profile_name", required=True, help="Profile name")
@click.pass_context
def list_mapping(ctx, profile_name: str):
    """List learned payees."""
    profile = resolve_profile_or_exit(ctx, profile_name)
    mapping = PayeeMappingService(ctx.obj["db"]).get_mapping(profile.id)

    if not mapping:
        click.echo("No payee mappings learned yet.")
        return

    click.echo(f"\nPayee mappings for '{profile.name}':")
    width = max(len(payee) for payee in mapping)
    for payee in sorted(mapping):
        click.echo(f"  {payee:<{width}}  ->  {mapping[payee]}")


@mapping_group.command("set")
@click.argument("payee")
@click.argument("category")
@click.option("--profile", "profile_name", required=True, help="Profile name")
@click.pass_context
def set_mapping(ctx, payee: str, category: str, profile_name: str):
    """Send PAYEE to CATEGORY on future uploads."""
    profile = resolve_profile_or_exit(ctx, profile_name)
    try:
        PayeeMappingService(ctx.obj["db"]).set_category(profile.id, payee, category)
        click.echo(f"Mapped '{payee.upper()}' to '{category}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@mapping_group.command("remove")
@click.argument("payee")
@click.option("--profile", "profile_name", required=True, help="Profile name")
@click.pass_context
def remove_mapping(ctx, payee: str, profile_name: str):
    """Forget a learned payee."""
    profile = resolve_profile_or_exit(ctx, profile_name)
    try:
        PayeeMappingService(ctx.obj["db"]).remove_payee(profile.id, payee)
        click.echo(f"Removed mapping for '{payee.upper()}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register payee mapping commands with main CLI."""
    cli.add_command(mapping_group, name="mapping")
