"""Account table commands."""

import click
from gstprep.cli.error_handling import handle_domain_error
from gstprep.cli.profile_resolution import resolve_profile_or_exit
from gstprep.domain.account_table import AccountTableService
from gstprep.domain.errors import DomainError
from gstprep.utils.amount_parser import format_ratio


def profile_option(f):
    return click.option("--profile", "profile_name", required=True, help="Profile name")(f)


@click.group()
def accounts_group():
    """Manage the chart of accounts and GST claim ratios."""
    pass


@accounts_group.command("list")
@profile_option
@click.pass_context
def list_accounts(ctx, profile_name: str):
    """List account categories ordered by code."""
    profile = resolve_profile_or_exit(ctx, profile_name)
    service = AccountTableService(ctx.obj["db"])
    table = service.get_table(profile.id)

    click.echo(f"\nAccount table for '{profile.name}':")
    click.echo(f"  {'Code':<6} {'Category':<28} {'GST Ratio':>9}")
    for category in table.sorted():
        marker = "" if category.is_deletable else " *"
        click.echo(
            f"  {category.code or '-':<6} {category.name:<28} "
            f"{format_ratio(category.ratio):>9}{marker}"
        )
    click.echo("\n  * core category, cannot be deleted")


@accounts_group.command("add")
@click.argument("name")
@profile_option
@click.option("--ratio", required=True, help="GST claim ratio between 0 and 1")
@click.option("--code", default="", help="Account code")
@click.pass_context
def add_account(ctx, name: str, profile_name: str, ratio: str, code: str):
    """Add an account category."""
    profile = resolve_profile_or_exit(ctx, profile_name)
    service = AccountTableService(ctx.obj["db"])
    try:
        category = service.add_category(profile.id, name, ratio, code)
        click.echo(f"Added '{category.name}' ({format_ratio(category.ratio)} claimable)")
    except DomainError as e:
        handle_domain_error(ctx, e)


@accounts_group.command("edit")
@click.argument("name")
@profile_option
@click.option("--name", "new_name", help="New category name")
@click.option("--ratio", help="New GST claim ratio between 0 and 1")
@click.option("--code", help="New account code")
@click.pass_context
def edit_account(ctx, name: str, profile_name: str, new_name: str, ratio: str, code: str):
    """Edit an account category."""
    if new_name is None and ratio is None and code is None:
        click.echo("Error: Nothing to change. Use --name, --ratio or --code.", err=True)
        ctx.exit(1)

    profile = resolve_profile_or_exit(ctx, profile_name)
    service = AccountTableService(ctx.obj["db"])
    try:
        category = service.update_category(
            profile.id, name, new_name=new_name, ratio=ratio, code=code
        )
        click.echo(
            f"Updated '{category.name}': code {category.code or '-'}, "
            f"{format_ratio(category.ratio)} claimable"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@accounts_group.command("delete")
@click.argument("name")
@profile_option
@click.pass_context
def delete_account(ctx, name: str, profile_name: str):
    """Delete an account category."""
    profile = resolve_profile_or_exit(ctx, profile_name)
    service = AccountTableService(ctx.obj["db"])
    try:
        service.delete_category(profile.id, name)
        click.echo(f"Deleted '{name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@accounts_group.command("reset")
@profile_option
@click.confirmation_option(prompt="Replace the account table with the default?")
@click.pass_context
def reset_accounts(ctx, profile_name: str):
    """Reset the account table to the default (or the agent's table)."""
    profile = resolve_profile_or_exit(ctx, profile_name)
    service = AccountTableService(ctx.obj["db"])
    try:
        table = service.reset_to_default(profile.id)
        click.echo(f"Reset account table for '{profile.name}' ({len(table)} categories)")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account table commands with main CLI."""
    cli.add_command(accounts_group, name="accounts")
