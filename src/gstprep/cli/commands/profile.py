"""Profile management commands."""

import click
from gstprep.cli.error_handling import handle_domain_error
from gstprep.domain.errors import DomainError
from gstprep.domain.profile import ProfileService


@click.group()
def profile_group():
    """Manage users and agents' clients."""
    pass


@profile_group.command("create")
@click.argument("name")
@click.pass_context
def create_profile(ctx, name: str):
    """Create a user profile."""
    service = ProfileService(ctx.obj["db"])
    try:
        profile_id = service.create_profile(name)
        click.echo(f"Created profile '{name}' (ID: {profile_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@profile_group.command("client")
@click.argument("name")
@click.option("--agent", required=True, help="Name of the managing profile")
@click.option("--company", "company_name", help="Client company name")
@click.option("--ird", "ird_number", help="Client IRD number")
@click.pass_context
def create_client(ctx, name: str, agent: str, company_name: str, ird_number: str):
    """Create a client managed by an agent profile.

    Clients without their own account table use the agent's.
    """
    service = ProfileService(ctx.obj["db"])
    try:
        profile_id = service.create_client(
            agent_name=agent,
            name=name,
            company_name=company_name,
            ird_number=ird_number,
        )
        click.echo(f"Created client '{name}' for '{agent}' (ID: {profile_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@profile_group.command("list")
@click.option("--agent", help="Only list this agent's clients")
@click.pass_context
def list_profiles(ctx, agent: str):
    """List profiles."""
    service = ProfileService(ctx.obj["db"])
    try:
        profiles = service.list_clients(agent) if agent else service.list_profiles()
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not profiles:
        click.echo("No profiles found.")
        return

    names = {p.id: p.name for p in service.list_profiles()}
    click.echo("\nProfiles:")
    for p in profiles:
        line = f"  {p.name} (ID: {p.id})"
        if p.company_name:
            line += f" - {p.company_name}"
        if p.ird_number:
            line += f" [IRD {p.ird_number}]"
        if p.agent_id is not None:
            line += f" (client of {names.get(p.agent_id, p.agent_id)})"
        click.echo(line)


def register_commands(cli):
    """Register profile commands with main CLI."""
    cli.add_command(profile_group, name="profile")
