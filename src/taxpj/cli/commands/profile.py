"""Bank profile management commands."""

import click
from taxpj.cli.error_handling import handle_domain_error
from taxpj.domain.entities import LayoutType
from taxpj.domain.errors import DomainError
from taxpj.domain.profile import ProfileService
from taxpj.utils.profile_resolver import resolve_profile


LAYOUT_CHOICES = click.Choice([layout.value for layout in LayoutType], case_sensitive=False)


@click.group()
def profile_group():
    """Manage bank profiles."""
    pass


@profile_group.command("create")
@click.option("--layout", type=LAYOUT_CHOICES, help="Statement layout of the bank")
@click.option("--name", help="Bank name (defaults to the layout's bank name)")
@click.option("--bank-code", help="Ledger account code of the bank")
@click.option("--asset-code", help="Ledger account code of the investment asset")
@click.option("--liability-code", help="Ledger account code of the financial revenue")
@click.pass_context
def create_profile(
    ctx,
    layout: str | None,
    name: str | None,
    bank_code: str | None,
    asset_code: str | None,
    liability_code: str | None,
):
    """Create a bank profile.

    Examples:
        taxpj profile create --layout BANCO_DO_BRASIL_INVEST --bank-code 5 --asset-code 120 --liability-code 410
        taxpj profile create --layout GENERIC_INVESTMENT --name "Banco Inter" --bank-code 7 --asset-code 121 --liability-code 411
    """
    db = ctx.obj["db"]
    service = ProfileService(db)

    try:
        profile = service.create_profile(
            name=name,
            bank_code=bank_code or "",
            asset_code=asset_code or "",
            liability_code=liability_code or "",
            layout_type=layout.upper() if layout else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created bank profile '{profile.name}' (ID: {profile.id})")


@profile_group.command("list")
@click.pass_context
def list_profiles(ctx):
    """List bank profiles."""
    db = ctx.obj["db"]
    service = ProfileService(db)

    profiles = service.list_profiles()
    if not profiles:
        click.echo("No bank profiles found.")
        return

    click.echo("\nBank profiles:")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<15} {'Name':<20} {'Bank':<8} {'Asset':<8} {'Revenue':<8} {'Layout':<35}"
    )
    click.echo("-" * 100)
    for p in profiles:
        click.echo(
            f"{p.id:<15} {p.name:<20} {p.bank_code:<8} {p.asset_code:<8} "
            f"{p.liability_code:<8} {p.layout_type.display_name:<35}"
        )


@profile_group.command("edit")
@click.argument("profile", metavar="PROFILE")
@click.option("--name", help="New bank name")
@click.option("--layout", type=LAYOUT_CHOICES, help="New layout (account codes must be given again)")
@click.option("--bank-code", help="New bank account code")
@click.option("--asset-code", help="New asset account code")
@click.option("--liability-code", help="New revenue account code")
@click.pass_context
def edit_profile(
    ctx,
    profile: str,
    name: str | None,
    layout: str | None,
    bank_code: str | None,
    asset_code: str | None,
    liability_code: str | None,
):
    """Edit a bank profile.

    PROFILE can be a profile name or ID.
    """
    db = ctx.obj["db"]
    service = ProfileService(db)

    try:
        existing = resolve_profile(service, profile)
        updated = service.update_profile(
            existing.id,
            name=name,
            bank_code=bank_code,
            asset_code=asset_code,
            liability_code=liability_code,
            layout_type=layout.upper() if layout else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated bank profile '{updated.name}'")


@profile_group.command("delete")
@click.argument("profile", metavar="PROFILE")
@click.pass_context
def delete_profile(ctx, profile: str):
    """Delete a bank profile.

    PROFILE can be a profile name or ID. Transactions imported with it
    keep referencing its ID and are booked under a removed-bank placeholder.
    """
    db = ctx.obj["db"]
    service = ProfileService(db)

    try:
        existing = resolve_profile(service, profile)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not click.confirm(f"Remove bank profile '{existing.name}' (ID: {existing.id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.remove_profile(existing.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted bank profile '{existing.name}'")


@profile_group.command("clear")
@click.pass_context
def clear_profiles(ctx):
    """Delete every bank profile."""
    db = ctx.obj["db"]
    service = ProfileService(db)

    if not click.confirm("Remove ALL bank profiles?"):
        click.echo("Clear cancelled.")
        return

    service.clear_profiles()
    click.echo("All bank profiles removed.")


def register_commands(cli):
    """Register profile commands with main CLI."""
    cli.add_command(profile_group, name="profile")
