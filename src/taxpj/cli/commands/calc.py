"""Ad-hoc tax calculation command."""

import click
from taxpj.cli.error_handling import handle_domain_error
from taxpj.domain.entities import (
    AssetType,
    EntryType,
    TaxRegime,
    Transaction,
    TransactionType,
)
from taxpj.domain.errors import DomainError
from taxpj.domain.tax import calculate_tax
from taxpj.utils.amount_parser import parse_amount
from taxpj.utils.formatting import format_currency


@click.command("calc")
@click.option("--yield", "yield_amount", required=True, help="Gross yield of the redemption")
@click.option("--irrf", default="0", show_default=True, help="IRRF withheld by the bank")
@click.option(
    "--regime",
    type=click.Choice([regime.value for regime in TaxRegime], case_sensitive=False),
    default=TaxRegime.LUCRO_PRESUMIDO.value,
    show_default=True,
    help="Tax regime of the company",
)
@click.option(
    "--asset-type",
    type=click.Choice([asset.value for asset in AssetType], case_sensitive=False),
    default=AssetType.RENDA_FIXA.value,
    show_default=True,
    help="Asset class, used for the legal reference",
)
@click.pass_context
def calc(ctx, yield_amount: str, irrf: str, regime: str, asset_type: str):
    """Calculate the tax due on a single redemption.

    Examples:
        taxpj calc --yield 80 --irrf 12
        taxpj calc --yield 25000,00 --irrf 3750,00
    """
    try:
        gross_yield = parse_amount(yield_amount)
        irrf_retained = parse_amount(irrf)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    transaction = Transaction(
        id="CALC",
        import_id="CALC",
        profile_id="",
        source_file_name="",
        date="",
        description="RESGATE",
        amount=abs(gross_yield),
        type=TransactionType.CREDIT,
        entry_type=EntryType.REDEMPTION,
        asset_type=AssetType(asset_type.upper()),
        yield_amount=abs(gross_yield),
        irrf_retained=abs(irrf_retained),
    )

    try:
        result = calculate_tax(transaction, TaxRegime(regime.upper()))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Gross yield:         {format_currency(result.gross_yield):>18}")
    click.echo(f"IRRF withheld:       {format_currency(result.irrf_amount):>18}")
    click.echo(f"IRPJ (15%):          {format_currency(result.irpj_base):>18}")
    click.echo(f"IRPJ surcharge:      {format_currency(result.irpj_surcharge):>18}")
    click.echo(f"CSLL (9%):           {format_currency(result.csll_amount):>18}")
    click.echo(f"Net to pay:          {format_currency(result.net_to_pay):>18}")
    click.echo(f"Legal basis: {result.law_reference}")


def register_commands(cli):
    """Register calc command with main CLI."""
    cli.add_command(calc)
