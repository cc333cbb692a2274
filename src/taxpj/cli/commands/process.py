"""Statement processing command."""

from pathlib import Path

import click
from taxpj.cli.error_handling import handle_domain_error
from taxpj.clients.gemini import DEFAULT_MODEL, GeminiClient
from taxpj.domain import state as app_state
from taxpj.domain.entities import DashboardStats, LedgerSection, MonthlyGroup
from taxpj.domain.errors import DomainError
from taxpj.domain.export import generate_export
from taxpj.domain.extraction import DocumentExtractor
from taxpj.domain.ledger import LedgerService
from taxpj.domain.profile import ProfileService
from taxpj.domain.statement_import import PARSER_AUTO, PARSERS, ImportService
from taxpj.domain.summary import SummaryService
from taxpj.utils.formatting import format_currency
from taxpj.utils.date_parser import format_statement_date
from taxpj.utils.profile_resolver import resolve_profile


VIEWS = ("dashboard", "ledger", "darf", "all")


@click.command("process")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--profile", "-p", required=True, help="Bank profile name or ID the statements belong to")
@click.option(
    "--parser",
    type=click.Choice(PARSERS),
    default=PARSER_AUTO,
    show_default=True,
    help="How to read the files (auto picks by file extension)",
)
@click.option(
    "--view",
    type=click.Choice(VIEWS),
    default="dashboard",
    show_default=True,
    help="Report to display",
)
@click.option(
    "--export",
    "export_path",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the semicolon-delimited tax report to this file",
)
@click.option(
    "--api-key",
    envvar="GEMINI_API_KEY",
    help="Gemini API key, needed for PDF and image statements",
)
@click.option(
    "--model",
    envvar="TAXPJ_GEMINI_MODEL",
    default=DEFAULT_MODEL,
    show_default=True,
    help="Gemini model used to read PDF and image statements",
)
@click.pass_context
def process(
    ctx,
    files: tuple[str, ...],
    profile: str,
    parser: str,
    view: str,
    export_path: str | None,
    api_key: str | None,
    model: str,
):
    """Import statements and report taxes and ledger entries.

    FILES are processed in order; the first file that fails aborts the batch.

    Examples:
        taxpj process extrato.ofx --profile "BANCO DO BRASIL"
        taxpj process dez.pdf jan.pdf --profile 1735689600000 --view all
        taxpj process extrato.ret --profile BB --export darf.csv
    """
    db = ctx.obj["db"]
    profile_service = ProfileService(db)

    try:
        config_profile = resolve_profile(profile_service, profile)

        extractor = None
        if api_key:
            extractor = DocumentExtractor(GeminiClient(api_key=api_key, model=model))

        state = app_state.AppState(profiles=tuple(profile_service.list_profiles()))
        result = ImportService(extractor).import_files(files, config_profile, parser)
        state = app_state.append_transactions(state, result.transactions)

        summary = SummaryService()
        groups = summary.group_by_month(state.transactions)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    for record in result.records:
        click.echo(f"Imported {record.count} transaction(s) from {record.file_name}")

    if view in ("dashboard", "all"):
        _show_dashboard(groups, summary.global_stats(groups))
    if view in ("ledger", "all"):
        _show_ledger(LedgerService(state.profiles).build_sections(groups))
    if view in ("darf", "all"):
        _show_darf(summary, groups)

    if export_path:
        report = generate_export(state.transactions, summary.calculations(state.transactions))
        Path(export_path).write_text(report, encoding="utf-8")
        click.echo(f"\nTax report written to {export_path}")


def _show_dashboard(groups: list[MonthlyGroup], totals: DashboardStats):
    click.echo("\nSummary by competence month:")
    click.echo("-" * 110)
    click.echo(
        f"{'Month':<22} {'Invested':>16} {'Yield':>16} {'IRRF':>14} "
        f"{'IRPJ':>14} {'CSLL':>12} {'DARF':>14}"
    )
    click.echo("-" * 110)
    for group in groups:
        click.echo(_stats_row(group.label, group.stats))
    click.echo("-" * 110)
    click.echo(_stats_row("Total", totals))


def _stats_row(label: str, stats: DashboardStats) -> str:
    return (
        f"{label:<22} {format_currency(stats.total_invested):>16} "
        f"{format_currency(stats.total_yield):>16} {format_currency(stats.total_irrf):>14} "
        f"{format_currency(stats.total_irpj):>14} {format_currency(stats.total_csll):>12} "
        f"{format_currency(stats.final_tax_balance):>14}"
    )


def _show_ledger(sections: list[LedgerSection]):
    for section in sections:
        click.echo(f"\nLedger - {section.label} - {section.profile.name}")
        click.echo("-" * 120)
        click.echo(f"{'Date':<12} {'Debit':<8} {'Credit':<8} {'Amount':>16}  History")
        click.echo("-" * 120)
        for line in section.lines:
            click.echo(
                f"{format_statement_date(line.date):<12} {line.debit:<8} {line.credit:<8} "
                f"{format_currency(line.amount):>16}  {line.history}"
            )


def _show_darf(summary: SummaryService, groups: list[MonthlyGroup]):
    for group in groups:
        click.echo(f"\nDARF - {group.label}")
        click.echo("-" * 60)
        for line in summary.darf_memory(group):
            label = line.label.upper() if line.emphasis else line.label
            click.echo(f"{label:<40} {format_currency(line.amount):>18}")


def register_commands(cli):
    """Register process command with main CLI."""
    cli.add_command(process)
