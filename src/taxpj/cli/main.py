"""Main CLI entry point."""

import click
from taxpj.database.factories import create_sqlite_database
from taxpj.logging_config import configure_logging

# Import and register all commands at module level
from taxpj.cli.commands import profile, process, calc


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides TAXPJ_DB_PATH environment variable)",
    envvar="TAXPJ_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="TAXPJ_LOG_LEVEL",
    help="Log level for diagnostics written to stderr",
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default="console",
    envvar="TAXPJ_LOG_FORMAT",
    help="Log output format",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str, log_format: str):
    """TaxPJ - Corporate tax and ledger from investment statements.

    Import bank and investment statements (PDF, image, OFX or fixed-width
    bank files) and compute IRPJ, CSLL and IRRF under Lucro Presumido,
    with the matching accounting entries.
    """
    ctx.ensure_object(dict)

    # Initialize logging and database only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        configure_logging(level=log_level.upper(), format=log_format)
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
profile.register_commands(cli)
process.register_commands(cli)
calc.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
