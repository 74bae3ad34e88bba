"""Main CLI entry point."""

import click

from lifeos_finance.cli.commands import accounts, audit, budgets, pay_period
from lifeos_finance.database.factories import create_sqlite_store
from lifeos_finance.logging_setup import configure_logging
from lifeos_finance.repositories import FinanceUnitOfWork


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LIFEOS_DB_PATH environment variable)",
    envvar="LIFEOS_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log store activity to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """LifeOS finance - inspect and maintain the finance document store."""
    ctx.ensure_object(dict)

    if verbose:
        configure_logging("DEBUG")

    # Open the store only when actually running a command (not for --help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path)
        store.connect()
        store.initialize_schema()
        ctx.obj["store"] = store
        ctx.obj["uow"] = FinanceUnitOfWork.from_store(store)
        ctx.call_on_close(store.disconnect)


accounts.register_commands(cli)
budgets.register_commands(cli)
pay_period.register_commands(cli)
audit.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()
