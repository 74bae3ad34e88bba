"""Account commands."""

import click

from lifeos_finance.cli.error_handling import fail, handle_domain_error
from lifeos_finance.domain.errors import DomainError, account_not_found
from lifeos_finance.utils.amount_parser import parse_amount


@click.group()
def accounts_group():
    """Inspect accounts and adjust balances."""
    pass


@accounts_group.command("list")
@click.option("--active", is_flag=True, help="Only show active accounts")
@click.pass_context
def list_accounts(ctx, active: bool):
    """List accounts sorted by name."""
    repository = ctx.obj["uow"].accounts
    accounts = repository.get_active() if active else repository.get_all()

    if not accounts:
        click.echo("No accounts found.")
    else:
        click.echo("\nAccounts:")
        click.echo("-" * 72)
        for acc in accounts:
            status = "" if acc.is_active else " (inactive)"
            click.echo(
                f"{acc.id:12s} | {acc.name:24s} | {acc.account_type.value:10s} | "
                f"{acc.current_balance:>12} {acc.currency}{status}"
            )

    if accounts.skipped:
        click.echo(f"\n{len(accounts.skipped)} invalid account document(s) skipped; run 'audit' for details.")


@accounts_group.command("adjust")
@click.argument("account_id", metavar="ACCOUNT_ID")
@click.argument("amount", metavar="AMOUNT")
@click.pass_context
def adjust_balance(ctx, account_id: str, amount: str):
    """Add AMOUNT to an account's current balance.

    AMOUNT may be negative. The update is applied atomically in the store.

    Examples:
        lifeos-finance accounts adjust acc1 -25.50
        lifeos-finance accounts adjust acc1 "(12.00)"
    """
    repository = ctx.obj["uow"].accounts
    try:
        delta = parse_amount(amount)
        if not repository.update_balance(account_id, delta):
            fail(ctx, account_not_found(account_id))
            return
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    account = repository.get_by_id(account_id)
    if account is None:
        click.echo(f"Adjusted account {account_id} by {delta}")
    else:
        click.echo(f"Adjusted '{account.name}' by {delta}; balance is now {account.current_balance}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(accounts_group, name="accounts")
