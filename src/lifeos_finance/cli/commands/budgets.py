"""Budget commands."""

import click

from lifeos_finance.cli.error_handling import handle_domain_error
from lifeos_finance.domain.errors import DomainError


@click.group()
def budgets_group():
    """Inspect budgets."""
    pass


@budgets_group.command("list")
@click.argument("period_key", metavar="PERIOD_KEY")
@click.pass_context
def list_budgets(ctx, period_key: str):
    """List the budgets of one period.

    PERIOD_KEY is "YYYY-MM" for a month, or a prefixed start date such as
    "pp-2025-01-03" for a pay period.
    """
    try:
        budgets = ctx.obj["uow"].budgets.get_by_period_key(period_key)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not budgets:
        click.echo(f"No budgets found for period {period_key}.")
        return

    first = budgets[0].period
    click.echo(f"\nBudgets for {period_key} ({first.start_date} to {first.end_date}):")
    click.echo("-" * 72)
    for budget in budgets:
        flag = " OVER" if budget.is_over_budget else ""
        click.echo(
            f"{budget.category_id:16s} | budgeted {budget.budgeted_amount:>10} | "
            f"spent {budget.spent_amount:>10} | remaining {budget.remaining_amount:>10}{flag}"
        )


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budgets_group, name="budgets")
