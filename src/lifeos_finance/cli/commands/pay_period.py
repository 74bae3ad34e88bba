"""Pay period commands."""

from datetime import date

import click

from lifeos_finance.cli.error_handling import fail, handle_domain_error
from lifeos_finance.domain.errors import DomainError, pay_period_not_configured
from lifeos_finance.domain.periods import make_pay_period_config, pay_period_containing
from lifeos_finance.utils.date_parser import parse_date


@click.group()
def pay_period_group():
    """Configure pay periods."""
    pass


@pay_period_group.command("show")
@click.pass_context
def show_config(ctx):
    """Show the pay period configuration."""
    config = ctx.obj["uow"].pay_period_config.get()
    if config is None:
        click.echo(pay_period_not_configured())
        return
    click.echo(f"Anchor date: {config.anchor_date}")
    click.echo(f"Period length: {config.period_length_days} days")


@pay_period_group.command("set")
@click.argument("anchor", metavar="ANCHOR_DATE")
@click.option("--length", type=int, default=14, show_default=True, help="Period length in days")
@click.pass_context
def set_config(ctx, anchor: str, length: int):
    """Set the pay period anchor (a known pay date) and length.

    Examples:
        lifeos-finance pay-period set 2025-01-03
        lifeos-finance pay-period set 2025-01-01 --length 7
    """
    try:
        config = make_pay_period_config(parse_date(anchor), length)
        ctx.obj["uow"].pay_period_config.save(config)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Pay periods anchored at {config.anchor_date}, every {config.period_length_days} days")


@pay_period_group.command("current")
@click.option("--date", "on_date", help="Day to look up (YYYY-MM-DD or 'today', 'yesterday')")
@click.pass_context
def current_period(ctx, on_date: str | None):
    """Show the pay period containing a day (today by default)."""
    config = ctx.obj["uow"].pay_period_config.get()
    if config is None:
        fail(ctx, pay_period_not_configured())
        return
    try:
        day = parse_date(on_date) if on_date else date.today()
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    period = pay_period_containing(config, day)
    click.echo(f"{period.period_key}: {period.start_date} to {period.end_date}")


def register_commands(cli):
    """Register pay period commands with main CLI."""
    cli.add_command(pay_period_group, name="pay-period")
