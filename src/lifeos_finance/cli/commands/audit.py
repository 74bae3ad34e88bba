"""Audit command reporting documents that cannot be read."""

import click


@click.command("audit")
@click.pass_context
def audit(ctx):
    """Check every collection for documents that fail to map.

    Exits with status 1 when any invalid document is found.
    """
    uow = ctx.obj["uow"]
    repositories = [
        uow.accounts,
        uow.transactions,
        uow.categories,
        uow.merchants,
        uow.budgets,
        uow.journal_entries,
        uow.receipts,
        uow.reconciliations,
    ]

    invalid = 0
    for repository in repositories:
        result = repository.audit()
        click.echo(f"{repository.collection:28s} {len(result):6d} valid  {len(result.skipped):4d} skipped")
        for skipped in result.skipped:
            click.echo(f"    {skipped.key or '<no key>'}: {skipped.reason}")
        invalid += len(result.skipped)

    pay_period_config = uow.pay_period_config
    stored = ctx.obj["store"].count(pay_period_config.collection)
    if stored and pay_period_config.get() is None:
        click.echo(f"{pay_period_config.collection:28s} configuration is invalid")
        invalid += 1

    if invalid:
        click.echo(f"\n{invalid} invalid document(s) found.")
        ctx.exit(1)
    click.echo("\nAll documents are valid.")


def register_commands(cli):
    """Register the audit command with main CLI."""
    cli.add_command(audit)
