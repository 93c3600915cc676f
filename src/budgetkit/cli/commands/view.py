"""Ledger view command."""

import click
from budgetkit.cli.error_handling import format_amount
from budgetkit.domain.ledger import LedgerService


@click.command("view")
@click.option("--unknown-only", is_flag=True, help="Only rows with an unclassified side")
@click.pass_context
def view_ledger(ctx, unknown_only: bool):
    """List ledger rows, one line per transaction side."""
    service = LedgerService(ctx.obj["db"])
    rows = service.list_rows(unresolved_only=unknown_only)

    if not rows:
        click.echo("No transactions found.")
        return

    click.echo(
        f"\n{'Row':<6} {'Side':<7} {'Date':<10}  {'Description':<32} {'Amount':>12}  {'Category':<20} {'Type':<8}"
    )
    click.echo("-" * 104)
    for row in rows:
        for side, txn in row.sides():
            if not txn.description and txn.amount == 0:
                continue
            if unknown_only and not txn.is_unresolved:
                continue
            date_str = txn.date.isoformat() if txn.date else ""
            description = txn.description[:32]
            click.echo(
                f"{row.id:<6} {side.value:<7} {date_str:<10}  {description:<32} "
                f"{format_amount(txn.amount):>12}  {txn.category or '-':<20} {txn.type or '-':<8}"
            )


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_ledger)
