"""Rule application and manual classification commands."""

import click
from budgetkit.cli.error_handling import handle_domain_error
from budgetkit.domain.entities import Side
from budgetkit.domain.errors import DomainError
from budgetkit.domain.ledger import LedgerService
from budgetkit.domain.sync import SyncService


@click.command("apply-rules")
@click.pass_context
def apply_rules(ctx):
    """Re-categorize the whole ledger with the saved rules."""
    service = SyncService(ctx.obj["db"], ctx.obj.get("sections"))
    matched = service.after_rule_save()
    click.echo(f"Applied rules: {matched} transactions categorized")


@click.command("classify")
@click.argument("row_id", type=int)
@click.argument("category")
@click.argument("category_type", metavar="TYPE")
@click.option(
    "--side",
    type=click.Choice([s.value for s in Side], case_sensitive=False),
    default=Side.DEBIT.value,
    help="Which side of the row (default: debit)",
)
@click.pass_context
def classify(ctx, row_id: int, category: str, category_type: str, side: str):
    """Set the category and type of one transaction by hand."""
    service = LedgerService(ctx.obj["db"])
    try:
        service.set_classification(row_id, Side(side.lower()), category, category_type)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Row {row_id} {side.lower()} side categorized as '{category}' ({category_type})")


def register_commands(cli):
    """Register categorization commands with main CLI."""
    cli.add_command(apply_rules)
    cli.add_command(classify)
