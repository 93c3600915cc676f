"""Category rename command."""

import click
from budgetkit.cli.error_handling import handle_domain_error
from budgetkit.domain.errors import DomainError
from budgetkit.domain.sync import SyncService


@click.command("rename")
@click.argument("old_name")
@click.argument("new_name")
@click.option("--type", "new_type", help="Also change the category type")
@click.pass_context
def rename_category(ctx, old_name: str, new_name: str, new_type: str | None):
    """Rename a category in settings, ledger and rules."""
    service = SyncService(ctx.obj["db"], ctx.obj.get("sections"))
    try:
        result = service.rename(old_name, new_name, new_type)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Renamed '{old_name}' to '{new_name}':")
    click.echo(f"  Settings rows: {result.settings_updated}")
    click.echo(f"  Transactions: {result.ledger_updated}")
    click.echo(f"  Rules: {result.rules_updated}")


def register_commands(cli):
    """Register rename command with main CLI."""
    cli.add_command(rename_category)
