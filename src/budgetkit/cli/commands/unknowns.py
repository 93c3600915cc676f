"""Unknown transaction discovery command."""

import click
from budgetkit.cli.error_handling import format_amount
from budgetkit.domain.unknowns import UnknownScanner


@click.command("unknowns")
@click.pass_context
def list_unknowns(ctx):
    """Group transactions that still need a category."""
    groups = UnknownScanner(ctx.obj["db"]).scan()

    if not groups:
        click.echo("No unknown transactions.")
        return

    click.echo(f"\n{'Description':<40} {'Count':>5} {'Avg debit':>12} {'Avg credit':>12}  Dir")
    click.echo("-" * 78)
    for group in groups:
        click.echo(
            f"{group.description[:40]:<40} {group.count:>5} "
            f"{format_amount(group.average_debit):>12} {format_amount(group.average_credit):>12}  "
            f"{group.direction.value}"
        )
    click.echo(f"\n{len(groups)} groups, {sum(g.count for g in groups)} transactions")


def register_commands(cli):
    """Register unknowns command with main CLI."""
    cli.add_command(list_unknowns)
