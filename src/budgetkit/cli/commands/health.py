"""Workbook health check command."""

import click
from budgetkit.domain.catalog import SETTINGS_TABLES
from budgetkit.domain.sync import SyncService


@click.command("health")
@click.pass_context
def health_check(ctx):
    """Report what the workbook holds."""
    report = SyncService(ctx.obj["db"], ctx.obj.get("sections")).health()

    click.echo("Health Check\n")
    if report.settings_tables:
        click.echo(f"Settings tables found: {len(report.settings_tables)} of {len(SETTINGS_TABLES)}")
        missing = [t for t in SETTINGS_TABLES if t not in report.settings_tables]
        if missing:
            click.echo(f"  Empty tables: {', '.join(missing)}")
    else:
        click.echo("Settings tables missing.")
    click.echo(f"Categories loaded: {report.categories}")
    click.echo(f"Ledger rows: {report.ledger_rows}")
    click.echo(f"Saved rules: {report.rules}")
    click.echo(f"Unknown transaction groups: {report.unknown_groups}")


def register_commands(cli):
    """Register health command with main CLI."""
    cli.add_command(health_check)
