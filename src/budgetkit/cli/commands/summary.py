"""Period summary and full refresh commands."""

import json
from datetime import date

import click
from budgetkit.cli.error_handling import format_amount, handle_domain_error
from budgetkit.domain.entities import AggregatedTotals
from budgetkit.domain.errors import DomainError, invalid_period
from budgetkit.domain.summary import SummaryService
from budgetkit.domain.sync import SyncService
from budgetkit.utils.date_parser import MONTHS, period_labels


def totals_to_dict(totals: AggregatedTotals) -> dict:
    """JSON-friendly view of aggregated totals."""
    return {
        "start": totals.window.start.isoformat(),
        "end": totals.window.end.isoformat(),
        "income": str(totals.income),
        "spending": str(totals.spending),
        "net": str(totals.net),
        "buckets": {name: str(value) for name, value in totals.buckets.items()},
        "sections": {name: str(value) for name, value in totals.sections.items()},
        "trend": [
            {
                "month": MONTHS[point.month - 1],
                "income": str(point.income),
                "spending": str(point.spending),
            }
            for point in totals.trend
        ],
        "categories": {
            "income": {k: str(v) for k, v in totals.breakdown.income.items()},
            "savings": {k: str(v) for k, v in totals.breakdown.savings.items()},
            "expenses": {k: str(v) for k, v in totals.breakdown.expenses.items()},
        },
    }


def _display_totals(period: str, totals: AggregatedTotals) -> None:
    """Print totals as aligned tables."""
    window = totals.window
    click.echo(f"\n{period} ({window.start.isoformat()} to {window.end.isoformat()})")
    click.echo("=" * 44)
    click.echo(f"{'Income':<24} {format_amount(totals.income):>18}")
    click.echo(f"{'Spending':<24} {format_amount(totals.spending):>18}")
    click.echo(f"{'Net':<24} {format_amount(totals.net):>18}")

    click.echo("\nBy type")
    click.echo("-" * 44)
    for name, value in totals.buckets.items():
        click.echo(f"{name:<24} {format_amount(value):>18}")

    click.echo("\nBy section")
    click.echo("-" * 44)
    for name, value in totals.sections.items():
        click.echo(f"{name:<24} {format_amount(value):>18}")

    click.echo(f"\nMonthly trend {window.year}")
    click.echo("-" * 44)
    click.echo(f"{'Month':<12} {'Income':>15} {'Spending':>15}")
    for point in totals.trend:
        click.echo(
            f"{MONTHS[point.month - 1]:<12} {format_amount(point.income):>15} "
            f"{format_amount(point.spending):>15}"
        )


def _echo_totals(period: str, totals: AggregatedTotals, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(totals_to_dict(totals), indent=2))
    else:
        _display_totals(period, totals)


def _invalid_period(ctx, period: str, year: int) -> None:
    click.echo(f"Error: {invalid_period(period, year)}", err=True)
    click.echo(f"Valid periods: {', '.join(period_labels())}", err=True)
    ctx.exit(1)


@click.command("summary")
@click.option("--period", required=True, help="Annual, Q1-Q4, First Quarter..Fourth Quarter, or a month name")
@click.option("--year", type=int, default=None, help="Calendar year (default: current year)")
@click.option("--json", "as_json", is_flag=True, help="Print totals as JSON")
@click.pass_context
def summary(ctx, period: str, year: int | None, as_json: bool):
    """Show income, spending, type and section totals for a period."""
    year = year or date.today().year
    service = SummaryService(ctx.obj["db"], ctx.obj.get("sections"))

    totals = service.refresh(period, year)
    if totals is None:
        _invalid_period(ctx, period, year)
    _echo_totals(period, totals, as_json)


@click.command("refresh")
@click.option("--period", required=True, help="Annual, Q1-Q4, First Quarter..Fourth Quarter, or a month name")
@click.option("--year", type=int, default=None, help="Calendar year (default: current year)")
@click.option("--json", "as_json", is_flag=True, help="Print totals as JSON")
@click.pass_context
def refresh(ctx, period: str, year: int | None, as_json: bool):
    """Rebuild categories, re-apply rules and recompute totals."""
    year = year or date.today().year
    service = SyncService(ctx.obj["db"], ctx.obj.get("sections"))

    try:
        totals = service.refresh_system(period, year)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if totals is None:
        _invalid_period(ctx, period, year)
    if not as_json:
        click.echo("System refreshed.")
    _echo_totals(period, totals, as_json)


def register_commands(cli):
    """Register summary and refresh commands with main CLI."""
    cli.add_command(summary)
    cli.add_command(refresh)
