"""Category catalog commands."""

import click
from budgetkit.cli.error_handling import handle_domain_error
from budgetkit.domain.catalog import SETTINGS_TABLES, CategoryCatalog
from budgetkit.domain.errors import DomainError


@click.group()
def catalog_group():
    """Manage the category catalog."""
    pass


@catalog_group.command("rebuild")
@click.pass_context
def rebuild_catalog(ctx):
    """Flatten the settings tables and publish the category list."""
    service = CategoryCatalog(ctx.obj["db"])
    try:
        categories = service.rebuild()
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Published {len(categories)} categories")


@catalog_group.command("list")
@click.pass_context
def list_catalog(ctx):
    """List the flattened category catalog."""
    service = CategoryCatalog(ctx.obj["db"])
    try:
        categories = service.get_list()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not categories:
        click.echo("No categories found.")
        return

    click.echo(f"\n{'Category':<30} {'Type':<10} {'Table':<16}")
    click.echo("-" * 58)
    for entry in categories:
        click.echo(f"{entry.category:<30} {entry.type:<10} {entry.table:<16}")


@catalog_group.command("add")
@click.argument("table", type=click.Choice(SETTINGS_TABLES, case_sensitive=False))
@click.argument("name")
@click.option("--type", "category_type", required=True, help="Need, Want, Savings, Debt or Income")
@click.pass_context
def add_category(ctx, table: str, name: str, category_type: str):
    """Add a category to a settings table."""
    service = CategoryCatalog(ctx.obj["db"])
    # click.Choice returns the declared casing
    try:
        service.add_category(table, name, category_type)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added '{name.strip()}' to {table}. Run 'catalog rebuild' to publish it.")


def register_commands(cli):
    """Register catalog commands with main CLI."""
    cli.add_command(catalog_group, name="catalog")
