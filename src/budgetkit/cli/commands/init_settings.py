"""Initialize default settings tables."""

import click
from budgetkit.domain.catalog import CategoryCatalog


# (settings table, category, type)
DEFAULT_SETTINGS = [
    ("Income", "Salary", "Income"),
    ("Income", "Interest Income", "Income"),
    ("Income", "Other Income", "Income"),
    ("Residence", "Rent", "Need"),
    ("Residence", "Utilities", "Need"),
    ("Residence", "Internet", "Need"),
    ("Residence", "Home Insurance", "Need"),
    ("Transportation", "Fuel", "Need"),
    ("Transportation", "Parking", "Need"),
    ("Transportation", "Transit", "Need"),
    ("Transportation", "Car Insurance", "Need"),
    ("Daily Living", "Groceries", "Need"),
    ("Daily Living", "Restaurants", "Want"),
    ("Daily Living", "Shopping", "Want"),
    ("Daily Living", "Subscriptions", "Want"),
    ("Banking", "Service Fee", "Need"),
    ("Banking", "ATM", "Want"),
    ("Health", "Pharmacy", "Need"),
    ("Health", "Dental", "Need"),
    ("Health", "Gym", "Want"),
    ("Vacation", "Hotel", "Want"),
    ("Vacation", "Flight", "Want"),
    ("Debt", "Credit Card", "Debt"),
    ("Debt", "Student Loan", "Debt"),
    ("Savings", "TFSA", "Savings"),
    ("Savings", "RRSP", "Savings"),
]


@click.command("init-settings")
@click.option("--force", is_flag=True, help="Replace existing settings tables")
@click.pass_context
def init_settings(ctx, force: bool):
    """Initialize the settings tables with a starter set of categories."""
    db = ctx.obj["db"]
    service = CategoryCatalog(db)

    if service.has_settings():
        if not force:
            click.echo("Settings tables already exist. Use --force to replace them.")
            return
        service.reset()

    for table, category, category_type in DEFAULT_SETTINGS:
        service.add_category(table, category, category_type)

    categories = service.rebuild()
    click.echo(f"Created {len(DEFAULT_SETTINGS)} settings rows; published {len(categories)} categories")


def register_commands(cli):
    """Register init-settings command with main CLI."""
    cli.add_command(init_settings)
