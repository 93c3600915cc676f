"""CSV import command."""

import click
from budgetkit.cli.error_handling import handle_domain_error
from budgetkit.domain.csv_import import IMPORT_FIELDS, CSVImportService
from budgetkit.domain.errors import DomainError
from budgetkit.domain.sync import SyncService


def parse_mapping(ctx, mappings: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated field=column options."""
    result = {}
    for item in mappings:
        field, separator, column = item.partition("=")
        field = field.strip().lower()
        if not separator or not field or not column.strip():
            click.echo(f"Error: Invalid mapping '{item}'. Use field=column", err=True)
            ctx.exit(1)
        result[field] = column.strip()
    return result


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option("--delimiter", help="Field delimiter (detected when omitted)")
@click.option("--header/--no-header", default=None, help="First row holds column names")
@click.option(
    "--map",
    "mappings",
    multiple=True,
    help=f"Column mapping field=column, fields: {', '.join(IMPORT_FIELDS)}",
)
@click.option("--save-prefs", is_flag=True, help="Remember delimiter, header and mapping")
@click.pass_context
def import_csv(ctx, csv_file: str, delimiter: str | None, header: bool | None, mappings, save_prefs: bool):
    """Import transactions from a bank CSV export."""
    db = ctx.obj["db"]
    service = CSVImportService(db)

    prefs = service.get_preferences()
    mapping = parse_mapping(ctx, mappings) if mappings else prefs.get("mapping", {})
    if delimiter is None:
        delimiter = prefs.get("delimiter")
    if header is None:
        header = bool(prefs.get("has_header", False))

    if not mapping:
        click.echo("Error: No column mapping given and none saved. Use --map field=column", err=True)
        ctx.exit(1)

    try:
        result = service.import_csv(
            csv_file_path=csv_file,
            mapping=mapping,
            delimiter=delimiter,
            has_header=header,
        )
    except (DomainError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)

    if save_prefs:
        service.save_preferences({"delimiter": delimiter, "has_header": header, "mapping": mapping})

    matched = 0
    if result["inserted"]:
        matched = SyncService(db, ctx.obj.get("sections")).after_import()

    click.echo(f"\nImport complete:")
    click.echo(f"  Inserted: {result['inserted']} rows")
    if result["inserted"]:
        click.echo(f"  Rows: {result['first_row']}-{result['last_row']}")
    click.echo(f"  Skipped: {result['skipped']} empty rows")
    if result["dropped"]:
        click.echo(f"  Dropped: {result['dropped']} unparseable rows")
    click.echo(f"  Categorized by rules: {matched}")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
