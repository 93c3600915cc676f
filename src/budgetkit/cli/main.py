"""Main CLI entry point."""

import click
from budgetkit.database.factories import create_sqlite_database
from budgetkit.domain.errors import ConfigurationError
from budgetkit.domain.sections import SECTIONS_ENV_VAR, load_section_map
from budgetkit.cli.error_handling import handle_domain_error
from budgetkit.utils.config_logging import configure_logging

# Import and register all commands at module level
from budgetkit.cli.commands import (
    init_settings,
    catalog,
    import_cmd,
    view,
    categorize,
    unknowns,
    rule,
    guess,
    summary,
    rename,
    health,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BUDGETKIT_DB_PATH environment variable)",
    envvar="BUDGETKIT_DB_PATH",
)
@click.option(
    "--sections",
    "sections_path",
    type=click.Path(),
    help="YAML file with the section keyword table",
    envvar=SECTIONS_ENV_VAR,
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, sections_path: str | None, verbose: bool):
    """Budgetkit - Personal budgeting ledger.

    Import bank CSV exports, categorize transactions with keyword rules,
    and total them by period, budget type and section.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            ctx.obj["sections"] = load_section_map(sections_path)
        except ConfigurationError as e:
            handle_domain_error(ctx, e)
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
init_settings.register_commands(cli)
catalog.register_commands(cli)
import_cmd.register_commands(cli)
view.register_commands(cli)
categorize.register_commands(cli)
unknowns.register_commands(cli)
rule.register_commands(cli)
guess.register_commands(cli)
summary.register_commands(cli)
rename.register_commands(cli)
health.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
