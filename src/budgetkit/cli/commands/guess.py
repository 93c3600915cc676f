"""Category suggestion command."""

import click
from budgetkit.cli.error_handling import handle_domain_error
from budgetkit.domain.catalog import CategoryCatalog
from budgetkit.domain.classifier import Classifier
from budgetkit.domain.errors import DomainError
from budgetkit.domain.rules import RuleStore


@click.command("guess")
@click.argument("descriptions", nargs=-1, required=True)
@click.pass_context
def guess_categories(ctx, descriptions: tuple[str, ...]):
    """Suggest categories for transaction descriptions. Nothing is saved."""
    db = ctx.obj["db"]
    try:
        catalog = CategoryCatalog(db).get_list()
    except DomainError as e:
        handle_domain_error(ctx, e)

    classifier = Classifier(RuleStore(db.property_store()), ctx.obj.get("sections"))
    for description, guess in zip(descriptions, classifier.guess_many(descriptions, catalog)):
        click.echo(f"{description}: {guess.category} ({guess.type}, confidence {guess.confidence})")


def register_commands(cli):
    """Register guess command with main CLI."""
    cli.add_command(guess_categories)
