"""Saved rule commands."""

import click
from budgetkit.cli.error_handling import handle_domain_error
from budgetkit.domain.entities import Direction
from budgetkit.domain.errors import DomainError
from budgetkit.domain.rules import RuleStore
from budgetkit.domain.sync import SyncService


@click.group()
def rule_group():
    """Manage keyword rules."""
    pass


@rule_group.command("save")
@click.argument("keyword")
@click.argument("category")
@click.argument("category_type", metavar="TYPE")
@click.option(
    "--direction",
    type=click.Choice([d.value for d in Direction], case_sensitive=False),
    default=Direction.ANY.value,
    help="Only match money going in or out (default: any)",
)
@click.option("--no-apply", is_flag=True, help="Don't re-categorize the ledger afterwards")
@click.pass_context
def save_rule(ctx, keyword: str, category: str, category_type: str, direction: str, no_apply: bool):
    """Save a rule mapping an exact description to a category and type."""
    db = ctx.obj["db"]
    store = RuleStore(db.property_store())
    try:
        saved = store.save(keyword, category, category_type, direction)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Saved rule {saved.key} -> {saved.category} ({saved.type})")

    if not no_apply:
        matched = SyncService(db, ctx.obj.get("sections")).after_rule_save()
        click.echo(f"Applied rules: {matched} transactions categorized")


@rule_group.command("list")
@click.pass_context
def list_rules(ctx):
    """List saved rules."""
    rules = RuleStore(ctx.obj["db"].property_store()).get_all()
    if not rules:
        click.echo("No rules saved.")
        return

    click.echo(f"\n{'Keyword':<36} {'Dir':<4} {'Category':<24} {'Type':<8}")
    click.echo("-" * 75)
    for rule in rules:
        click.echo(f"{rule.keyword[:36]:<36} {rule.direction:<4} {rule.category:<24} {rule.type:<8}")


@rule_group.command("delete")
@click.argument("keys", nargs=-1, required=True)
@click.pass_context
def delete_rules(ctx, keys: tuple[str, ...]):
    """Delete rules by KEYWORD|DIRECTION key."""
    removed = RuleStore(ctx.obj["db"].property_store()).delete_specific(keys)
    click.echo(f"Deleted {removed} rule{'s' if removed != 1 else ''}")


@rule_group.command("clear")
@click.option("--yes", is_flag=True, help="Confirm deleting every rule")
@click.pass_context
def clear_rules(ctx, yes: bool):
    """Delete every saved rule."""
    if not yes:
        click.echo("Error: Refusing to delete all rules without --yes", err=True)
        ctx.exit(1)
    removed = RuleStore(ctx.obj["db"].property_store()).delete_all()
    click.echo(f"Deleted {removed} rule{'s' if removed != 1 else ''}")


def register_commands(cli):
    """Register rule commands with main CLI."""
    cli.add_command(rule_group, name="rule")
