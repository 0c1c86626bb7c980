"""Reorder roles or contexts."""

import click

from start_assets.cli.error_boundary import cli_error_boundary
from start_assets.cli.output import user_output
from start_assets.cli.params import local_option
from start_assets.core.category import Category
from start_assets.core.context import AppContext
from start_assets.core.entries import reorder_entries
from start_assets.core.errors import ValidationError
from start_assets.core.models import ConfigScope

ORDERED_CATEGORIES = [c for c in Category if c.ordered]
ORDERED_CHOICES = [c.value for c in ORDERED_CATEGORIES] + [c.plural for c in ORDERED_CATEGORIES]


def _choose_category(ctx: AppContext) -> Category:
    menu = [f"  {i}. {c.plural.capitalize()}" for i, c in enumerate(ORDERED_CATEGORIES, start=1)]
    choice = ctx.prompter.ask("\n".join(["Reorder:", *menu, "Choice"]), default="1").lower()
    for i, category in enumerate(ORDERED_CATEGORIES, start=1):
        if choice in (str(i), category.value, category.plural):
            return category
    raise ValidationError(f"invalid choice: {choice}")


@click.command("order")
@click.argument(
    "category", required=False, type=click.Choice(ORDERED_CHOICES, case_sensitive=False)
)
@local_option
@click.pass_obj
@cli_error_boundary
def order_cmd(ctx: AppContext, category: str | None, local: bool) -> None:
    """Interactively reorder roles or contexts.

    Enter a number to move that item up one position. Press Enter to save
    the new order, or q to cancel.
    """
    ctx.prompter.require_interactive("interactive reordering requires a terminal")
    scope = ConfigScope.from_local_flag(local)
    chosen = Category.parse(category) if category is not None else _choose_category(ctx)

    resolver = ctx.resolver
    loaded = resolver.load_single(scope, chosen)
    if not loaded.order:
        user_output(f"No {chosen.plural} configured.")
        return

    path = resolver.target_dir(scope) / chosen.filename
    heading = f"Reorder {chosen.plural.capitalize()} ({scope.value} - {path}):"
    new_order = ctx.prompter.reorder(loaded.order, heading)
    if new_order is None:
        return

    reorder_entries(resolver, scope, chosen, new_order)
    user_output("Order saved.")
