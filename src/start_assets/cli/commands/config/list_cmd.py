"""List configured entries."""

import click
from rich.table import Table

from start_assets.cli.error_boundary import cli_error_boundary
from start_assets.cli.output import table_console, user_output
from start_assets.cli.params import CATEGORY_CHOICES, local_option
from start_assets.core.category import Category
from start_assets.core.context import AppContext
from start_assets.core.models import ConfigScope
from start_assets.core.store.abc import LoadedCategory


def _render_category(loaded: LoadedCategory) -> None:
    table = Table(title=loaded.category.plural, show_header=True, header_style="bold")
    table.add_column("name", style="cyan", no_wrap=True)
    table.add_column("scope", no_wrap=True)
    table.add_column("origin", no_wrap=True)
    table.add_column("description")

    for name in loaded.display_names():
        entry = loaded.entries[name]
        scope = entry.source.value if entry.source is not None else ""
        table.add_row(name, scope, entry.origin or "[dim]manual[/dim]", entry.description)

    table_console().print(table)


@click.command("list")
@click.argument(
    "category",
    required=False,
    type=click.Choice(CATEGORY_CHOICES, case_sensitive=False),
)
@local_option
@click.pass_obj
@cli_error_boundary
def list_cmd(ctx: AppContext, category: str | None, local: bool) -> None:
    """List entries, merged across scopes (or local only with --local).

    Roles and contexts are listed in definition order; agents and tasks by name.
    """
    resolver = ctx.resolver
    if not resolver.any_scope_exists():
        user_output("No configuration found.")
        return

    categories = [Category.parse(category)] if category else list(Category)
    shown = 0
    for cat in categories:
        if local:
            loaded = resolver.load_single(ConfigScope.LOCAL, cat, tolerant=True)
        else:
            loaded = resolver.load_merged(cat)
        if not loaded.order:
            continue
        _render_category(loaded)
        shown += 1

    if shown == 0:
        user_output("No entries configured.")
