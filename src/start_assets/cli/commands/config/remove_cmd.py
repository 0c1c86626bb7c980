"""Remove entries."""

import click

from start_assets.cli.error_boundary import cli_error_boundary
from start_assets.cli.output import user_output
from start_assets.cli.params import category_argument, local_option
from start_assets.core.category import Category
from start_assets.core.context import AppContext
from start_assets.core.entries import remove_entries, resolve_remove_names
from start_assets.core.models import ConfigScope


def _confirm(ctx: AppContext, category: Category, names: list[str], scope: ConfigScope) -> bool:
    ctx.prompter.require_interactive("--yes flag required in non-interactive mode")
    if len(names) == 1:
        question = f"Remove {category.value} {names[0]!r} from {scope.value} config?"
    else:
        listing = "\n".join(f"  - {name}" for name in names)
        question = f"Remove the following {category.value}s from {scope.value} config?\n{listing}\n"
    return ctx.prompter.confirm(question)


@click.command("remove")
@category_argument
@click.argument("queries", nargs=-1, required=True)
@local_option
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation and remove every match.")
@click.pass_obj
@cli_error_boundary
def remove_cmd(
    ctx: AppContext, category: Category, queries: tuple[str, ...], local: bool, yes: bool
) -> None:
    """Remove entries in CATEGORY matching each QUERY."""
    scope = ConfigScope.from_local_flag(local)
    resolver = ctx.resolver
    loaded = resolver.load_single(scope, category)

    names = resolve_remove_names(
        loaded.entries, category.value, list(queries), assume_yes=yes, prompter=ctx.prompter
    )
    if not names:
        return
    if not yes and not _confirm(ctx, category, names, scope):
        return

    remove_entries(resolver, scope, category, names)
    for name in names:
        user_output(f"Removed {category.value} {name!r} from {scope.value} config")
