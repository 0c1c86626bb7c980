"""Edit fields of an existing entry."""

import click

from start_assets.cli.error_boundary import cli_error_boundary
from start_assets.cli.output import user_output
from start_assets.cli.params import category_argument, local_option, split_tags, tag_option
from start_assets.core.category import Category
from start_assets.core.context import AppContext
from start_assets.core.entries import EntryChanges, edit_entry
from start_assets.core.models import CategoryEntry, ConfigScope
from start_assets.core.name_resolver import resolve_one


def _prompt_changes(ctx: AppContext, entry: CategoryEntry) -> EntryChanges:
    ctx.prompter.require_interactive(
        "nothing to change: pass --description, --tag, --file, --command or --prompt"
    )
    description = ctx.prompter.ask("Description", entry.description)
    tags = ctx.prompter.ask("Tags (comma-separated)", ", ".join(entry.tags))
    return EntryChanges(description=description, tags=split_tags((tags,)))


@click.command("edit")
@category_argument
@click.argument("query")
@click.option("--file", "file", help="Replace the content with a file path.")
@click.option("--command", "command", help="Replace the content with a command.")
@click.option("--prompt", "prompt", help="Replace the content with inline text.")
@click.option("--description", "-d", help="Replace the description.")
@tag_option
@local_option
@click.pass_obj
@cli_error_boundary
def edit_cmd(
    ctx: AppContext,
    category: Category,
    query: str,
    file: str | None,
    command: str | None,
    prompt: str | None,
    description: str | None,
    tags: tuple[str, ...],
    local: bool,
) -> None:
    """Edit the entry in CATEGORY matching QUERY.

    Replacing the content (--file, --command or --prompt) of a registry-installed
    entry clears its origin. Without options the fields are prompted for.
    """
    scope = ConfigScope.from_local_flag(local)
    resolver = ctx.resolver
    loaded = resolver.load_single(scope, category)
    name, entry = resolve_one(loaded.entries, category.value, query)

    changes = EntryChanges(
        description=description,
        tags=split_tags(tags) if tags else None,
        file=file,
        command=command,
        prompt=prompt,
    )
    if changes.is_empty:
        changes = _prompt_changes(ctx, entry)

    updated, path = edit_entry(resolver, scope, category, name, changes)
    user_output(f"Updated {category.value} {name!r} in {scope.value} config")
    if entry.origin and not updated.origin:
        user_output(f"Origin {entry.origin} cleared (content no longer matches the registry)")
    user_output(f"Config: {path}")
