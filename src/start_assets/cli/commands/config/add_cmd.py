"""Add a manually authored entry."""

import click

from start_assets.cli.error_boundary import cli_error_boundary
from start_assets.cli.output import user_output
from start_assets.cli.params import category_argument, local_option, split_tags, tag_option
from start_assets.core.category import Category
from start_assets.core.context import AppContext
from start_assets.core.entries import add_entry
from start_assets.core.models import CategoryEntry, ConfigScope


@click.command("add")
@category_argument
@click.argument("name")
@click.option("--file", "file", help="Path to a file holding the content.")
@click.option("--command", "command", help="Command whose output is the content.")
@click.option("--prompt", "prompt", help="Inline content text.")
@click.option("--description", "-d", default="", help="Short description.")
@tag_option
@local_option
@click.pass_obj
@cli_error_boundary
def add_cmd(
    ctx: AppContext,
    category: Category,
    name: str,
    file: str | None,
    command: str | None,
    prompt: str | None,
    description: str,
    tags: tuple[str, ...],
    local: bool,
) -> None:
    """Add an entry to CATEGORY. Exactly one of --file, --command, --prompt is required."""
    scope = ConfigScope.from_local_flag(local)
    entry = CategoryEntry(
        name=name,
        category=category,
        description=description,
        tags=split_tags(tags),
        file=file,
        command=command,
        prompt=prompt,
    )
    path = add_entry(ctx.resolver, scope, entry)
    user_output(f"Added {category.value} {name!r} to {scope.value} config")
    user_output(f"Config: {path}")
