"""Registry-only search."""

import click

from start_assets.cli.commands.search_cmd import prompt_for_query
from start_assets.cli.error_boundary import cli_error_boundary
from start_assets.cli.output import Formatter, machine_output
from start_assets.cli.params import split_tags, tag_option
from start_assets.cli.rendering import installed_paths, render_results
from start_assets.core.context import AppContext
from start_assets.core.search import search_catalog


@click.command("search")
@click.argument("query", nargs=-1)
@tag_option
@click.option("-v", "--verbose", is_flag=True, help="Show module, version and tags.")
@click.pass_obj
@cli_error_boundary
def assets_search_cmd(
    ctx: AppContext, query: tuple[str, ...], tags: tuple[str, ...], verbose: bool
) -> None:
    """Search the registry index."""
    tag_filters = list(split_tags(tags))
    text = prompt_for_query(ctx, " ".join(query), tag_filters)
    if text is None:
        return

    index = ctx.catalog_loader().get()
    results = search_catalog(index, text, tag_filters)
    if not results:
        machine_output(f"No assets found matching {text!r}")
        return

    machine_output(f"Found {len(results)} asset(s):")
    render_results(
        Formatter(),
        results,
        verbose=verbose,
        installed=installed_paths(ctx.resolver.snapshot()),
    )
