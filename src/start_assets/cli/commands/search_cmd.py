"""Top-level search across local config, global config and the registry."""

import click

from start_assets.cli.error_boundary import cli_error_boundary
from start_assets.cli.output import Formatter, machine_output, user_output
from start_assets.cli.params import split_tags, tag_option
from start_assets.cli.rendering import installed_paths, render_search_report
from start_assets.core.context import AppContext
from start_assets.core.errors import ValidationError
from start_assets.core.search import parse_search_patterns, search_everywhere, validate_search_query


def prompt_for_query(ctx: AppContext, query: str, tags: list[str]) -> str | None:
    """Return a valid query, asking for one interactively when too short.

    Returns None when the user cancels.
    """
    try:
        validate_search_query(parse_search_patterns(query), tags)
    except ValidationError:
        if not ctx.prompter.interactive:
            raise
        if query:
            user_output("Query must be at least 3 characters")
        answer = ctx.prompter.ask("Search")
        if not answer:
            return None
        return answer
    return query


@click.command("search")
@click.argument("query", nargs=-1)
@tag_option
@click.option("-v", "--verbose", is_flag=True, help="Show module, version and tags.")
@click.pass_obj
@cli_error_boundary
def search_cmd(
    ctx: AppContext, query: tuple[str, ...], tags: tuple[str, ...], verbose: bool
) -> None:
    """Search configs and registry for assets.

    Searches names, descriptions and tags. All terms must match; terms may
    be regular expressions (e.g. '^home', 'go.*review'). Use --tag to filter
    by tag, alone or with a query.
    """
    tag_filters = list(split_tags(tags))
    text = prompt_for_query(ctx, " ".join(query), tag_filters)
    if text is None:
        return

    fmt = Formatter()
    resolver = ctx.resolver
    report = search_everywhere(resolver, ctx.catalog_loader().get, text, tag_filters)

    if report.is_empty:
        shown = text or "--tag " + ",".join(tag_filters)
        machine_output(f"No matches found for {shown!r}")
    else:
        render_search_report(
            fmt, report, verbose=verbose, installed=installed_paths(resolver.snapshot())
        )

    if report.registry_error is not None:
        user_output(fmt.warn_line(f"registry unavailable: {report.registry_error}"))
