"""Install assets from the registry."""

import click

from start_assets.cli.error_boundary import cli_error_boundary
from start_assets.cli.output import Formatter, user_output
from start_assets.cli.params import local_option
from start_assets.cli.rendering import render_install_outcome
from start_assets.core.context import AppContext
from start_assets.core.install import install_queries
from start_assets.core.models import ConfigScope


@click.command("add")
@click.argument("queries", nargs=-1, required=True)
@local_option
@click.pass_obj
@cli_error_boundary
def add_cmd(ctx: AppContext, queries: tuple[str, ...], local: bool) -> None:
    """Install one or more assets.

    Each QUERY is searched in the registry index. A direct path such as
    "roles/golang/assistant" is an exact match. Several matches prompt for
    a choice. Assets already installed from the registry are left as they
    are; use "start assets update" to upgrade them.
    """
    scope = ConfigScope.from_local_flag(local)
    loader = ctx.catalog_loader()

    user_output("Fetching index...")
    loader.get()

    result = install_queries(
        list(queries),
        resolver=ctx.resolver,
        loader=loader,
        scope=scope,
        prompter=ctx.prompter,
    )

    fmt = Formatter()
    for outcome in result.outcomes:
        render_install_outcome(fmt, outcome, scope)

    result.raise_for_failures()
