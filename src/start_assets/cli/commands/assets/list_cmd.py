"""List assets installed from the registry."""

import click

from start_assets.cli.error_boundary import cli_error_boundary
from start_assets.cli.output import Formatter, user_output
from start_assets.cli.rendering import render_installed_table
from start_assets.core.catalog import CatalogIndex
from start_assets.core.context import AppContext
from start_assets.core.errors import TransportError
from start_assets.core.install import list_installed


@click.command("list")
@click.option("-v", "--verbose", is_flag=True, help="Show the full origin of each asset.")
@click.pass_obj
@cli_error_boundary
def list_cmd(ctx: AppContext, verbose: bool) -> None:
    """List installed registry assets and whether updates are available."""
    fmt = Formatter()
    snapshot = ctx.resolver.snapshot()
    if not snapshot.registry_entries():
        user_output("No assets installed from registry.")
        return

    index: CatalogIndex | None
    try:
        index = ctx.catalog_loader(skip_validation=True).get()
    except TransportError as e:
        user_output(fmt.warn_line(f"registry unavailable: {e}"))
        index = None

    render_installed_table(fmt, list_installed(snapshot, index), verbose=verbose)
