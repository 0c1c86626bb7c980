import logging
import os

import click

from start_assets.cli.commands.assets import assets_group
from start_assets.cli.commands.config import config_group
from start_assets.cli.commands.search_cmd import search_cmd
from start_assets.cli.error_boundary import cli_error_boundary
from start_assets.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

DEBUG_ENV = "START_DEBUG"


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="start-assets")
@click.option("--debug", is_flag=True, help="Show debug logging and full stack traces.")
@click.pass_context
@cli_error_boundary
def cli(ctx: click.Context, debug: bool) -> None:
    """Manage agents, roles, contexts and tasks, and install them from the asset registry."""
    debug = debug or bool(os.getenv(DEBUG_ENV))
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(debug=debug)
    ctx.call_on_close(ctx.obj.registry.close)


cli.add_command(assets_group)
cli.add_command(config_group)
cli.add_command(search_cmd)


def main() -> None:
    """CLI entry point used by the `start` console script."""
    cli()
