import click

from start_assets.cli.commands.assets.add_cmd import add_cmd
from start_assets.cli.commands.assets.info_cmd import info_cmd
from start_assets.cli.commands.assets.list_cmd import list_cmd
from start_assets.cli.commands.assets.search_cmd import assets_search_cmd
from start_assets.cli.commands.assets.update_cmd import update_cmd


@click.group("assets")
def assets_group() -> None:
    """Search, install and update assets from the registry."""


assets_group.add_command(add_cmd)
assets_group.add_command(add_cmd, name="install")
assets_group.add_command(info_cmd)
assets_group.add_command(list_cmd)
assets_group.add_command(assets_search_cmd)
assets_group.add_command(update_cmd)
