import click

from start_assets.cli.commands.config.add_cmd import add_cmd
from start_assets.cli.commands.config.edit_cmd import edit_cmd
from start_assets.cli.commands.config.list_cmd import list_cmd
from start_assets.cli.commands.config.order_cmd import order_cmd
from start_assets.cli.commands.config.remove_cmd import remove_cmd


@click.group("config")
def config_group() -> None:
    """Manage agents, roles, contexts and tasks in your configuration."""


config_group.add_command(add_cmd)
config_group.add_command(edit_cmd)
config_group.add_command(list_cmd)
config_group.add_command(order_cmd)
config_group.add_command(remove_cmd)
