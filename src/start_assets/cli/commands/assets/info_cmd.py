"""Show details of one registry asset."""

import click

from start_assets.cli.error_boundary import cli_error_boundary
from start_assets.cli.output import Formatter, machine_output
from start_assets.core.context import AppContext
from start_assets.core.install import find_install_candidate
from start_assets.core.models import CategoryEntry
from start_assets.core.versions import is_newer


def _scope_label(entry: CategoryEntry) -> str:
    return entry.source.value if entry.source is not None else "unknown"


@click.command("info")
@click.argument("query")
@click.pass_obj
@cli_error_boundary
def info_cmd(ctx: AppContext, query: str) -> None:
    """Show registry details and install status of an asset."""
    fmt = Formatter()
    candidate = find_install_candidate(ctx.catalog_loader().get(), query, ctx.prompter)
    if candidate is None:
        return

    machine_output(fmt.path(candidate.category, candidate.name))
    machine_output(f"  {fmt.dim('Module:')}      {candidate.module}")
    machine_output(f"  {fmt.dim('Version:')}     {candidate.version or '-'}")
    machine_output(f"  {fmt.dim('Description:')} {candidate.description or '-'}")
    machine_output(f"  {fmt.dim('Tags:')}        {', '.join(candidate.tags) or '-'}")

    existing = ctx.resolver.snapshot().lookup(candidate.category, candidate.name)
    if existing is None:
        status = "not installed"
    elif not existing.is_registry_sourced:
        status = f"manually added ({_scope_label(existing)} config)"
    else:
        scope = _scope_label(existing)
        status = f"{existing.installed_version or '-'} in {scope} config"
        if is_newer(candidate.version, existing.installed_version):
            status += " " + fmt.warning("(update available)")
    machine_output(f"  {fmt.dim('Installed:')}   {status}")
