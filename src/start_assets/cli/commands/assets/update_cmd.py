"""Update installed registry assets."""

import click

from start_assets.cli.error_boundary import cli_error_boundary
from start_assets.cli.output import Formatter, user_output
from start_assets.core.context import AppContext
from start_assets.core.errors import BatchInstallError
from start_assets.core.install import AssetInstaller, UpdateStatus, apply_updates, plan_updates


@click.command("update")
@click.argument("query", required=False, default="")
@click.option("--dry-run", is_flag=True, help="Preview without applying.")
@click.option("--force", is_flag=True, help="Re-install even if current.")
@click.pass_obj
@cli_error_boundary
def update_cmd(ctx: AppContext, query: str, dry_run: bool, force: bool) -> None:
    """Update installed assets to the latest registry version.

    QUERY limits the update to assets whose name or category contains it.
    """
    fmt = Formatter()
    resolver = ctx.resolver
    snapshot = resolver.snapshot()
    if not snapshot.registry_entries():
        user_output("No assets installed from registry.")
        return

    loader = ctx.catalog_loader()
    user_output("Checking for updates...")
    plan = plan_updates(snapshot, loader.get(), query, force=force)
    if not plan:
        user_output(f"No installed assets matching {query!r}")
        return

    results = apply_updates(plan, AssetInstaller(resolver, loader), dry_run=dry_run)

    if dry_run:
        user_output("Dry run - no changes applied:")
    prefix = "Would update" if dry_run else "Updated"

    counts = {"updated": 0, "current": 0, "missing": 0, "failed": 0}
    failures: list[tuple[str, Exception]] = []
    for result in results:
        entry = result.item.entry
        path = fmt.path(entry.category, entry.name)
        if result.error is not None:
            counts["failed"] += 1
            failures.append((f"{entry.category.plural}/{entry.name}", result.error))
            user_output(fmt.error("Failed ") + f"{path}: {result.error}")
        elif result.item.status is UpdateStatus.UPDATE:
            counts["updated"] += 1
            assert result.item.candidate is not None
            old = entry.installed_version or "?"
            user_output(f"{prefix} {path} {old} -> {result.item.candidate.version or '?'}")
        elif result.item.status is UpdateStatus.MISSING:
            counts["missing"] += 1
            user_output(fmt.dim("Missing ") + f"{path} (not in registry)")
        else:
            counts["current"] += 1
            user_output(fmt.dim("Current ") + path)

    summary = f"Updated: {counts['updated']}, Current: {counts['current']}"
    if counts["missing"]:
        summary += f", Missing: {counts['missing']}"
    if counts["failed"]:
        summary += f", Failed: {counts['failed']}"
    user_output()
    user_output(summary)

    if failures:
        raise BatchInstallError(failures)
