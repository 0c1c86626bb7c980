"""Rendering of search results, install outcomes and listings."""

from rich.table import Table

from start_assets.cli.output import Formatter, machine_output, table_console, user_output
from start_assets.core.category import Category
from start_assets.core.install import InstallAction, InstalledAsset, InstallOutcome
from start_assets.core.models import CatalogEntry, ConfigScope, SearchResult
from start_assets.core.scope import StoreSnapshot
from start_assets.core.search import SearchReport

INSTALLED_MARKER = "★"


def installed_paths(snapshot: StoreSnapshot) -> set[tuple[Category, str]]:
    return {(entry.category, entry.name) for entry in snapshot.all_entries()}


def render_results(
    fmt: Formatter,
    results: list[SearchResult],
    *,
    verbose: bool = False,
    installed: set[tuple[Category, str]] | None = None,
) -> None:
    """One line per result, grouped under a category heading."""
    current: Category | None = None
    for result in results:
        if result.category is not current:
            current = result.category
            machine_output(f"  {fmt.category(current)}")
        marker = ""
        if installed is not None:
            is_installed = (result.category, result.name) in installed
            marker = (fmt.success(INSTALLED_MARKER) if is_installed else " ") + " "
        line = f"    {marker}{result.name}"
        if result.description:
            line += " " + fmt.dim(f"- {result.description}")
        machine_output(line)
        if verbose:
            _render_verbose(fmt, result)


def _render_verbose(fmt: Formatter, result: SearchResult) -> None:
    entry = result.entry
    if isinstance(entry, CatalogEntry):
        machine_output(f"        {fmt.dim('module:')} {entry.module}")
        if entry.version:
            machine_output(f"        {fmt.dim('version:')} {entry.version}")
    elif entry.origin:
        machine_output(f"        {fmt.dim('origin:')} {entry.origin}")
    if result.tags:
        machine_output(f"        {fmt.dim('tags:')} {', '.join(result.tags)}")


def render_search_report(
    fmt: Formatter,
    report: SearchReport,
    *,
    verbose: bool,
    installed: set[tuple[Category, str]],
) -> None:
    for i, section in enumerate(report.sections):
        if i > 0:
            machine_output()
        heading = fmt.bold(section.label)
        if section.path is not None:
            heading += " " + fmt.accent(f"({section.path})")
        machine_output(heading)
        render_results(
            fmt,
            section.results,
            verbose=verbose,
            installed=installed if section.label == "registry" else None,
        )


def version_status(fmt: Formatter, installed: str, latest: str, outdated: bool) -> str:
    """Render "(v1 -> current)" or "(v1 -> v2)"."""
    parts = [fmt.dim(installed)] if installed else []
    parts.append(fmt.accent("->"))
    parts.append(fmt.warning(latest) if outdated else fmt.dim("current"))
    return fmt.accent("(") + " ".join(parts) + fmt.accent(")")


def render_install_outcome(fmt: Formatter, outcome: InstallOutcome, scope: ConfigScope) -> None:
    if outcome.error is not None:
        user_output(fmt.error(f"Error installing {outcome.query!r}: ") + str(outcome.error))
        return
    if outcome.candidate is None or outcome.decision is None:
        return

    candidate = outcome.candidate
    decision = outcome.decision
    path = fmt.path(candidate.category, candidate.name)

    if decision.action is InstallAction.SKIP_MANUAL_WARN:
        user_output(fmt.warn_line(f"replacing manually-added {path} with registry version"))

    if not decision.proceeds:
        outdated = decision.action is InstallAction.SKIP_OUTDATED
        icon = "○" if outdated else fmt.success("✓")
        status = version_status(
            fmt, decision.installed_version, decision.candidate_version, outdated
        )
        user_output(f"{icon} {fmt.dim('Already installed:')} {path} {status}")
        return

    user_output(f"Installed {path} to {scope.value} config")
    if outcome.path is not None:
        user_output(f"Config: {outcome.path}")


def render_installed_table(fmt: Formatter, assets: list[InstalledAsset], *, verbose: bool) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("asset", no_wrap=True)
    table.add_column("scope", no_wrap=True)
    table.add_column("installed", no_wrap=True)
    table.add_column("latest", no_wrap=True)
    if verbose:
        table.add_column("origin", no_wrap=True)

    for asset in assets:
        entry = asset.entry
        scope = entry.source.value if entry.source is not None else ""
        if asset.latest_version is None:
            latest = "[dim]unknown[/dim]"
        elif asset.outdated:
            latest = f"[yellow]{asset.latest_version}[/yellow]"
        else:
            latest = "[dim]current[/dim]"
        row = [
            f"{entry.category.plural}/{entry.name}",
            scope,
            entry.installed_version or "-",
            latest,
        ]
        if verbose:
            row.append(entry.origin)
        table.add_row(*row)

    table_console().print(table)
