"""Install decisions and installation of catalog assets into a scope.

decide() is pure: it compares a catalog candidate with what the merged store
already holds. AssetInstaller performs the side effects (fetch content,
write the entry). install_queries() runs several queries in argument order,
continuing past failures and collecting them.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import yaml

from start_assets.core.catalog import CatalogIndex
from start_assets.core.errors import (
    AmbiguousError,
    BatchInstallError,
    NotFoundError,
    StartAssetsError,
    TransportError,
)
from start_assets.core.models import (
    CatalogEntry,
    CategoryEntry,
    ConfigScope,
    validate_content_source,
)
from start_assets.core.prompts import Prompter
from start_assets.core.registry.loader import CatalogLoader
from start_assets.core.scope import ScopeResolver, StoreSnapshot
from start_assets.core.search import search_catalog
from start_assets.core.versions import is_newer

logger = logging.getLogger(__name__)

_RESERVED_CONTENT_KEYS = ("name", "origin", "description", "tags", "file", "command", "prompt")


class InstallAction(Enum):
    INSTALL = "install"
    SKIP_MANUAL_WARN = "skip-manual-warn"
    SKIP_CURRENT = "skip-current"
    SKIP_OUTDATED = "skip-outdated"


@dataclass(frozen=True)
class InstallDecision:
    """Action for one candidate plus the versions needed to report it.

    SKIP_MANUAL_WARN is a warning followed by an install: a manually authored
    entry is replaced by the registry version.
    """

    action: InstallAction
    installed_version: str = ""
    candidate_version: str = ""

    @property
    def proceeds(self) -> bool:
        return self.action in (InstallAction.INSTALL, InstallAction.SKIP_MANUAL_WARN)


def decide(snapshot: StoreSnapshot, candidate: CatalogEntry) -> InstallDecision:
    existing = snapshot.lookup(candidate.category, candidate.name)
    if existing is None:
        return InstallDecision(InstallAction.INSTALL, candidate_version=candidate.version)

    if not existing.is_registry_sourced:
        return InstallDecision(InstallAction.SKIP_MANUAL_WARN, candidate_version=candidate.version)

    installed = existing.installed_version
    if is_newer(candidate.version, installed):
        action = InstallAction.SKIP_OUTDATED
    else:
        action = InstallAction.SKIP_CURRENT
    logger.debug(
        "%s/%s installed at %r, registry has %r: %s",
        candidate.category.plural,
        candidate.name,
        installed,
        candidate.version,
        action.value,
    )
    return InstallDecision(action, installed_version=installed, candidate_version=candidate.version)


def entry_from_content(candidate: CatalogEntry, text: str) -> CategoryEntry:
    """Build the stored entry for candidate from its content document.

    The document is a YAML mapping, optionally nested under the category's
    singular key. Description and tags fall back to the catalog record.

    Raises:
        TransportError: If the document is not a YAML mapping
        ValidationError: If it does not set exactly one content source
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise TransportError(f"invalid content for {candidate.module}: {e}") from e

    if isinstance(data, dict) and set(data) == {candidate.category.value}:
        data = data[candidate.category.value]
    if not isinstance(data, dict):
        raise TransportError(f"invalid content for {candidate.module}: expected a mapping")

    file = data.get("file")
    command = data.get("command")
    prompt = data.get("prompt")
    validate_content_source(file, command, prompt)

    tags = data.get("tags")
    return CategoryEntry(
        name=candidate.name,
        category=candidate.category,
        description=str(data.get("description") or candidate.description),
        tags=tuple(str(t) for t in tags) if isinstance(tags, list) else candidate.tags,
        origin=candidate.origin,
        file=file,
        command=command,
        prompt=prompt,
        extra={k: v for k, v in data.items() if k not in _RESERVED_CONTENT_KEYS},
    )


class AssetInstaller:
    """Fetches asset content and writes it into a scope."""

    def __init__(self, resolver: ScopeResolver, loader: CatalogLoader) -> None:
        self._resolver = resolver
        self._loader = loader

    def install(self, candidate: CatalogEntry, scope: ConfigScope) -> Path:
        """Install candidate unconditionally. Returns the written document path.

        An existing entry of the same name keeps its position in the order.
        """
        text = self._loader.transport.fetch_asset_content(self._loader.location, candidate)
        entry = entry_from_content(candidate, text)

        loaded = self._resolver.load_single(scope, candidate.category, tolerant=True)
        path = self._resolver.write(scope, loaded.upsert(entry))
        logger.debug(
            "Installed %s/%s as %s", candidate.category.plural, candidate.name, entry.origin
        )
        return path


def find_install_candidate(
    index: CatalogIndex, query: str, prompter: Prompter
) -> CatalogEntry | None:
    """Pick the catalog entry a query refers to.

    An exact name or "category/name" path wins outright. Otherwise the
    index is searched; several results need an interactive choice.

    Returns:
        The chosen entry, or None when the user cancelled

    Raises:
        NotFoundError: If nothing matches
        AmbiguousError: If several match and no terminal is attached
    """
    folded = query.strip().casefold()
    exact = [
        entry
        for _, name, entry in index.all_entries()
        if folded in (name.casefold(), f"{entry.category.plural}/{name}".casefold())
    ]
    if len(exact) == 1:
        return exact[0]

    results = search_catalog(index, query, [])
    if not results:
        raise NotFoundError(f"no assets found matching {query!r}")
    if len(results) == 1:
        return results[0].entry

    paths = [result.path for result in results]
    if not prompter.interactive:
        raise AmbiguousError(
            f"multiple assets found: {', '.join(paths)}\nSpecify exact path or run interactively",
            paths,
        )
    chosen = prompter.choose_one(paths, "asset")
    if chosen is None:
        return None
    return results[paths.index(chosen)].entry


@dataclass(frozen=True)
class InstallOutcome:
    """Result of one query in a batch. candidate is None on cancel or early failure."""

    query: str
    candidate: CatalogEntry | None = None
    decision: InstallDecision | None = None
    path: Path | None = None
    error: StartAssetsError | None = None

    @property
    def installed(self) -> bool:
        return self.path is not None

    @property
    def cancelled(self) -> bool:
        return self.candidate is None and self.error is None


@dataclass(frozen=True)
class BatchInstallResult:
    outcomes: list[InstallOutcome]
    scope: ConfigScope

    @property
    def failures(self) -> list[tuple[str, Exception]]:
        return [(o.query, o.error) for o in self.outcomes if o.error is not None]

    def raise_for_failures(self) -> None:
        """Raise BatchInstallError when any query failed."""
        failures = self.failures
        if failures:
            raise BatchInstallError(failures)


def _install_one(
    query: str,
    *,
    resolver: ScopeResolver,
    loader: CatalogLoader,
    installer: AssetInstaller,
    scope: ConfigScope,
    prompter: Prompter,
) -> InstallOutcome:
    candidate = find_install_candidate(loader.get(), query, prompter)
    if candidate is None:
        return InstallOutcome(query=query)

    decision = decide(resolver.snapshot(), candidate)
    if not decision.proceeds:
        return InstallOutcome(query=query, candidate=candidate, decision=decision)

    path = installer.install(candidate, scope)
    return InstallOutcome(query=query, candidate=candidate, decision=decision, path=path)


def install_queries(
    queries: list[str],
    *,
    resolver: ScopeResolver,
    loader: CatalogLoader,
    scope: ConfigScope,
    prompter: Prompter,
) -> BatchInstallResult:
    """Install each query in argument order, continuing past failures.

    The index is fetched once and shared by every query. The store is
    re-read per query so earlier installs in the batch are seen by later
    decisions. A TransportError fetching the index fails every query.
    """
    installer = AssetInstaller(resolver, loader)
    outcomes: list[InstallOutcome] = []
    for query in queries:
        try:
            outcome = _install_one(
                query,
                resolver=resolver,
                loader=loader,
                installer=installer,
                scope=scope,
                prompter=prompter,
            )
        except StartAssetsError as e:
            logger.debug("Install of %r failed: %s", query, e)
            outcome = InstallOutcome(query=query, error=e)
        outcomes.append(outcome)
    return BatchInstallResult(outcomes=outcomes, scope=scope)


class UpdateStatus(Enum):
    UPDATE = "update"
    CURRENT = "current"
    MISSING = "missing"


@dataclass(frozen=True)
class UpdatePlanItem:
    entry: CategoryEntry
    candidate: CatalogEntry | None
    status: UpdateStatus


@dataclass(frozen=True)
class UpdateResult:
    item: UpdatePlanItem
    path: Path | None = None
    error: StartAssetsError | None = None


def plan_updates(
    snapshot: StoreSnapshot, index: CatalogIndex, query: str = "", *, force: bool = False
) -> list[UpdatePlanItem]:
    """Pair every registry-installed entry with its catalog record.

    Args:
        snapshot: Merged stored entries
        index: Catalog snapshot
        query: Case-insensitive substring of name or category to filter by
        force: Mark every entry found in the catalog for update
    """
    folded = query.casefold()
    plan: list[UpdatePlanItem] = []
    for entry in snapshot.registry_entries():
        if folded and folded not in entry.name.casefold() and folded not in entry.category.plural:
            continue

        candidate = index.get(entry.category, entry.name)
        if candidate is None:
            status = UpdateStatus.MISSING
        elif force or is_newer(candidate.version, entry.installed_version):
            status = UpdateStatus.UPDATE
        else:
            status = UpdateStatus.CURRENT
        plan.append(UpdatePlanItem(entry=entry, candidate=candidate, status=status))
    return plan


def apply_updates(
    plan: list[UpdatePlanItem], installer: AssetInstaller, *, dry_run: bool = False
) -> list[UpdateResult]:
    """Re-install every UPDATE item into the scope it was loaded from."""
    results: list[UpdateResult] = []
    for item in plan:
        if item.status is not UpdateStatus.UPDATE or dry_run:
            results.append(UpdateResult(item=item))
            continue
        assert item.candidate is not None
        scope = item.entry.source or ConfigScope.GLOBAL
        try:
            path = installer.install(item.candidate, scope)
        except StartAssetsError as e:
            logger.debug("Update of %s failed: %s", item.entry.name, e)
            results.append(UpdateResult(item=item, error=e))
            continue
        results.append(UpdateResult(item=item, path=path))
    return results


@dataclass(frozen=True)
class InstalledAsset:
    entry: CategoryEntry
    latest_version: str | None

    @property
    def outdated(self) -> bool:
        if self.latest_version is None:
            return False
        return is_newer(self.latest_version, self.entry.installed_version)


def list_installed(snapshot: StoreSnapshot, index: CatalogIndex | None) -> list[InstalledAsset]:
    """Registry-installed entries with the latest catalog version when known."""
    assets: list[InstalledAsset] = []
    for entry in snapshot.registry_entries():
        latest: str | None = None
        if index is not None:
            candidate = index.get(entry.category, entry.name)
            if candidate is not None:
                latest = candidate.version
        assets.append(InstalledAsset(entry=entry, latest_version=latest))
    return assets
