"""Scope & store resolution: load, merge and write entries across scopes."""

import logging
from dataclasses import dataclass, replace
from pathlib import Path

from start_assets.core.category import Category
from start_assets.core.errors import NotFoundError
from start_assets.core.models import CategoryEntry, ConfigScope
from start_assets.core.paths import ConfigPaths
from start_assets.core.store.abc import DocumentStore, LoadedCategory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreSnapshot:
    """Merged view of every category at one point in time."""

    categories: dict[Category, LoadedCategory]

    def get(self, category: Category) -> LoadedCategory:
        return self.categories.get(category, LoadedCategory(category=category))

    def lookup(self, category: Category, name: str) -> CategoryEntry | None:
        return self.get(category).get(name)

    def all_entries(self) -> list[CategoryEntry]:
        """Every entry, categories in display order, entries in merged order."""
        result: list[CategoryEntry] = []
        for category in Category:
            result.extend(self.get(category).ordered_entries())
        return result

    def registry_entries(self) -> list[CategoryEntry]:
        return [entry for entry in self.all_entries() if entry.is_registry_sourced]


class ScopeResolver:
    """Resolves scope directories and loads/merges/writes category documents.

    Writing is a whole-category overwrite. Concurrent modification of a scope
    directory between load and write is not detected.
    """

    def __init__(self, store: DocumentStore, paths: ConfigPaths) -> None:
        self._store = store
        self._paths = paths

    @property
    def paths(self) -> ConfigPaths:
        return self._paths

    def target_dir(self, scope: ConfigScope) -> Path:
        return self._paths.dir_for(scope)

    def scope_exists(self, scope: ConfigScope) -> bool:
        return self._store.exists(self.target_dir(scope))

    def any_scope_exists(self) -> bool:
        return any(self.scope_exists(scope) for scope in ConfigScope)

    def load_single(
        self, scope: ConfigScope, category: Category, *, tolerant: bool = False
    ) -> LoadedCategory:
        """Load one category from one scope without merging.

        Args:
            scope: Scope to load
            category: Category to load
            tolerant: Return an empty category instead of raising when the
                directory is absent or holds no documents

        Raises:
            NotFoundError: If the directory is absent or empty and not tolerant
        """
        directory = self.target_dir(scope)
        try:
            loaded = self._store.load(directory, category)
        except NotFoundError:
            if not tolerant:
                raise
            logger.debug(
                "No %s documents in %s scope (%s)", category.plural, scope.value, directory
            )
            return LoadedCategory(category=category)

        sourced = {name: replace(entry, source=scope) for name, entry in loaded.entries.items()}
        return replace(loaded, entries=sourced)

    def load_merged(self, category: Category) -> LoadedCategory:
        """Load a category from both scopes, local entries overriding global ones.

        Order is the local order list followed by global names not already
        present. Absent scopes contribute nothing.
        """
        global_loaded = self.load_single(ConfigScope.GLOBAL, category, tolerant=True)
        local_loaded = self.load_single(ConfigScope.LOCAL, category, tolerant=True)

        entries = {**global_loaded.entries, **local_loaded.entries}
        order = list(local_loaded.order)
        seen = set(order)
        for name in global_loaded.order:
            if name not in seen:
                order.append(name)
                seen.add(name)

        return LoadedCategory(category=category, entries=entries, order=order)

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(categories={c: self.load_merged(c) for c in Category})

    def write(self, scope: ConfigScope, loaded: LoadedCategory) -> Path:
        """Write a whole category document to a scope. Returns the document path."""
        directory = self.target_dir(scope)
        self._store.write(directory, loaded)
        return directory / loaded.category.filename
