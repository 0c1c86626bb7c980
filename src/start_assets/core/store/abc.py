"""Abstract interface for the per-category document store."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from pathlib import Path

from start_assets.core.category import Category
from start_assets.core.models import CategoryEntry


@dataclass(frozen=True)
class LoadedCategory:
    """Entries of one category from one scope, with their definition order.

    The order list is carried explicitly alongside the keyed mapping and
    survives add/remove/write cycles unchanged except for the mutated entry.
    """

    category: Category
    entries: dict[str, CategoryEntry] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)

    def get(self, name: str) -> CategoryEntry | None:
        return self.entries.get(name)

    def ordered_entries(self) -> list[CategoryEntry]:
        return [self.entries[name] for name in self.order if name in self.entries]

    def display_names(self) -> list[str]:
        """Names in display order: definition order or sorted, per category."""
        if self.category.ordered:
            return list(self.order)
        return sorted(self.order)

    def upsert(self, entry: CategoryEntry) -> "LoadedCategory":
        """Return a copy with entry replaced in place, or appended when new."""
        new_entries = {**self.entries, entry.name: entry}
        new_order = list(self.order)
        if entry.name not in new_order:
            new_order.append(entry.name)
        return replace(self, entries=new_entries, order=new_order)

    def without(self, names: list[str]) -> "LoadedCategory":
        """Return a copy with the named entries and their order slots removed."""
        dropped = set(names)
        new_entries = {k: v for k, v in self.entries.items() if k not in dropped}
        new_order = [name for name in self.order if name not in dropped]
        return replace(self, entries=new_entries, order=new_order)


class DocumentStore(ABC):
    """Opaque key-to-record store, one document per category per directory.

    All implementations (real and fake) must implement this interface.
    """

    @abstractmethod
    def exists(self, directory: Path) -> bool:
        """Whether the scope directory exists."""
        ...

    @abstractmethod
    def load(self, directory: Path, category: Category) -> LoadedCategory:
        """Load one category from a scope directory.

        A directory that has documents but none for this category yields an
        empty LoadedCategory.

        Raises:
            NotFoundError: If the directory does not exist
            NoDocumentsError: If the directory holds no documents at all
            StoreError: If the category document cannot be parsed
        """
        ...

    @abstractmethod
    def write(self, directory: Path, loaded: LoadedCategory) -> None:
        """Overwrite the whole category document with loaded.

        Creates the directory when missing.

        Raises:
            StoreError: If the document cannot be written
        """
        ...
