"""In-memory fake implementation of the document store for testing."""

from pathlib import Path

from start_assets.core.category import Category
from start_assets.core.errors import NoDocumentsError, NotFoundError
from start_assets.core.models import CategoryEntry
from start_assets.core.store.abc import DocumentStore, LoadedCategory


class FakeDocumentStore(DocumentStore):
    """In-memory fake implementation - no filesystem access.

    All state is provided via constructor. A directory key mapped to an empty
    dict models a directory that exists but holds no documents.
    """

    def __init__(
        self,
        *,
        documents: dict[Path, dict[Category, LoadedCategory]] | None = None,
    ) -> None:
        """Create FakeDocumentStore with pre-configured state.

        Args:
            documents: Mapping of directory -> category -> loaded entries

        Example:
            >>> store = FakeDocumentStore(
            ...     documents={
            ...         Path("/global"): {Category.ROLE: loaded_category(Category.ROLE, [role])},
            ...     }
            ... )
        """
        self._documents = documents if documents is not None else {}
        self._writes: list[tuple[Path, LoadedCategory]] = []

    @property
    def writes(self) -> list[tuple[Path, LoadedCategory]]:
        """Read-only access to writes for test assertions.

        Returns list of (directory, loaded category) tuples in call order.
        """
        return self._writes

    def exists(self, directory: Path) -> bool:
        return directory in self._documents

    def load(self, directory: Path, category: Category) -> LoadedCategory:
        if directory not in self._documents:
            raise NotFoundError(f"Configuration directory not found: {directory}")
        docs = self._documents[directory]
        if not docs:
            raise NoDocumentsError(f"No configuration documents in {directory}")
        if category not in docs:
            return LoadedCategory(category=category)
        return docs[category]

    def write(self, directory: Path, loaded: LoadedCategory) -> None:
        self._documents.setdefault(directory, {})[loaded.category] = loaded
        self._writes.append((directory, loaded))


def loaded_category(category: Category, entries: list[CategoryEntry]) -> LoadedCategory:
    """Build a LoadedCategory from entries in the given order."""
    return LoadedCategory(
        category=category,
        entries={entry.name: entry for entry in entries},
        order=[entry.name for entry in entries],
    )
