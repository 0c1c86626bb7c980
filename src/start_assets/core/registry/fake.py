"""In-memory fake registry for testing."""

from start_assets.core.catalog import CatalogIndex
from start_assets.core.errors import TransportError
from start_assets.core.models import CatalogEntry
from start_assets.core.registry.abc import RegistryTransport


class FakeRegistryTransport(RegistryTransport):
    """In-memory fake implementation - no network access.

    All state is provided via constructor. Asset contents are keyed by module.
    """

    def __init__(
        self,
        *,
        index: CatalogIndex | None = None,
        contents: dict[str, str] | None = None,
        index_error: TransportError | None = None,
    ) -> None:
        """Create FakeRegistryTransport with pre-configured state.

        Args:
            index: Index returned by fetch_index (empty when None)
            contents: Mapping of module -> serialized content document
            index_error: Raised by fetch_index instead of returning the index
        """
        self._index = index if index is not None else CatalogIndex({})
        self._contents = contents if contents is not None else {}
        self._index_error = index_error
        self._index_fetches: list[tuple[str, bool]] = []
        self._content_fetches: list[str] = []
        self._closed = False

    @property
    def index_fetches(self) -> list[tuple[str, bool]]:
        """(location, skip_validation) per fetch_index call, for test assertions."""
        return self._index_fetches

    @property
    def content_fetches(self) -> list[str]:
        """Modules passed to fetch_asset_content, for test assertions."""
        return self._content_fetches

    @property
    def closed(self) -> bool:
        return self._closed

    def fetch_index(self, location: str, *, skip_validation: bool = False) -> CatalogIndex:
        self._index_fetches.append((location, skip_validation))
        if self._index_error is not None:
            raise self._index_error
        return self._index

    def fetch_asset_content(self, location: str, entry: CatalogEntry) -> str:
        self._content_fetches.append(entry.module)
        if entry.module not in self._contents:
            raise TransportError(f"asset {entry.module} not found in registry")
        return self._contents[entry.module]

    def close(self) -> None:
        self._closed = True
