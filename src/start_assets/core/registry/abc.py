"""Abstract interface for fetching the catalog index and asset content."""

from abc import ABC, abstractmethod

from start_assets.core.catalog import CatalogIndex
from start_assets.core.models import CatalogEntry


class RegistryTransport(ABC):
    """Registry access used by search, install and update.

    All implementations (real and fake) must implement this interface.
    """

    @abstractmethod
    def fetch_index(self, location: str, *, skip_validation: bool = False) -> CatalogIndex:
        """Fetch and parse the catalog index.

        Args:
            location: URL or filesystem path of the serialized index
            skip_validation: Use a fresh cached copy without contacting the
                network

        Returns:
            CatalogIndex carrying the fingerprint of the fetched snapshot

        Raises:
            TransportError: If the index cannot be fetched or parsed
        """
        ...

    @abstractmethod
    def fetch_asset_content(self, location: str, entry: CatalogEntry) -> str:
        """Fetch the serialized content document of one asset.

        Args:
            location: Index location the entry was listed in
            entry: Catalog entry to fetch

        Raises:
            TransportError: If the content cannot be fetched
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Release network resources. Safe to call more than once."""
        ...
