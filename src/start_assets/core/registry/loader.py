"""Fetch-once access to the catalog index for a single invocation."""

import logging

from start_assets.core.catalog import CatalogIndex
from start_assets.core.registry.abc import RegistryTransport

logger = logging.getLogger(__name__)


class CatalogLoader:
    """Fetches the index on first use and returns the same snapshot after.

    Every per-query search in one run shares that snapshot. A failed fetch
    is not memoized, so the error is raised again on the next call.
    """

    def __init__(
        self, transport: RegistryTransport, location: str, *, skip_validation: bool = False
    ) -> None:
        self._transport = transport
        self._location = location
        self._skip_validation = skip_validation
        self._index: CatalogIndex | None = None

    @property
    def location(self) -> str:
        return self._location

    @property
    def transport(self) -> RegistryTransport:
        return self._transport

    def get(self) -> CatalogIndex:
        if self._index is None:
            logger.debug("Fetching index from %s", self._location)
            self._index = self._transport.fetch_index(
                self._location, skip_validation=self._skip_validation
            )
            logger.debug(
                "Index %s has %d assets (%s)",
                self._index.version or "unversioned",
                len(self._index),
                self._index.fingerprint,
            )
        return self._index
