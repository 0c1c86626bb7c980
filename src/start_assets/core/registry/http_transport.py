"""Registry transport over HTTP (httpx) or the local filesystem.

The index location is either an http(s) URL or a filesystem path. Asset
content documents live next to the index at `<module>.yaml`.
"""

import hashlib
import logging
from pathlib import Path
from urllib.parse import urljoin

import httpx

from start_assets.core.cache import IndexCache, read_index_cache, write_index_cache
from start_assets.core.catalog import CatalogIndex
from start_assets.core.errors import TransportError
from start_assets.core.models import CatalogEntry
from start_assets.core.registry.abc import RegistryTransport
from start_assets.core.time.abc import Time

logger = logging.getLogger(__name__)

DEFAULT_ATTEMPTS = 3
DEFAULT_BASE_WAIT = 1.0
REQUEST_TIMEOUT = 30.0


def is_remote(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def content_fingerprint(body: str) -> str:
    return "sha256:" + hashlib.sha256(body.encode("utf-8")).hexdigest()


class HttpRegistryTransport(RegistryTransport):
    """Production implementation with retries and a conditional-fetch cache."""

    def __init__(
        self,
        time: Time,
        cache_dir: Path,
        *,
        client: httpx.Client | None = None,
        attempts: int = DEFAULT_ATTEMPTS,
        base_wait: float = DEFAULT_BASE_WAIT,
    ) -> None:
        self._time = time
        self._cache_dir = cache_dir
        self._client = client
        self._attempts = attempts
        self._base_wait = base_wait

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=REQUEST_TIMEOUT, follow_redirects=True)
        return self._client

    def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "HttpRegistryTransport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    def _get(self, url: str, headers: dict[str, str]) -> httpx.Response:
        """GET with exponential backoff. Client errors (4xx) are not retried."""
        last_error: Exception | None = None
        for attempt in range(self._attempts):
            if attempt > 0:
                wait = self._base_wait * (2 ** (attempt - 1))
                logger.debug("Retrying %s in %.1fs (attempt %d)", url, wait, attempt + 1)
                self._time.sleep(wait)
            try:
                response = self._get_client().get(url, headers=headers)
                if response.status_code == 304:
                    return response
                response.raise_for_status()
                return response
            except httpx.HTTPStatusError as e:
                if e.response.status_code < 500:
                    raise TransportError(f"fetching {url}: HTTP {e.response.status_code}") from e
                last_error = e
            except httpx.HTTPError as e:
                last_error = e
            logger.debug("Fetch of %s failed: %s", url, last_error)

        raise TransportError(
            f"fetching {url} after {self._attempts} attempts: {last_error}"
        ) from last_error

    def _read_local(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise TransportError(f"reading {path}: {e}") from e

    def fetch_index(self, location: str, *, skip_validation: bool = False) -> CatalogIndex:
        if not is_remote(location):
            body = self._read_local(Path(location).expanduser())
            logger.debug("Loaded index from local path %s", location)
            return CatalogIndex.parse(body, fingerprint=content_fingerprint(body))

        cached = read_index_cache(self._cache_dir)
        if cached is not None and cached.location != location:
            cached = None

        if skip_validation and cached is not None and cached.is_fresh(self._time.now()):
            logger.debug("Using cached index without validation (%s)", cached.fingerprint)
            return CatalogIndex.parse(cached.body, fingerprint=cached.fingerprint)

        headers: dict[str, str] = {}
        if cached is not None and cached.fingerprint:
            headers["If-None-Match"] = cached.fingerprint

        response = self._get(location, headers)
        if response.status_code == 304 and cached is not None:
            logger.debug("Index not modified (%s)", cached.fingerprint)
            body = cached.body
            fingerprint = cached.fingerprint
        else:
            body = response.text
            fingerprint = response.headers.get("ETag") or content_fingerprint(body)

        index = CatalogIndex.parse(body, fingerprint=fingerprint)
        write_index_cache(
            self._cache_dir,
            IndexCache(
                location=location,
                fingerprint=fingerprint,
                updated=self._time.now(),
                body=body,
            ),
        )
        return index

    def fetch_asset_content(self, location: str, entry: CatalogEntry) -> str:
        relative = f"{entry.module}.yaml"
        if is_remote(location):
            return self._get(urljoin(location, relative), {}).text
        return self._read_local(Path(location).expanduser().parent / relative)
