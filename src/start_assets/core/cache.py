"""On-disk cache of the last fetched registry index.

Two files live in the cache directory: index-cache.toml holds metadata
(location, fingerprint, fetch time) and index.yaml holds the index body.
Cache failures never fail a command: unreadable files read as "no cache"
and write errors are logged and ignored.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path

import tomli
import tomli_w

logger = logging.getLogger(__name__)

METADATA_FILE = "index-cache.toml"
BODY_FILE = "index.yaml"
DEFAULT_MAX_AGE = timedelta(hours=24)


@dataclass(frozen=True)
class IndexCache:
    location: str
    fingerprint: str
    updated: datetime
    body: str

    def is_fresh(self, now: datetime, max_age: timedelta = DEFAULT_MAX_AGE) -> bool:
        return now - self.updated < max_age


def read_index_cache(cache_dir: Path) -> IndexCache | None:
    metadata_path = cache_dir / METADATA_FILE
    body_path = cache_dir / BODY_FILE
    if not metadata_path.exists() or not body_path.exists():
        return None

    try:
        with open(metadata_path, "rb") as f:
            data = tomli.load(f)
        body = body_path.read_text(encoding="utf-8")
    except (OSError, tomli.TOMLDecodeError) as e:
        logger.debug("Ignoring unreadable index cache in %s: %s", cache_dir, e)
        return None

    table = data.get("index", {})
    updated = table.get("updated")
    if not isinstance(updated, datetime) or updated.tzinfo is None:
        logger.debug("Ignoring index cache without a valid timestamp")
        return None

    return IndexCache(
        location=str(table.get("location", "")),
        fingerprint=str(table.get("fingerprint", "")),
        updated=updated,
        body=body,
    )


def write_index_cache(cache_dir: Path, cache: IndexCache) -> None:
    metadata = {
        "index": {
            "location": cache.location,
            "fingerprint": cache.fingerprint,
            "updated": cache.updated,
        }
    }
    try:
        cache_dir.mkdir(parents=True, exist_ok=True)
        (cache_dir / BODY_FILE).write_text(cache.body, encoding="utf-8")
        with open(cache_dir / METADATA_FILE, "wb") as f:
            tomli_w.dump(metadata, f)
    except OSError as e:
        logger.debug("Failed to write index cache to %s: %s", cache_dir, e)
        return
    logger.debug("Cached index %s (fingerprint %s)", cache.location, cache.fingerprint)
