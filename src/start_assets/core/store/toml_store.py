"""TOML-backed document store.

Each scope directory holds one document per category (agents.toml,
roles.toml, contexts.toml, tasks.toml). The document's top-level table is
named after the category and has one sub-table per entry, in definition order:

    [roles."golang/assistant"]
    origin = "roles/golang/assistant@v0.1.2"
    description = "Go expert"
    tags = ["golang"]
    prompt = "You are a Go expert."
"""

import logging
from pathlib import Path

import tomli
import tomli_w

from start_assets.core.category import Category
from start_assets.core.errors import NoDocumentsError, NotFoundError, StoreError
from start_assets.core.models import CategoryEntry
from start_assets.core.store.abc import DocumentStore, LoadedCategory

logger = logging.getLogger(__name__)

_KNOWN_FIELDS = ("origin", "description", "tags", "file", "command", "prompt")


class TomlDocumentStore(DocumentStore):
    """Production implementation reading and writing TOML files."""

    def exists(self, directory: Path) -> bool:
        return directory.is_dir()

    def load(self, directory: Path, category: Category) -> LoadedCategory:
        if not directory.is_dir():
            raise NotFoundError(f"Configuration directory not found: {directory}")

        if not any(directory.glob("*.toml")):
            raise NoDocumentsError(f"No configuration documents in {directory}")

        path = directory / category.filename
        if not path.exists():
            return LoadedCategory(category=category)

        try:
            with open(path, "rb") as f:
                data = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise StoreError(f"Invalid TOML in {path}: {e}") from e

        section = data.get(category.plural, {})
        if not isinstance(section, dict):
            raise StoreError(f"'{category.plural}' in {path} must be a table")

        entries: dict[str, CategoryEntry] = {}
        order: list[str] = []
        for name, record in section.items():
            if not isinstance(record, dict):
                raise StoreError(f"{category.value} '{name}' in {path} must be a table")
            entries[name] = _entry_from_record(name, category, record)
            order.append(name)

        logger.debug("Loaded %d %s from %s", len(order), category.plural, path)
        return LoadedCategory(category=category, entries=entries, order=order)

    def write(self, directory: Path, loaded: LoadedCategory) -> None:
        path = directory / loaded.category.filename
        section = {entry.name: _record_from_entry(entry) for entry in loaded.ordered_entries()}

        # Serialize fully before the file is replaced
        try:
            text = tomli_w.dumps({loaded.category.plural: section})
        except (TypeError, ValueError) as e:
            raise StoreError(f"Cannot serialize {loaded.category.plural} for {path}: {e}") from e

        temp_path = path.with_suffix(".toml.tmp")
        try:
            directory.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(text, encoding="utf-8")
            temp_path.replace(path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise StoreError(f"Cannot write {path}: {e}") from e

        logger.debug("Wrote %d %s to %s", len(section), loaded.category.plural, path)


def _entry_from_record(name: str, category: Category, record: dict) -> CategoryEntry:
    tags = record.get("tags", [])
    return CategoryEntry(
        name=name,
        category=category,
        description=str(record.get("description", "")),
        tags=tuple(str(tag) for tag in tags) if isinstance(tags, list) else (),
        origin=str(record.get("origin", "")),
        file=record.get("file"),
        command=record.get("command"),
        prompt=record.get("prompt"),
        extra={k: v for k, v in record.items() if k not in _KNOWN_FIELDS},
    )


def _record_from_entry(entry: CategoryEntry) -> dict[str, object]:
    # origin first so provenance is visible at the top of each entry
    record: dict[str, object] = {}
    if entry.origin:
        record["origin"] = entry.origin
    if entry.description:
        record["description"] = entry.description
    if entry.tags:
        record["tags"] = list(entry.tags)
    for field_name, value in (
        ("file", entry.file),
        ("command", entry.command),
        ("prompt", entry.prompt),
    ):
        if value:
            record[field_name] = value
    for key, value in entry.extra.items():
        if value is not None:
            record[key] = value
    return record
