"""Catalog index model: one immutable registry snapshot.

The serialized index is a YAML document with one mapping per category:

    version: v0.3.1
    roles:
      golang/assistant:
        module: roles/golang/assistant
        version: v0.1.2
        description: Go programming expert
        tags: [golang, programming]
"""

from types import MappingProxyType

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from start_assets.core.category import Category
from start_assets.core.errors import TransportError
from start_assets.core.models import CatalogEntry, SearchResult


class IndexEntryModel(BaseModel):
    """Wire schema of one index record. Unknown fields are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    module: str = Field(..., min_length=1)
    version: str = ""
    description: str = ""
    tags: list[str] = Field(default_factory=list)


class IndexDocument(BaseModel):
    """Wire schema of the whole index document."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    version: str = ""
    agents: dict[str, IndexEntryModel] = Field(default_factory=dict)
    roles: dict[str, IndexEntryModel] = Field(default_factory=dict)
    contexts: dict[str, IndexEntryModel] = Field(default_factory=dict)
    tasks: dict[str, IndexEntryModel] = Field(default_factory=dict)


class CatalogIndex:
    """Mapping from category to name -> CatalogEntry for one fetched snapshot.

    No mutation: a fresh fetch produces a new instance. fingerprint identifies
    the snapshot for caching (see core/cache.py).
    """

    def __init__(
        self,
        entries: dict[Category, dict[str, CatalogEntry]],
        *,
        fingerprint: str = "",
        version: str = "",
    ) -> None:
        self._entries = MappingProxyType(
            {category: MappingProxyType(dict(entries.get(category, {}))) for category in Category}
        )
        self._fingerprint = fingerprint
        self._version = version

    @property
    def fingerprint(self) -> str:
        return self._fingerprint

    @property
    def version(self) -> str:
        return self._version

    def category(self, category: Category) -> MappingProxyType:
        return self._entries[category]

    def get(self, category: Category, name: str) -> CatalogEntry | None:
        return self._entries[category].get(name)

    def all_entries(self) -> list[tuple[Category, str, CatalogEntry]]:
        """Flat list ordered by category display order, then name."""
        result: list[tuple[Category, str, CatalogEntry]] = []
        for category in Category:
            for name in sorted(self._entries[category]):
                result.append((category, name, self._entries[category][name]))
        return result

    def search_results(self) -> list[SearchResult]:
        return [SearchResult(category, name, entry) for category, name, entry in self.all_entries()]

    def __len__(self) -> int:
        return sum(len(names) for names in self._entries.values())

    @classmethod
    def parse(cls, text: str, *, fingerprint: str = "") -> "CatalogIndex":
        """Parse a serialized YAML index.

        Raises:
            TransportError: If the document is not valid YAML or fails validation
        """
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise TransportError(f"Invalid index document: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise TransportError("Invalid index document: expected a mapping at top level")

        try:
            document = IndexDocument.model_validate(data)
        except PydanticValidationError as e:
            raise TransportError(f"Invalid index document: {e}") from e

        return cls.from_document(document, fingerprint=fingerprint)

    @classmethod
    def from_document(cls, document: IndexDocument, *, fingerprint: str = "") -> "CatalogIndex":
        sections = {
            Category.AGENT: document.agents,
            Category.ROLE: document.roles,
            Category.CONTEXT: document.contexts,
            Category.TASK: document.tasks,
        }
        entries = {
            category: {
                name: CatalogEntry(
                    category=category,
                    name=name,
                    module=record.module,
                    version=record.version,
                    description=record.description,
                    tags=tuple(record.tags),
                )
                for name, record in section.items()
            }
            for category, section in sections.items()
        }
        return cls(entries, fingerprint=fingerprint, version=document.version)
