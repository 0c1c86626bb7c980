"""Core data model: scopes, stored entries, catalog entries, search results."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from start_assets.core.category import Category
from start_assets.core.errors import ValidationError

CONTENT_SOURCE_FIELDS = ("file", "command", "prompt")


class ConfigScope(Enum):
    """Configuration scope. Local shadows global for same-named entries."""

    GLOBAL = "global"
    LOCAL = "local"

    @classmethod
    def from_local_flag(cls, local: bool) -> "ConfigScope":
        return cls.LOCAL if local else cls.GLOBAL


@dataclass(frozen=True)
class CategoryEntry:
    """A stored configuration item.

    origin is empty for manually authored entries and `module@version` for
    entries installed from the registry. extra carries category-specific
    fields (bin, models, role, required, ...) that the engine passes through
    without interpreting.
    """

    name: str
    category: Category
    description: str = ""
    tags: tuple[str, ...] = ()
    source: ConfigScope | None = None
    origin: str = ""
    file: str | None = None
    command: str | None = None
    prompt: str | None = None
    extra: Mapping[str, object] = field(default_factory=dict)

    @property
    def is_registry_sourced(self) -> bool:
        return self.origin != ""

    @property
    def installed_version(self) -> str:
        return version_from_origin(self.origin)


@dataclass(frozen=True)
class CatalogEntry:
    """Immutable registry record from one index snapshot."""

    category: Category
    name: str
    module: str
    version: str = ""
    description: str = ""
    tags: tuple[str, ...] = ()

    @property
    def origin(self) -> str:
        """Origin recorded on entries installed from this record."""
        return make_origin(self.module, self.version)


@dataclass(frozen=True)
class SearchResult:
    """A category+name paired with either a stored or a catalog entry."""

    category: Category
    name: str
    entry: CategoryEntry | CatalogEntry

    @property
    def description(self) -> str:
        return self.entry.description

    @property
    def tags(self) -> tuple[str, ...]:
        return self.entry.tags

    @property
    def path(self) -> str:
        """Display path, e.g. "roles/golang/assistant"."""
        return f"{self.category.plural}/{self.name}"


def validate_content_source(file: str | None, command: str | None, prompt: str | None) -> None:
    """Ensure exactly one of file, command, prompt is populated.

    Raises:
        ValidationError: If zero or several content sources are set
    """
    values = (file, command, prompt)
    populated = [name for name, value in zip(CONTENT_SOURCE_FIELDS, values) if value]
    if len(populated) == 0:
        raise ValidationError("one of file, command or prompt is required")
    if len(populated) > 1:
        raise ValidationError(
            f"only one of file, command or prompt may be set (got {', '.join(populated)})"
        )


def make_origin(module: str, version: str) -> str:
    if not version:
        return module
    return f"{module}@{version}"


def version_from_origin(origin: str) -> str:
    """Return the version part of `module@version` ("" when absent)."""
    _, sep, version = origin.rpartition("@")
    if not sep:
        return ""
    return version
