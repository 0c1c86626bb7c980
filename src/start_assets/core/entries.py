"""Add, edit and remove stored entries in one scope."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TypeVar

from start_assets.core.category import Category
from start_assets.core.errors import AmbiguousError, TerminalRequiredError, ValidationError
from start_assets.core.models import CategoryEntry, ConfigScope, validate_content_source
from start_assets.core.name_resolver import resolve_all, resolve_one
from start_assets.core.prompts import Prompter
from start_assets.core.scope import ScopeResolver

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass(frozen=True)
class EntryChanges:
    """Field replacements for edit_entry. None leaves a field untouched."""

    description: str | None = None
    tags: tuple[str, ...] | None = None
    file: str | None = None
    command: str | None = None
    prompt: str | None = None

    @property
    def replaces_content(self) -> bool:
        return any(value is not None for value in (self.file, self.command, self.prompt))

    @property
    def is_empty(self) -> bool:
        return not self.replaces_content and self.description is None and self.tags is None


def add_entry(resolver: ScopeResolver, scope: ConfigScope, entry: CategoryEntry) -> Path:
    """Append a new entry to a scope.

    Raises:
        ValidationError: If the name exists in the scope or the content
            source is not exactly one of file, command, prompt
    """
    validate_content_source(entry.file, entry.command, entry.prompt)

    loaded = resolver.load_single(scope, entry.category, tolerant=True)
    if loaded.get(entry.name) is not None:
        raise ValidationError(
            f"{entry.category.value} {entry.name!r} already exists in {scope.value} config"
        )
    path = resolver.write(scope, loaded.upsert(entry))
    logger.debug("Added %s/%s to %s", entry.category.plural, entry.name, path)
    return path


def apply_changes(entry: CategoryEntry, changes: EntryChanges) -> CategoryEntry:
    """Return entry with changes applied.

    Replacing the content source drops the other two sources and clears
    origin, since the entry no longer matches the installed module.

    Raises:
        ValidationError: If the result does not have exactly one content source
    """
    updated = entry
    if changes.description is not None:
        updated = replace(updated, description=changes.description)
    if changes.tags is not None:
        updated = replace(updated, tags=changes.tags)
    if changes.replaces_content:
        updated = replace(
            updated,
            file=changes.file,
            command=changes.command,
            prompt=changes.prompt,
            origin="",
        )
    validate_content_source(updated.file, updated.command, updated.prompt)
    return updated


def edit_entry(
    resolver: ScopeResolver,
    scope: ConfigScope,
    category: Category,
    query: str,
    changes: EntryChanges,
) -> tuple[CategoryEntry, Path]:
    """Resolve query to one entry in scope and replace its fields in place.

    Raises:
        NotFoundError: If the scope or entry does not exist
        AmbiguousError: If query matches several entries
        ValidationError: If the edit would break the content-source rule
    """
    loaded = resolver.load_single(scope, category)
    _, entry = resolve_one(loaded.entries, category.value, query)
    updated = apply_changes(entry, changes)
    path = resolver.write(scope, loaded.upsert(updated))
    return updated, path


def remove_entries(
    resolver: ScopeResolver, scope: ConfigScope, category: Category, names: list[str]
) -> Path:
    """Remove names and their order positions with a single write."""
    loaded = resolver.load_single(scope, category)
    path = resolver.write(scope, loaded.without(names))
    logger.debug("Removed %s from %s", ", ".join(names), path)
    return path


def resolve_remove_names(
    items: Mapping[str, V],
    kind: str,
    queries: list[str],
    *,
    assume_yes: bool,
    prompter: Prompter,
) -> list[str]:
    """Resolve removal queries to names, de-duplicated in first-seen order.

    A query matching several names removes them all with assume_yes. With
    one query and a terminal the user picks from the matches. Otherwise the
    query must be made exact.

    Returns:
        Names to remove, or an empty list when the user cancelled

    Raises:
        NotFoundError: If a query matches nothing
        AmbiguousError: If one of several queries is ambiguous without assume_yes
        TerminalRequiredError: If a single ambiguous query needs a choice and
            no terminal is attached
    """
    resolved: list[str] = []
    for query in queries:
        candidates = resolve_all(items, kind, query)
        if len(candidates) > 1 and not assume_yes:
            if len(queries) > 1:
                raise AmbiguousError(
                    f"{query!r} matches multiple {kind}s: use an exact name "
                    "or pass --yes to remove all matches",
                    candidates,
                )
            if not prompter.interactive:
                raise TerminalRequiredError(
                    f"--yes flag required in non-interactive mode for ambiguous {kind} {query!r}"
                )
            candidates = prompter.choose_many(candidates, kind, query)
            if not candidates:
                return []
        for name in candidates:
            if name not in resolved:
                resolved.append(name)
    return resolved


def reorder_entries(
    resolver: ScopeResolver, scope: ConfigScope, category: Category, new_order: list[str]
) -> Path:
    """Replace the definition order of a category with a single write.

    Raises:
        NotFoundError: If the scope does not exist
        ValidationError: If the category is unordered or new_order is not a
            permutation of the stored names
    """
    if not category.ordered:
        raise ValidationError(f"{category.plural} have no definition order")

    loaded = resolver.load_single(scope, category)
    if sorted(new_order) != sorted(loaded.order):
        raise ValidationError(
            f"new order must list each {category.value} in {scope.value} config exactly once"
        )
    path = resolver.write(scope, replace(loaded, order=list(new_order)))
    logger.debug("Reordered %s in %s: %s", category.plural, path, ", ".join(new_order))
    return path
