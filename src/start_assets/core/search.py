"""Multi-term search over stored entries and the registry catalog.

Queries are split on whitespace and commas. Every term must match (AND).
A term containing regex metacharacters is compiled as a case-insensitive
regular expression; any other term is a case-insensitive substring test.
Either form is tested against the entry's name, description and tags.
"""

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from start_assets.core.catalog import CatalogIndex
from start_assets.core.category import Category
from start_assets.core.errors import TransportError, ValidationError
from start_assets.core.models import ConfigScope, SearchResult
from start_assets.core.scope import ScopeResolver

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3


@dataclass(frozen=True)
class SearchTerm:
    """One parsed query term. pattern is None for plain substring terms."""

    text: str
    pattern: re.Pattern[str] | None

    def matches(self, value: str) -> bool:
        if self.pattern is not None:
            return self.pattern.search(value) is not None
        return self.text.casefold() in value.casefold()


@dataclass(frozen=True)
class SearchSection:
    """Results from one source, labelled for display."""

    label: str
    results: list[SearchResult]
    path: Path | None = None


@dataclass(frozen=True)
class SearchReport:
    sections: list[SearchSection]
    registry_error: TransportError | None = None

    @property
    def is_empty(self) -> bool:
        return not self.sections


def _split(text: str) -> list[str]:
    return text.replace(",", " ").split()


def parse_search_terms(text: str) -> list[str]:
    """Split into unique lowercased terms. Used for tag filters."""
    terms: list[str] = []
    for part in _split(text):
        lowered = part.lower()
        if lowered not in terms:
            terms.append(lowered)
    return terms


def parse_search_patterns(text: str) -> list[str]:
    """Split into unique terms, keeping the casing of the first occurrence.

    Case is kept because regex escapes such as \\S and \\d are case-sensitive.
    """
    seen: set[str] = set()
    patterns: list[str] = []
    for part in _split(text):
        key = part.casefold()
        if key not in seen:
            seen.add(key)
            patterns.append(part)
    return patterns


def compile_search_terms(terms: Iterable[str]) -> list[SearchTerm]:
    """Compile every term up front.

    Raises:
        ValidationError: If any term with regex metacharacters does not compile
    """
    compiled: list[SearchTerm] = []
    for term in terms:
        if re.escape(term) == term:
            compiled.append(SearchTerm(text=term, pattern=None))
            continue
        try:
            pattern = re.compile(term, re.IGNORECASE)
        except re.error as e:
            raise ValidationError(f"invalid search pattern {term!r}: {e}") from e
        compiled.append(SearchTerm(text=term, pattern=pattern))
    return compiled


def validate_search_query(terms: list[str], tags: list[str]) -> None:
    """Require at least three query characters unless a tag filter is given.

    Raises:
        ValidationError: If the query is too short
    """
    total = sum(len(term) for term in terms)
    if total < MIN_QUERY_LENGTH and not tags:
        raise ValidationError(f"query must be at least {MIN_QUERY_LENGTH} characters")


def _matches_terms(result: SearchResult, terms: list[SearchTerm]) -> bool:
    fields = [result.name, result.description, *result.tags]
    return all(any(term.matches(field) for field in fields) for term in terms)


def _matches_tags(result: SearchResult, tags: list[str]) -> bool:
    entry_tags = {tag.casefold() for tag in result.tags}
    return all(tag.casefold() in entry_tags for tag in tags)


def search(entries: Iterable[SearchResult], query: str, tags: list[str]) -> list[SearchResult]:
    """Filter entries by query terms and tag filters, keeping input order.

    Args:
        entries: Candidates in the order they should be returned
        query: Free-text query, may be empty when tags are given
        tags: Tag filters, every one must be present on the entry

    Raises:
        ValidationError: If the query is too short or a pattern is malformed
    """
    patterns = parse_search_patterns(query)
    tag_filters = parse_search_terms(",".join(tags))
    validate_search_query(patterns, tag_filters)
    terms = compile_search_terms(patterns)

    return [
        result
        for result in entries
        if _matches_terms(result, terms) and _matches_tags(result, tag_filters)
    ]


def search_catalog(index: CatalogIndex, query: str, tags: list[str]) -> list[SearchResult]:
    return search(index.search_results(), query, tags)


def scope_results(resolver: ScopeResolver, scope: ConfigScope) -> list[SearchResult]:
    """Stored entries of one scope as search candidates, in display order."""
    results: list[SearchResult] = []
    for category in Category:
        loaded = resolver.load_single(scope, category, tolerant=True)
        for name in loaded.display_names():
            entry = loaded.entries[name]
            results.append(SearchResult(category=category, name=name, entry=entry))
    return results


def search_everywhere(
    resolver: ScopeResolver,
    fetch_index: Callable[[], CatalogIndex],
    query: str,
    tags: list[str],
) -> SearchReport:
    """Search local config, global config and the registry.

    The query is validated before anything is loaded. A TransportError from
    fetch_index is recorded on the report rather than raised, so stored
    results are still returned when the registry is unavailable.
    """
    validate_search_query(parse_search_patterns(query), parse_search_terms(",".join(tags)))
    compile_search_terms(parse_search_patterns(query))

    sections: list[SearchSection] = []
    for scope in (ConfigScope.LOCAL, ConfigScope.GLOBAL):
        if not resolver.scope_exists(scope):
            continue
        results = search(scope_results(resolver, scope), query, tags)
        if results:
            sections.append(
                SearchSection(label=scope.value, results=results, path=resolver.target_dir(scope))
            )

    registry_error: TransportError | None = None
    try:
        index = fetch_index()
    except TransportError as e:
        logger.debug("Registry unavailable during search: %s", e)
        registry_error = e
    else:
        results = search_catalog(index, query, tags)
        if results:
            sections.append(SearchSection(label="registry", results=results))

    return SearchReport(sections=sections, registry_error=registry_error)
