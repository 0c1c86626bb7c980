"""Ambiguity-aware lookup of user-supplied names against stored keys.

Matching runs in tiers and stops at the first tier that finds anything:

1. exact key
2. case-insensitive full key
3. case-insensitive substring
4. case-insensitive regular expression searched within the key

A regex "." matches any character, so "golang.review.code" finds the key
"golang/review/code".
"""

import logging
import re
from collections.abc import Callable, Mapping
from typing import TypeVar

from start_assets.core.errors import AmbiguousError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

V = TypeVar("V")


def _tier_casefold(keys: list[str], query: str) -> list[str]:
    folded = query.casefold()
    return [key for key in keys if key.casefold() == folded]


def _tier_substring(keys: list[str], query: str) -> list[str]:
    folded = query.casefold()
    return [key for key in keys if folded in key.casefold()]


def _tier_regex(keys: list[str], query: str) -> list[str]:
    pattern = re.compile(query, re.IGNORECASE)
    return [key for key in keys if pattern.search(key)]


_TIERS: list[tuple[str, Callable[[list[str], str], list[str]]]] = [
    ("casefold", _tier_casefold),
    ("substring", _tier_substring),
    ("regex", _tier_regex),
]


def find_candidates(keys: list[str], kind: str, query: str) -> list[str]:
    """Return the sorted keys matched by the first successful tier.

    Raises:
        ValidationError: If the query is empty
        NotFoundError: If no tier matches
    """
    if not query.strip():
        raise ValidationError(f"{kind} name is required")

    if query in keys:
        logger.debug("%s %r: exact match", kind, query)
        return [query]

    for tier_name, tier in _TIERS:
        try:
            matched = tier(keys, query)
        except re.error as e:
            raise NotFoundError(f"{kind} {query!r} not found (invalid pattern: {e})") from e
        if matched:
            logger.debug("%s %r: %d %s match(es)", kind, query, len(matched), tier_name)
            return sorted(matched)

    raise NotFoundError(f"{kind} matching {query!r} not found")


def resolve_one(items: Mapping[str, V], kind: str, query: str) -> tuple[str, V]:
    """Resolve query to exactly one key.

    Raises:
        NotFoundError: If nothing matches
        AmbiguousError: If several keys match at the same tier
    """
    candidates = find_candidates(list(items), kind, query)
    if len(candidates) > 1:
        raise AmbiguousError(
            f"ambiguous {kind} {query!r} matches multiple entries: {', '.join(candidates)}",
            candidates,
        )
    key = candidates[0]
    return key, items[key]


def resolve_all(items: Mapping[str, V], kind: str, query: str) -> list[str]:
    """Resolve query to every key matched by the first successful tier.

    Raises:
        NotFoundError: If nothing matches
    """
    return find_candidates(list(items), kind, query)
