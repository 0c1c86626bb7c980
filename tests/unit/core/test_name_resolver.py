"""Tests for tiered name resolution."""

import pytest

from start_assets.core.errors import AmbiguousError, NotFoundError, ValidationError
from start_assets.core.name_resolver import find_candidates, resolve_all, resolve_one

ITEMS = {
    "cwd/dotai/create-role": "Create a role",
    "golang/review/architecture": "Architecture review",
    "golang/review/code": "Code review",
}


def test_exact_key_wins_over_substring_matches() -> None:
    """An exact key returns immediately even when it is a substring of other keys."""
    items = {"go": 1, "golang": 2, "go-review": 3}

    assert resolve_one(items, "role", "go") == ("go", 1)


def test_case_insensitive_full_key() -> None:
    """Uppercase query resolves to the same key as lowercase."""
    items = {"create-role": 1, "create-task": 2}

    assert resolve_one(items, "task", "CREATE-ROLE") == ("create-role", 1)
    assert resolve_one(items, "task", "create-role") == ("create-role", 1)


def test_substring_unique_match() -> None:
    """A unique substring resolves to the full key."""
    assert resolve_one(ITEMS, "task", "create-role") == ("cwd/dotai/create-role", "Create a role")


def test_substring_ambiguous_lists_every_candidate() -> None:
    """Several substring matches fail resolve_one with every key listed."""
    with pytest.raises(AmbiguousError) as exc_info:
        resolve_one(ITEMS, "task", "review")

    assert exc_info.value.candidates == ["golang/review/architecture", "golang/review/code"]
    assert "golang/review/architecture" in str(exc_info.value)
    assert "golang/review/code" in str(exc_info.value)


def test_resolve_all_returns_every_candidate() -> None:
    """resolve_all accepts ambiguity and returns all matches."""
    assert resolve_all(ITEMS, "task", "review") == [
        "golang/review/architecture",
        "golang/review/code",
    ]


def test_regex_dot_matches_separator() -> None:
    """A dotted query finds the slash-separated key."""
    assert resolve_one(ITEMS, "task", "golang.review.architecture")[0] == (
        "golang/review/architecture"
    )


def test_regex_tier_only_runs_when_substring_finds_nothing() -> None:
    """Candidates come from the first tier with results, not from all tiers."""
    items = {"a.b": 1, "axb": 2}

    # "a.b" is an exact key
    assert resolve_all(items, "role", "a.b") == ["a.b"]
    # "A.B" matches "a.b" case-insensitively; the regex tier would also match "axb"
    assert resolve_all(items, "role", "A.B") == ["a.b"]


def test_case_insensitive_tier_can_be_ambiguous() -> None:
    """Keys differing only in case are all reported by the casefold tier."""
    items = {"Review": 1, "review": 2}

    with pytest.raises(AmbiguousError) as exc_info:
        resolve_one(items, "role", "REVIEW")

    assert exc_info.value.candidates == ["Review", "review"]


def test_not_found_message_names_kind_and_query() -> None:
    """No candidates fails with NotFoundError."""
    with pytest.raises(NotFoundError, match="task matching 'python' not found"):
        resolve_one(ITEMS, "task", "python")


def test_invalid_regex_is_not_found() -> None:
    """A query that fails every tier and does not compile reports the pattern error."""
    with pytest.raises(NotFoundError, match="invalid pattern"):
        resolve_all(ITEMS, "task", "[unclosed")


def test_empty_query_is_rejected() -> None:
    """A blank query would match everything, so it is refused."""
    with pytest.raises(ValidationError):
        find_candidates(list(ITEMS), "task", "   ")


def test_candidates_are_sorted() -> None:
    """Candidate order is deterministic regardless of mapping order."""
    items = {"z-review": 1, "a-review": 2, "m-review": 3}

    assert resolve_all(items, "role", "review") == ["a-review", "m-review", "z-review"]
