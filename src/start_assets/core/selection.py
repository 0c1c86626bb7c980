"""Parsing of interactive selections over a numbered list.

The list is displayed 1-based; parsed selections are returned as zero-based
indices. Accepted input:

    all          every item, in list order
    2            a single item
    1-3          an inclusive ascending range
    3,1,2-4      comma-separated items and ranges, kept in typed order

Empty input means the user cancelled and yields an empty result.
"""

import re

from start_assets.core.errors import ValidationError
from start_assets.core.name_resolver import resolve_all

ALL_TOKEN = "all"

_NUMERIC_SELECTION = re.compile(r"^[\d\s,\-]+$")


def _parse_index(token: str, count: int) -> int:
    hint = f"enter a number between 1 and {count}"
    try:
        value = int(token)
    except ValueError as e:
        raise ValidationError(f"invalid selection {token!r}: {hint}") from e
    if value < 1 or value > count:
        raise ValidationError(f"selection {token!r} out of range: {hint}")
    return value


def parse_selection(text: str, count: int) -> list[int]:
    """Parse selection input over a list of count items.

    Results are the concatenation of tokens in typed order, neither sorted
    nor de-duplicated.

    Args:
        text: Raw user input
        count: Number of displayed items

    Returns:
        Zero-based indices, or an empty list when the input is blank

    Raises:
        ValidationError: On a malformed token, an out-of-range number, or a
            reversed range
    """
    stripped = text.strip()
    if not stripped:
        return []

    if stripped.lower() == ALL_TOKEN:
        return list(range(count))

    indices: list[int] = []
    for raw in stripped.split(","):
        token = raw.strip()
        if not token:
            continue

        dash = token.find("-")
        if dash > 0:
            start = _parse_index(token[:dash].strip(), count)
            end = _parse_index(token[dash + 1 :].strip(), count)
            if start > end:
                raise ValidationError(f"invalid range {token!r}: start is greater than end")
            indices.extend(range(start - 1, end))
        else:
            indices.append(_parse_index(token, count) - 1)

    return indices


def parse_single_selection(text: str, count: int) -> int | None:
    """Parse a single 1-based number. Returns None when the input is blank.

    Raises:
        ValidationError: If the input is not one number in range
    """
    stripped = text.strip()
    if not stripped:
        return None
    return _parse_index(stripped, count) - 1


def select_names(text: str, names: list[str], kind: str) -> list[str]:
    """Selection that also accepts item names ahead of numeric input.

    A full name (exact or case-insensitive) selects that item. "all" and
    numeric input go through parse_selection. Anything else is resolved
    against the names with resolve_all.

    Raises:
        ValidationError: On malformed numeric input
        NotFoundError: If a name query matches nothing
    """
    stripped = text.strip()
    if not stripped:
        return []

    if stripped in names:
        return [stripped]
    folded = [name for name in names if name.casefold() == stripped.casefold()]
    if len(folded) == 1:
        return folded

    if stripped.lower() == ALL_TOKEN or _NUMERIC_SELECTION.match(stripped):
        return [names[i] for i in parse_selection(stripped, len(names))]

    return resolve_all(dict.fromkeys(names), kind, stripped)


def move_up(order: list[str], position: int) -> list[str]:
    """Return a copy of order with the item at 1-based position moved up one place.

    Raises:
        ValidationError: If position is not in 2..len(order)
    """
    if position < 2 or position > len(order):
        raise ValidationError(f"cannot move item {position} up in a list of {len(order)}")
    moved = list(order)
    moved[position - 2], moved[position - 1] = moved[position - 1], moved[position - 2]
    return moved
