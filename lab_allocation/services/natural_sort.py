# /lab_allocation/services/natural_sort.py

"""
Natural ("human") ordering for computer names, so that "Computer 2" sorts
before "Computer 10".

A name is split into alternating runs of non-digits and digits. Splitting on
a capturing group always puts text at even indices and digit runs at odd
indices (possibly with empty text at either end), so when two keys are
compared position by position both sides hold the same kind of value. That
is what makes the order total: every pair of names compares consistently,
including awkward inputs such as "A10B" vs "A9C" or "Computer 01" vs
"Computer 1".
"""

import re
from typing import Any, Iterable, List, Tuple, TypeVar, Callable

_DIGIT_RUN = re.compile(r"(\d+)")

T = TypeVar("T")


def _segments(name: str) -> List[str]:
    return _DIGIT_RUN.split(name)


def _numeric_value(digits: str) -> Tuple[int, str]:
    significant = digits.lstrip("0")
    return (len(significant), significant)


def natural_sort_key(name: str) -> Tuple[Any, ...]:
    """
    Returns a sort key for `name`.

    Primary key: text runs compared case-insensitively, digit runs by numeric
    value, left to right; a name whose segments are a prefix of another's
    sorts first. A digit run is compared by its length without leading zeros
    and then digit by digit, so runs of any length work without an integer
    conversion. Ties on the primary key (for example "Computer 01" and
    "Computer 1", or "lab" and "Lab") are broken by digit-run length and then
    by the raw string, so only identical names compare equal.
    """
    parts = _segments(name)
    primary = [_numeric_value(part) if i % 2 else part.casefold() for i, part in enumerate(parts)]
    digit_widths = [len(part) for part in parts[1::2]]
    return (primary, digit_widths, name)


def natural_compare(a: str, b: str) -> int:
    """Three-way comparison: negative if a < b, zero if equal, positive if a > b."""
    key_a, key_b = natural_sort_key(a), natural_sort_key(b)
    return (key_a > key_b) - (key_a < key_b)


def natural_sorted(items: Iterable[T], key: Callable[[T], str] = lambda item: item) -> List[T]:
    """Stable natural sort of `items`, using `key` to extract the name."""
    return sorted(items, key=lambda item: natural_sort_key(key(item)))
