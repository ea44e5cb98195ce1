"""Ordinal-aware stable sorting of numbered titles ("Module 3", "Lesson 12")"""

import re
from typing import Callable, Optional, Sequence, TypeVar


T = TypeVar("T")

MODULE_NUMBER_RE = re.compile(r'module\s*(\d+)', re.IGNORECASE)
LESSON_NUMBER_RE = re.compile(r'lesson\s*(\d+)', re.IGNORECASE)


def _number(pattern: re.Pattern, title: Optional[str]) -> int | None:
    if not title:
        return None
    m = pattern.search(title)
    return int(m.group(1)) if m else None


def module_number(title: Optional[str]) -> int | None:
    """Return N from 'Module N' anywhere in title, else None."""
    return _number(MODULE_NUMBER_RE, title)


def lesson_number(title: Optional[str]) -> int | None:
    """Return N from 'Lesson N' anywhere in title, else None."""
    return _number(LESSON_NUMBER_RE, title)


def sort_by_ordinal(entries: Sequence[T], ordinal: Callable[[T], int | None]) -> list[T]:
    """Stable sort: numbered entries first, ascending; unnumbered keep input order.

    The key is (has_no_ordinal, ordinal, original_index), so ties between equal
    ordinals also fall back to input order.
    """
    keyed = []
    for index, entry in enumerate(entries):
        n = ordinal(entry)
        keyed.append(((n is None, n if n is not None else 0, index), entry))
    keyed.sort(key=lambda pair: pair[0])
    return [entry for _, entry in keyed]
