"""
Set relationships over plain sequences.

Tags arrive as ordered sequences but are compared as sets: order and
duplicates never change an answer.  Elements are compared with ``==``
so unhashable values work too.
"""

from __future__ import annotations

from typing import Any, Iterable


def member(needle: Any, haystack: Iterable[Any]) -> bool:
    """True if any element of *haystack* equals *needle*."""
    return any(needle == e for e in haystack)


def subset(required: Iterable[Any], actual: Iterable[Any]) -> bool:
    """
    True if every element of *required* is present in *actual*.

    The empty collection is a subset of everything, including itself.
    """
    actual = list(actual)
    return all(member(r, actual) for r in required)


def overlap(a: Iterable[Any], b: Iterable[Any]) -> bool:
    """True if *a* and *b* have at least one element in common."""
    a = list(a)
    return any(member(e, a) for e in b)


def disjoint(a: Iterable[Any], b: Iterable[Any]) -> bool:
    """True if *a* and *b* have no element in common."""
    return not overlap(a, b)
