"""
Tolerant numeric comparison.
"""

from __future__ import annotations

from decimal import InvalidOperation
from typing import Any

# Decimal's DivisionByZero subclasses ZeroDivisionError; 0/0 raises
# DivisionUndefined, which is an InvalidOperation.
_UNDEFINED_DIVISION = (ZeroDivisionError, InvalidOperation)


def approx_equal(x: Any, y: Any, tolerance: float = 0.01) -> bool:
    """
    True if *x* and *y* are roughly equal, such that ``x / y`` is within
    *tolerance* of unity.

    When ``x / y`` is undefined the reciprocal ``y / x`` is used instead.
    Bounds are strict: ``(1 - tolerance) < ratio < (1 + tolerance)``.
    If neither ratio is defined the values are not equal.
    """
    if x == y:
        return True
    try:
        ratio = x / y
    except _UNDEFINED_DIVISION:
        try:
            ratio = y / x
        except _UNDEFINED_DIVISION:
            return False
    return (1 - tolerance) < ratio < (1 + tolerance)
