"""
Tests for tolerant numeric comparison.

Boundary values pin the exact ratio semantics: the ratio is always
``x / y`` and both bounds are strict, so the comparison is not
symmetric in its arguments.
"""

from decimal import Decimal

import pytest

from vigil.core.numeric import approx_equal


class _Zeroish:
    """Never equal to anything, and every division by or of it is undefined."""

    def __eq__(self, other: object) -> bool:
        return False

    def __truediv__(self, other: object) -> float:
        raise ZeroDivisionError("undefined")


class TestApproxEqual:
    """Test approx_equal."""

    @pytest.mark.parametrize("x", [0, 1, -3, 0.001, 1e12, -2.5])
    @pytest.mark.parametrize("tol", [0, 0.01, 0.5, 2])
    def test_reflexive(self, x: float, tol: float) -> None:
        assert approx_equal(x, x, tol) is True

    def test_far_apart(self) -> None:
        assert approx_equal(1, 100, 0.5) is False

    def test_zero_zero(self) -> None:
        assert approx_equal(0, 0) is True

    def test_zero_denominator_does_not_raise(self) -> None:
        """1/0 falls back to 0/1."""
        assert approx_equal(1, 0, 0.01) is False

    def test_zero_numerator(self) -> None:
        assert approx_equal(0, 1) is False

    def test_close_values_default_tolerance(self) -> None:
        assert approx_equal(1.0, 1.005) is True
        assert approx_equal(1.0, 1.05) is False

    def test_decimal_zero_denominator(self) -> None:
        assert approx_equal(Decimal(1), Decimal(0)) is False

    def test_both_divisions_undefined(self) -> None:
        assert approx_equal(_Zeroish(), _Zeroish()) is False


class TestApproxEqualBoundaries:
    """Boundary behaviour with exactly representable tolerances."""

    def test_lower_bound_is_exclusive(self) -> None:
        # 1 / 2 == 0.5 == 1 - 0.5
        assert approx_equal(1, 2, 0.5) is False

    def test_upper_bound_is_exclusive(self) -> None:
        # 3 / 2 == 1.5 == 1 + 0.5
        assert approx_equal(3, 2, 0.5) is False

    def test_asymmetric_in_arguments(self) -> None:
        """2/3 is inside (0.5, 1.5) while 3/2 sits on the upper bound."""
        assert approx_equal(2, 3, 0.5) is True
        assert approx_equal(3, 2, 0.5) is False

    def test_quarter_tolerance(self) -> None:
        assert approx_equal(4, 5, 0.25) is True   # 0.8 > 0.75
        assert approx_equal(5, 4, 0.25) is False  # 1.25 is not < 1.25

    def test_zero_tolerance_only_exact(self) -> None:
        assert approx_equal(1, 1.0000001, 0) is False
        assert approx_equal(2, 2.0, 0) is True

    def test_negative_ratio(self) -> None:
        assert approx_equal(-1, 1, 0.5) is False
