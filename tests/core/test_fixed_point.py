"""Tests for checked integer arithmetic."""

import pytest

from trust_tier_sim.core.errors import Overflow, Underflow
from trust_tier_sim.core.fixed_point import (
    U16_MAX,
    U64_MAX,
    add,
    check_bps,
    check_u16,
    div_scaled,
    mul_div_trunc,
    mul_scaled,
    saturating_add,
    saturating_sub,
    sub,
)


def test_add_overflow() -> None:
    """Checked addition raises instead of wrapping."""
    assert add(U64_MAX - 1, 1) == U64_MAX
    with pytest.raises(Overflow):
        add(U64_MAX, 1)


def test_sub_underflow() -> None:
    """Checked subtraction refuses to go below zero."""
    assert sub(5, 5) == 0
    with pytest.raises(Underflow):
        sub(1, 2)


def test_saturating_ops() -> None:
    """Saturating operations clamp to the u64 range."""
    assert saturating_add(U64_MAX, 10) == U64_MAX
    assert saturating_sub(3, 10) == 0


def test_mul_scaled_rounds_down() -> None:
    """a * b / scale truncates toward zero."""
    assert mul_scaled(999, 5_000, 10_000) == 499
    assert mul_scaled(5_000, 150, 100) == 7_500


def test_div_scaled_by_zero() -> None:
    """Division by zero is reported as overflow."""
    assert div_scaled(1, 4, 10_000) == 2_500
    with pytest.raises(Overflow):
        div_scaled(1, 0, 10_000)


def test_mul_div_trunc_is_symmetric() -> None:
    """Negative steps truncate toward zero, like positive ones."""
    assert mul_div_trunc(15, 1, 8) == 1
    assert mul_div_trunc(-15, 1, 8) == -1
    assert mul_div_trunc(-7, 1, 8) == 0


def test_range_checks() -> None:
    """u16 and bps range checks reject out-of-range values."""
    assert check_u16(U16_MAX) == U16_MAX
    with pytest.raises(Overflow):
        check_u16(U16_MAX + 1)
    with pytest.raises(Overflow):
        check_bps(10_001)
    with pytest.raises(Underflow):
        check_bps(-1)
