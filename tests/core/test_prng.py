"""Tests for the seeded xorshift generator."""

import pytest

from trust_tier_sim.core.prng import XorShift64Star, splitmix64


def test_same_seed_same_stream() -> None:
    """Two generators with equal seeds produce identical outputs."""
    a = XorShift64Star(42)
    b = XorShift64Star(42)
    assert [a.next_u64() for _ in range(20)] == [b.next_u64() for _ in range(20)]


def test_different_seeds_diverge() -> None:
    """Different seeds give different first outputs."""
    assert XorShift64Star(1).next_u64() != XorShift64Star(2).next_u64()


def test_zero_seed_is_usable() -> None:
    """Seed 0 still yields a non-degenerate stream."""
    gen = XorShift64Star(0)
    values = {gen.next_u64() for _ in range(10)}
    assert len(values) == 10
    assert splitmix64(0) != 0


def test_below_and_between_bounds() -> None:
    """Bounded draws stay in range."""
    gen = XorShift64Star(7)
    for _ in range(500):
        assert 0 <= gen.below(10) < 10
        assert -5 <= gen.between(-5, 5) <= 5
    with pytest.raises(ValueError):
        gen.below(0)


def test_chance_bps_edges_consume_no_draw() -> None:
    """Certain and impossible events do not advance the stream."""
    gen = XorShift64Star(3)
    assert gen.chance_bps(0) is False
    assert gen.chance_bps(10_000) is True
    assert gen.draws == 0
    gen.chance_bps(5_000)
    assert gen.draws >= 1
