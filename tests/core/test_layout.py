"""Tests for the fixed-width record layout."""

import pytest

from trust_tier_sim.core.layout import (
    REPUTATION_RECORD_SIZE,
    STAKE_RECORD_SIZE,
    pack_reputation,
    pack_stake,
    unpack_reputation,
    unpack_stake,
)
from trust_tier_sim.core.reputation import ReputationRecord
from trust_tier_sim.core.staking import StakeRecord
from trust_tier_sim.core.tiers import AccessTier


def test_record_sizes() -> None:
    """Records are fixed width."""
    assert REPUTATION_RECORD_SIZE == 42
    assert STAKE_RECORD_SIZE == 19
    assert len(pack_reputation(ReputationRecord())) == 42
    assert len(pack_stake(StakeRecord.empty())) == 19


def test_reputation_decodes_to_equal_record() -> None:
    """A packed reputation record decodes to an equal record."""
    record = ReputationRecord(
        score=9_999,
        total_jobs=10,
        successful_jobs=7,
        disputed_jobs=3,
        last_payment_at=1_700_000_000,
        total_payment_volume=2**64 - 1,
    )
    assert unpack_reputation(pack_reputation(record)) == record


def test_stake_mismatch_rejected() -> None:
    """A stored tier that disagrees with the amount is rejected."""
    bad = StakeRecord(amount_staked=5_000, tier=AccessTier.BASIC, revenue_multiplier=100)
    with pytest.raises(ValueError):
        unpack_stake(pack_stake(bad))
    good = StakeRecord(amount_staked=5_000, tier=AccessTier.VERIFIED, revenue_multiplier=150, lock_expires_at=9)
    assert unpack_stake(pack_stake(good)) == good


def test_wrong_length_rejected() -> None:
    """Truncated buffers are rejected."""
    with pytest.raises(ValueError):
        unpack_reputation(b"\x00" * 41)
    with pytest.raises(ValueError):
        unpack_stake(b"\x00" * 20)
