"""Fixed-width binary layout for persisted records.

Both records are fixed width (no variable-length fields) so the host ledger
can pre-allocate storage. All fields are little endian.

    ReputationRecord (42 bytes)
        u16 score | u64 total_jobs | u64 successful_jobs | u64 disputed_jobs
        | i64 last_payment_at | u64 total_payment_volume

    StakeRecord (19 bytes)
        u64 amount_staked | u8 tier | u16 revenue_multiplier | i64 lock_expires_at
"""

import struct

from trust_tier_sim.core.reputation import ReputationRecord
from trust_tier_sim.core.staking import StakeRecord
from trust_tier_sim.core.tiers import DEFAULT_TIER_TABLE, AccessTier, TierTable, classify

REPUTATION_FORMAT = struct.Struct("<HQQQqQ")
STAKE_FORMAT = struct.Struct("<QBHq")

REPUTATION_RECORD_SIZE = REPUTATION_FORMAT.size
STAKE_RECORD_SIZE = STAKE_FORMAT.size


def pack_reputation(record: ReputationRecord) -> bytes:
    return REPUTATION_FORMAT.pack(
        record.score,
        record.total_jobs,
        record.successful_jobs,
        record.disputed_jobs,
        record.last_payment_at,
        record.total_payment_volume,
    )


def unpack_reputation(data: bytes) -> ReputationRecord:
    """Decode a reputation record.

    Raises:
        ValueError: On a wrong length or a violated record invariant.
    """
    if len(data) != REPUTATION_RECORD_SIZE:
        raise ValueError(
            f"Reputation record must be {REPUTATION_RECORD_SIZE} bytes, got {len(data)}"
        )
    score, total, successful, disputed, last_paid, volume = REPUTATION_FORMAT.unpack(data)
    return ReputationRecord(
        score=score,
        total_jobs=total,
        successful_jobs=successful,
        disputed_jobs=disputed,
        last_payment_at=last_paid,
        total_payment_volume=volume,
    )


def pack_stake(record: StakeRecord) -> bytes:
    return STAKE_FORMAT.pack(
        record.amount_staked,
        int(record.tier),
        record.revenue_multiplier,
        record.lock_expires_at,
    )


def unpack_stake(data: bytes, table: TierTable = DEFAULT_TIER_TABLE) -> StakeRecord:
    """Decode a stake record and check the derived fields against ``table``.

    Raises:
        ValueError: On a wrong length, an unknown tier, or a tier/multiplier
            that does not match the stored amount.
    """
    if len(data) != STAKE_RECORD_SIZE:
        raise ValueError(f"Stake record must be {STAKE_RECORD_SIZE} bytes, got {len(data)}")
    amount, tier_value, multiplier, lock = STAKE_FORMAT.unpack(data)
    tier = AccessTier(tier_value)
    expected = classify(amount, table)
    if tier != expected.tier or multiplier != expected.multiplier:
        raise ValueError(
            f"Stored tier {tier.name}/{multiplier} does not match amount {amount} "
            f"({expected.tier.name}/{expected.multiplier})"
        )
    return StakeRecord(
        amount_staked=amount,
        tier=tier,
        revenue_multiplier=multiplier,
        lock_expires_at=lock,
    )
