"""Staking Controller: collateral events drive the per-account tier machine.

States are the access tiers. Only three external events move an account
between them: ``deposit``, ``withdraw`` and ``forfeit`` (slashing). Every
transition rewrites the amount, tier and multiplier in one immutable record,
so there is no moment where the amount and the tier disagree.

Validation failures (``ZeroAmount``, ``LockActive``, ``InsufficientStake``)
are raised before any record is built and are not retried here.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from trust_tier_sim.core.errors import InsufficientStake, LockActive, ZeroAmount
from trust_tier_sim.core.fixed_point import (
    BPS_SCALE,
    add,
    check_bps,
    check_i64,
    check_u64,
    mul_scaled,
    sub,
)
from trust_tier_sim.core.tiers import (
    DEFAULT_TIER_TABLE,
    AccessTier,
    TierTable,
    build_tier_table,
    classify,
)

if TYPE_CHECKING:
    from ..schemas import StakingConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StakeRecord:
    """Locked collateral for one account.

    Attributes:
        amount_staked: Collateral in the smallest denomination.
        tier: Derived from ``amount_staked``.
        revenue_multiplier: Derived from ``tier`` (scale 100).
        lock_expires_at: Withdrawals are rejected before this timestamp.
    """

    amount_staked: int = 0
    tier: AccessTier = AccessTier.NONE
    revenue_multiplier: int = 0
    lock_expires_at: int = 0

    @classmethod
    def empty(cls) -> "StakeRecord":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.amount_staked == 0 and self.lock_expires_at == 0


@dataclass(frozen=True)
class TierChangeRecord:
    """Append-only notification that an account's tier changed."""

    account: str
    old_tier: AccessTier
    new_tier: AccessTier
    amount_staked: int
    revenue_multiplier: int
    occurred_at: int


@dataclass(frozen=True)
class StakeTransition:
    """New stake record plus the tier change it caused, if any."""

    record: StakeRecord
    change: TierChangeRecord | None = None


class StakingController:
    """Pure collateral state transitions.

    Attributes:
        lock_duration: Seconds added to ``now`` on every deposit.
        table: Tier table used for classification.
    """

    def __init__(
        self,
        lock_duration: int = 0,
        table: TierTable = DEFAULT_TIER_TABLE,
    ) -> None:
        self.lock_duration: int = lock_duration
        self.table: TierTable = table

    @classmethod
    def from_config(cls, config: "StakingConfig") -> "StakingController":
        return cls(
            lock_duration=config.lock_duration_secs,
            table=build_tier_table(config),
        )

    def deposit(
        self, account: str, stake: StakeRecord, amount: int, now: int
    ) -> StakeTransition:
        """Add collateral and refresh the lock.

        Raises:
            ZeroAmount: If ``amount`` is 0.
            Overflow: If the new balance or lock does not fit.
        """
        check_u64(amount, "amount")
        if amount == 0:
            raise ZeroAmount("Deposit amount must be positive")
        new_amount = add(stake.amount_staked, amount)
        lock = check_i64(now + self.lock_duration, "lock_expires_at")
        return self._transition(account, stake, new_amount, lock, now)

    def withdraw(
        self, account: str, stake: StakeRecord, amount: int, now: int
    ) -> StakeTransition:
        """Release collateral once the lock has expired.

        A withdrawal of the full balance returns the empty record.

        Raises:
            ZeroAmount: If ``amount`` is 0.
            LockActive: If ``now`` is before ``lock_expires_at``.
            InsufficientStake: If ``amount`` exceeds the staked balance.
        """
        check_u64(amount, "amount")
        if amount == 0:
            raise ZeroAmount("Withdrawal amount must be positive")
        if now < stake.lock_expires_at:
            raise LockActive(now, stake.lock_expires_at)
        if amount > stake.amount_staked:
            raise InsufficientStake(amount, stake.amount_staked)
        new_amount = sub(stake.amount_staked, amount)
        lock = 0 if new_amount == 0 else stake.lock_expires_at
        return self._transition(account, stake, new_amount, lock, now)

    def forfeit(
        self, account: str, stake: StakeRecord, bps: int, now: int
    ) -> StakeTransition:
        """Slash ``amount_staked * bps / 10_000`` (rounded down).

        Slashing is never blocked by the lock. A stake slashed to zero is
        released: its lock is cleared so the account holds no empty entry.
        """
        check_bps(bps, "bps")
        slashed = mul_scaled(stake.amount_staked, bps, BPS_SCALE)
        new_amount = sub(stake.amount_staked, slashed)
        logger.debug(f"Forfeit {account}: {bps} bps -> slashed {slashed}")
        lock = stake.lock_expires_at if new_amount > 0 else 0
        return self._transition(account, stake, new_amount, lock, now)

    def _transition(
        self,
        account: str,
        stake: StakeRecord,
        new_amount: int,
        lock_expires_at: int,
        now: int,
    ) -> StakeTransition:
        assignment = classify(new_amount, self.table)
        record = StakeRecord(
            amount_staked=new_amount,
            tier=assignment.tier,
            revenue_multiplier=assignment.multiplier,
            lock_expires_at=lock_expires_at,
        )
        if assignment.tier == stake.tier:
            return StakeTransition(record=record)

        change = TierChangeRecord(
            account=account,
            old_tier=stake.tier,
            new_tier=assignment.tier,
            amount_staked=new_amount,
            revenue_multiplier=assignment.multiplier,
            occurred_at=now,
        )
        logger.debug(
            f"Tier change for {account}: {stake.tier.name} -> {assignment.tier.name} "
            f"(staked={new_amount})"
        )
        return StakeTransition(record=record, change=change)
