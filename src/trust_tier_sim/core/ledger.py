"""TrustLedger: explicit account-keyed store behind the engine's interface.

The host runtime owns concurrency and atomicity; this class only guarantees
that a call either stores its fully computed result or raises before touching
the store. Records are immutable, so a failed event cannot leave a partial
write behind.

Reads (`get_reputation`, `get_stake`, `derive_status`, `decayed_score`,
`badges`, `snapshot`, `tier_changes`) never insert entries: an unknown
account reads as the zero-valued record.
"""

import logging

from trust_tier_sim.core.errors import TrustEngineError
from trust_tier_sim.core.layout import (
    REPUTATION_RECORD_SIZE,
    STAKE_RECORD_SIZE,
    pack_reputation,
    pack_stake,
    unpack_reputation,
    unpack_stake,
)
from trust_tier_sim.core.performance import Badge, earned_badges
from trust_tier_sim.core.reputation import (
    AccountStatus,
    Outcome,
    PenaltyKind,
    ReputationRecord,
    apply_penalty,
    apply_rating,
    decayed_score,
    derive_status,
    penalty_for,
    record_payment,
    success_ratio_bps,
)
from trust_tier_sim.core.staking import (
    StakeRecord,
    StakeTransition,
    StakingController,
    TierChangeRecord,
)
from trust_tier_sim.schemas import EngineConfig

logger = logging.getLogger(__name__)


class TrustLedger:
    """Reputation and stake records for many accounts.

    Attributes:
        config: Engine configuration.
        staking: Staking controller built from ``config.staking``.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config: EngineConfig = config or EngineConfig()
        self.staking: StakingController = StakingController.from_config(
            self.config.staking
        )
        self._reputations: dict[str, ReputationRecord] = {}
        self._stakes: dict[str, StakeRecord] = {}
        self._tier_changes: list[TierChangeRecord] = []

    # ------------------------------------------------------------------
    # Settlement / rating workflow
    # ------------------------------------------------------------------
    def record_payment(self, account: str, amount: int, timestamp: int) -> ReputationRecord:
        """A payment of ``amount`` to ``account`` settled at ``timestamp``."""
        return self._update_reputation(
            account, "record_payment", record_payment, amount, timestamp
        )

    def apply_rating(
        self,
        account: str,
        rating: int,
        outcome: Outcome,
        weight: int,
    ) -> ReputationRecord:
        """Apply a counterpart rating with an explicit outcome flag."""
        return self._update_reputation(
            account,
            "apply_rating",
            apply_rating,
            rating,
            outcome,
            weight,
            self.config.reputation,
        )

    def apply_penalty(self, account: str, penalty_bps: int) -> ReputationRecord:
        """Deduct ``penalty_bps`` from the score (saturating at zero)."""
        return self._update_reputation(account, "apply_penalty", apply_penalty, penalty_bps)

    def penalize(self, account: str, kind: PenaltyKind) -> ReputationRecord:
        """Apply the configured penalty for a fraud or lost-dispute finding."""
        return self.apply_penalty(account, penalty_for(kind, self.config.reputation))

    # ------------------------------------------------------------------
    # Collateral transfer layer
    # ------------------------------------------------------------------
    def deposit(self, account: str, amount: int, now: int) -> StakeTransition:
        return self._update_stake(account, "deposit", self.staking.deposit, amount, now)

    def withdraw(self, account: str, amount: int, now: int) -> StakeTransition:
        return self._update_stake(account, "withdraw", self.staking.withdraw, amount, now)

    def forfeit(self, account: str, bps: int, now: int) -> StakeTransition:
        return self._update_stake(account, "forfeit", self.staking.forfeit, bps, now)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def restore(self, account: str, data: bytes) -> None:
        """Load an account from a `snapshot` encoding.

        Both records are decoded and checked before either is stored.

        Raises:
            ValueError: On a wrong length or inconsistent stake fields.
        """
        if len(data) != REPUTATION_RECORD_SIZE + STAKE_RECORD_SIZE:
            raise ValueError(
                f"Snapshot must be {REPUTATION_RECORD_SIZE + STAKE_RECORD_SIZE} "
                f"bytes, got {len(data)}"
            )
        reputation = unpack_reputation(data[:REPUTATION_RECORD_SIZE])
        stake = unpack_stake(data[REPUTATION_RECORD_SIZE:], self.staking.table)
        self._reputations[account] = reputation
        if stake.is_empty:
            self._stakes.pop(account, None)
        else:
            self._stakes[account] = stake

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------
    def get_reputation(self, account: str) -> ReputationRecord:
        return self._reputations.get(account, ReputationRecord())

    def get_stake(self, account: str) -> StakeRecord:
        return self._stakes.get(account, StakeRecord.empty())

    def derive_status(self, account: str, now: int) -> AccountStatus:
        return derive_status(
            self.get_reputation(account),
            now,
            self.config.reputation.inactivity_threshold_secs,
        )

    def decayed_score(self, account: str, now: int) -> int:
        """Score with idle-time decay applied (stored score untouched)."""
        return decayed_score(
            self.get_reputation(account),
            now,
            self.config.reputation.decay_bps_per_day,
        )

    def success_ratio_bps(self, account: str) -> int:
        return success_ratio_bps(self.get_reputation(account))

    def badges(self, account: str) -> list[Badge]:
        return earned_badges(self.get_reputation(account))

    def snapshot(self, account: str) -> bytes:
        """Fixed-width encoding of the account: reputation then stake."""
        return pack_reputation(self.get_reputation(account)) + pack_stake(
            self.get_stake(account)
        )

    def tier_changes(self, account: str | None = None) -> list[TierChangeRecord]:
        """Tier change log, optionally filtered to one account (copy)."""
        if account is None:
            return list(self._tier_changes)
        return [c for c in self._tier_changes if c.account == account]

    def accounts(self) -> list[str]:
        """Accounts with a reputation or stake entry, sorted."""
        return sorted(set(self._reputations) | set(self._stakes))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _update_reputation(self, account, operation, update, *args) -> ReputationRecord:
        current = self.get_reputation(account)
        try:
            record = update(current, *args)
        except TrustEngineError as exc:
            logger.warning(f"Rejected {operation} for {account}: {exc}")
            raise
        self._reputations[account] = record
        return record

    def _update_stake(self, account, operation, transition, *args) -> StakeTransition:
        current = self.get_stake(account)
        try:
            result = transition(account, current, *args)
        except TrustEngineError as exc:
            logger.warning(f"Rejected {operation} for {account}: {exc}")
            raise
        if result.record.is_empty:
            self._stakes.pop(account, None)
        else:
            self._stakes[account] = result.record
        if result.change is not None:
            self._tier_changes.append(result.change)
        return result
