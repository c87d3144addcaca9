"""Reputation Ledger: per-account behavioural record and its pure updates.

The score is an exponential moving average of job ratings, held in basis
points and updated with integer arithmetic only:

    delta  = trunc((rating * 100 - score) * ema_weight_bps * weight / 10_000^2)
    score' = clamp(score + delta, 0, 10_000)

An EMA needs no history buffer, so every update is O(1), and with the default
weight (1/8) one bad rating cannot zero an established score.

Records are immutable. Each update returns a new record or raises before
producing one, so a rejected event leaves the caller's state untouched.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from trust_tier_sim.core.errors import InvalidRating, NonMonotonicTimestamp
from trust_tier_sim.core.fixed_point import (
    BPS_SCALE,
    add,
    check_bps,
    check_i64,
    check_u16,
    check_u64,
    clamp,
    mul_div_trunc,
    saturating_add,
)

if TYPE_CHECKING:
    from ..schemas import ReputationConfig

logger = logging.getLogger(__name__)

MAX_SCORE = BPS_SCALE
MAX_RATING = 100
SECONDS_PER_DAY = 86_400


class Outcome(str, Enum):
    """Caller-supplied job outcome. Never inferred from the numeric rating."""

    SUCCESS = "success"
    DISPUTE = "dispute"


class PenaltyKind(str, Enum):
    FRAUD = "fraud"
    DISPUTE_LOSS = "dispute_loss"


class AccountStatus(str, Enum):
    UNVERIFIED = "unverified"
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class ReputationRecord:
    """Behavioural trust record for one account.

    Attributes:
        score: Trust score in basis points, always within [0, 10_000].
        total_jobs: Jobs rated so far.
        successful_jobs: Jobs rated with `Outcome.SUCCESS`.
        disputed_jobs: Jobs rated with `Outcome.DISPUTE`.
        last_payment_at: Timestamp of the latest settled payment (0 = never).
        total_payment_volume: Cumulative settled amount, saturating at u64.
    """

    score: int = 0
    total_jobs: int = 0
    successful_jobs: int = 0
    disputed_jobs: int = 0
    last_payment_at: int = 0
    total_payment_volume: int = 0

    def __post_init__(self) -> None:
        check_bps(self.score, "score")
        check_u64(self.total_jobs, "total_jobs")
        check_u64(self.successful_jobs, "successful_jobs")
        check_u64(self.disputed_jobs, "disputed_jobs")
        check_i64(self.last_payment_at, "last_payment_at")
        check_u64(self.total_payment_volume, "total_payment_volume")
        if self.successful_jobs + self.disputed_jobs > self.total_jobs:
            raise ValueError(
                "successful_jobs + disputed_jobs exceeds total_jobs "
                f"({self.successful_jobs} + {self.disputed_jobs} > {self.total_jobs})"
            )


def apply_rating(
    record: ReputationRecord,
    rating: int,
    outcome: Outcome,
    weight: int,
    config: "ReputationConfig",
) -> ReputationRecord:
    """Fold one job rating into the score and bump the job counters.

    Args:
        record: Current record.
        rating: Counterpart rating, 0..=100.
        outcome: Whether the job counts as successful or disputed.
        weight: Rating weight, 0..=65_535 (10_000 = full weight).
        config: Reputation configuration (EMA weight).

    Returns:
        The updated record.

    Raises:
        InvalidRating: If ``rating`` is outside 0..=100.
        Overflow: If ``weight`` does not fit u16 or a counter would overflow.
    """
    if not 0 <= rating <= MAX_RATING:
        raise InvalidRating(rating)
    check_u16(weight, "weight")
    outcome = Outcome(outcome)

    target = rating * 100
    delta = mul_div_trunc(
        target - record.score, config.ema_weight_bps * weight, BPS_SCALE * BPS_SCALE
    )
    score = clamp(record.score + delta, 0, MAX_SCORE)

    total_jobs = add(record.total_jobs, 1)
    successful = record.successful_jobs
    disputed = record.disputed_jobs
    if outcome is Outcome.SUCCESS:
        successful = add(successful, 1)
    else:
        disputed = add(disputed, 1)

    logger.debug(
        f"Rating {rating} ({outcome.value}, weight={weight}): "
        f"score {record.score} -> {score}"
    )
    return replace(
        record,
        score=score,
        total_jobs=total_jobs,
        successful_jobs=successful,
        disputed_jobs=disputed,
    )


def record_payment(
    record: ReputationRecord, amount: int, timestamp: int
) -> ReputationRecord:
    """Register a settled payment.

    Raises:
        NonMonotonicTimestamp: If ``timestamp`` precedes the last payment.
    """
    check_u64(amount, "amount")
    check_i64(timestamp, "timestamp")
    if timestamp < record.last_payment_at:
        raise NonMonotonicTimestamp(timestamp, record.last_payment_at)
    return replace(
        record,
        last_payment_at=timestamp,
        total_payment_volume=saturating_add(record.total_payment_volume, amount),
    )


def apply_penalty(record: ReputationRecord, penalty_bps: int) -> ReputationRecord:
    """Subtract ``penalty_bps`` from the score, floored at zero.

    Negative penalties are treated as zero; the call never fails.
    """
    penalty = clamp(penalty_bps, 0, MAX_SCORE)
    return replace(record, score=max(record.score - penalty, 0))


def penalty_for(kind: PenaltyKind, config: "ReputationConfig") -> int:
    """Configured score penalty (bps) for a kind of finding."""
    if PenaltyKind(kind) is PenaltyKind.FRAUD:
        return config.fraud_penalty_bps
    return config.dispute_loss_penalty_bps


def derive_status(
    record: ReputationRecord, now: int, inactivity_threshold: int
) -> AccountStatus:
    """Classify an account for discovery and filtering. Read-only."""
    if record.total_jobs == 0:
        return AccountStatus.UNVERIFIED
    if now - record.last_payment_at < inactivity_threshold:
        return AccountStatus.ACTIVE
    return AccountStatus.INACTIVE


def decayed_score(record: ReputationRecord, now: int, decay_bps_per_day: int) -> int:
    """Score projected forward with linear idle-time decay.

    Each full idle day since the last payment removes ``decay_bps_per_day``
    of the score (proportionally). The stored score is never rewritten.
    """
    if record.last_payment_at == 0 or now <= record.last_payment_at:
        return record.score
    idle_days = (now - record.last_payment_at) // SECONDS_PER_DAY
    retained = max(BPS_SCALE - decay_bps_per_day * idle_days, 0)
    return record.score * retained // BPS_SCALE


def success_ratio_bps(record: ReputationRecord) -> int:
    """Successful jobs as a share of all jobs, in bps (0 with no history)."""
    if record.total_jobs == 0:
        return 0
    return record.successful_jobs * BPS_SCALE // record.total_jobs
