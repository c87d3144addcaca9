"""Tests for the Reputation Ledger record and its updates."""

import pytest

from trust_tier_sim.core.errors import InvalidRating, NonMonotonicTimestamp, Overflow
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

DAY = 86_400


def test_new_record_is_zero_valued() -> None:
    """A fresh record starts with score 0 and no history."""
    record = ReputationRecord()
    assert record.score == 0
    assert record.total_jobs == 0
    assert record.last_payment_at == 0


def test_record_invariant_enforced() -> None:
    """successful + disputed can never exceed total."""
    with pytest.raises(ValueError):
        ReputationRecord(total_jobs=1, successful_jobs=1, disputed_jobs=1)


def test_rating_moves_score_by_ema_step(rep_config) -> None:
    """With weight 1/8 a perfect rating from 0 moves the score by 1250."""
    record = apply_rating(ReputationRecord(), 100, Outcome.SUCCESS, 10_000, rep_config)
    assert record.score == 1_250
    assert record.total_jobs == 1
    assert record.successful_jobs == 1
    assert record.disputed_jobs == 0


def test_rating_weight_scales_step(rep_config) -> None:
    """Half weight halves the step; zero weight leaves the score alone."""
    half = apply_rating(ReputationRecord(), 100, Outcome.SUCCESS, 5_000, rep_config)
    none = apply_rating(ReputationRecord(), 100, Outcome.SUCCESS, 0, rep_config)
    assert half.score == 625
    assert none.score == 0
    assert none.total_jobs == 1


def test_negative_step_truncates_toward_zero(rep_config) -> None:
    """A small downward gap rounds toward the current score, not below it."""
    record = ReputationRecord(score=7)
    updated = apply_rating(record, 0, Outcome.DISPUTE, 10_000, rep_config)
    assert updated.score == 7
    assert updated.disputed_jobs == 1


@pytest.mark.parametrize("rating", [0, 100])
def test_rating_bounds_accepted(rep_config, rating) -> None:
    """Ratings 0 and 100 are valid."""
    record = apply_rating(ReputationRecord(score=5_000), rating, Outcome.SUCCESS, 10_000, rep_config)
    assert 0 <= record.score <= 10_000


@pytest.mark.parametrize("rating", [101, -1])
def test_rating_out_of_range_rejected(rep_config, rating) -> None:
    """Out-of-range ratings raise InvalidRating."""
    with pytest.raises(InvalidRating):
        apply_rating(ReputationRecord(), rating, Outcome.SUCCESS, 10_000, rep_config)


def test_weight_must_fit_u16(rep_config) -> None:
    """A weight above 65535 is an overflow."""
    with pytest.raises(Overflow):
        apply_rating(ReputationRecord(), 50, Outcome.SUCCESS, 70_000, rep_config)


def test_score_stays_bounded(rep_config) -> None:
    """Any sequence of ratings, weights and penalties keeps the score in range."""
    record = ReputationRecord()
    for i in range(300):
        record = apply_rating(
            record, (i * 37) % 101, Outcome.SUCCESS, (i * 911) % 65_536, rep_config
        )
        if i % 7 == 0:
            record = apply_penalty(record, 3_000)
        assert 0 <= record.score <= 10_000


def test_outcome_flag_drives_counters(rep_config) -> None:
    """The outcome flag, not the rating, picks the counter."""
    record = apply_rating(ReputationRecord(), 100, Outcome.DISPUTE, 10_000, rep_config)
    assert record.disputed_jobs == 1
    assert record.successful_jobs == 0


def test_payment_timestamps_monotonic() -> None:
    """Older payment timestamps are rejected; equal ones are accepted."""
    record = record_payment(ReputationRecord(), 100, 1_000)
    record = record_payment(record, 50, 1_000)
    assert record.total_payment_volume == 150
    with pytest.raises(NonMonotonicTimestamp):
        record_payment(record, 10, 999)


def test_penalty_floors_at_zero(rep_config) -> None:
    """Penalties never drive the score negative."""
    record = apply_penalty(ReputationRecord(score=3_000), penalty_for(PenaltyKind.FRAUD, rep_config))
    assert record.score == 0
    assert apply_penalty(ReputationRecord(score=3_000), -5).score == 3_000


def test_derive_status() -> None:
    """Unverified without jobs, Active while recent, Inactive after the threshold."""
    threshold = 30 * DAY
    assert derive_status(ReputationRecord(), 0, threshold) is AccountStatus.UNVERIFIED
    record = ReputationRecord(total_jobs=1, successful_jobs=1, last_payment_at=1_000)
    assert derive_status(record, 1_000 + threshold - 1, threshold) is AccountStatus.ACTIVE
    assert derive_status(record, 1_000 + threshold, threshold) is AccountStatus.INACTIVE


def test_reads_are_idempotent() -> None:
    """Read-only helpers return the same value twice and leave the record alone."""
    record = ReputationRecord(score=8_000, total_jobs=4, successful_jobs=3, last_payment_at=10)
    first = (derive_status(record, 20, DAY), decayed_score(record, 10 * DAY, 10))
    second = (derive_status(record, 20, DAY), decayed_score(record, 10 * DAY, 10))
    assert first == second
    assert record.score == 8_000


def test_decayed_score() -> None:
    """Each idle day removes decay_bps_per_day of the score."""
    record = ReputationRecord(score=10_000, total_jobs=1, successful_jobs=1, last_payment_at=DAY)
    assert decayed_score(record, DAY, 10) == 10_000
    assert decayed_score(record, 11 * DAY, 10) == 9_900
    assert decayed_score(record, 10_000 * DAY, 10) == 0


def test_success_ratio() -> None:
    """Success ratio in bps, zero without history."""
    assert success_ratio_bps(ReputationRecord()) == 0
    record = ReputationRecord(total_jobs=4, successful_jobs=3, disputed_jobs=1)
    assert success_ratio_bps(record) == 7_500
