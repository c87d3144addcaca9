"""Job performance scoring: turns one job's observable facts into a rating.

The rating workflow submits a 0..=100 rating per job. This module derives
that rating from five weighted factors (completion, quality, timeliness,
client satisfaction, dispute outcome), all in basis points:

    weighted = sum(factor_score * factor_weight) / 100     (0..=10_000 bps)
    rating   = weighted / 100                              (0..=100)
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from trust_tier_sim.core.fixed_point import BPS_SCALE

if TYPE_CHECKING:
    from ..schemas import ScoringFactors

    from .reputation import ReputationRecord

# More than 50% late scores zero on timeliness.
MAX_DELAY_BPS = 5_000


@dataclass(frozen=True)
class JobPerformance:
    """Observable facts about one job."""

    completed: bool
    quality: int  # 0..=100
    expected_duration: int
    actual_duration: int
    satisfaction: int  # 0..=100
    had_dispute: bool = False
    dispute_won: bool = False


def timeliness_score(expected_duration: int, actual_duration: int) -> int:
    """Timeliness in bps: full marks on time, linear penalty up to 50% late."""
    if actual_duration <= expected_duration:
        return BPS_SCALE
    if expected_duration <= 0:
        return 0
    delay_bps = (actual_duration - expected_duration) * BPS_SCALE // expected_duration
    if delay_bps > MAX_DELAY_BPS:
        return 0
    return BPS_SCALE - delay_bps


def job_rating(job: JobPerformance, factors: "ScoringFactors") -> int:
    """Weighted 0..=100 rating for one job."""
    completion = BPS_SCALE if job.completed else 0
    quality = min(max(job.quality, 0), 100) * BPS_SCALE // 100
    timeliness = timeliness_score(job.expected_duration, job.actual_duration)
    satisfaction = min(max(job.satisfaction, 0), 100) * BPS_SCALE // 100
    if not job.had_dispute:
        dispute = BPS_SCALE
    elif job.dispute_won:
        dispute = BPS_SCALE // 2
    else:
        dispute = 0

    weighted = (
        completion * factors.completion_weight
        + quality * factors.quality_weight
        + timeliness * factors.timeliness_weight
        + satisfaction * factors.satisfaction_weight
        + dispute * factors.dispute_weight
    ) // 100
    return min(weighted, BPS_SCALE) // 100


class Badge(str, Enum):
    FIRST_JOB = "first_job"
    TEN_JOBS = "ten_jobs"
    HUNDRED_JOBS = "hundred_jobs"
    THOUSAND_JOBS = "thousand_jobs"
    PERFECT_RATING = "perfect_rating"
    DISPUTE_FREE = "dispute_free"


def earned_badges(record: "ReputationRecord") -> list[Badge]:
    """Achievement badges implied by a record, in a fixed order."""
    badges = []
    for badge, needed in (
        (Badge.FIRST_JOB, 1),
        (Badge.TEN_JOBS, 10),
        (Badge.HUNDRED_JOBS, 100),
        (Badge.THOUSAND_JOBS, 1_000),
    ):
        if record.successful_jobs >= needed:
            badges.append(badge)
    if record.score >= 9_500:
        badges.append(Badge.PERFECT_RATING)
    if record.total_jobs >= 10 and record.disputed_jobs == 0:
        badges.append(Badge.DISPUTE_FREE)
    return badges
