"""Simulation input profiles, scenarios and result schemas."""

import hashlib
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from trust_tier_sim.core.errors import InvalidProfile

from .defaults import DEFAULT_DISPUTE_WIN_RATE, DEFAULT_JOB_VALUE, DEFAULT_RATING_WEIGHT


def to_bps(probability: float) -> int:
    """Convert a probability in [0, 1] to integer basis points."""
    return int(round(probability * 10_000))


def _reraise_profile_errors(exc: ValidationError, label: str) -> None:
    """Re-raise errors located in a profile as ``InvalidProfile``."""
    if any("profile" in err["loc"] for err in exc.errors()):
        raise InvalidProfile(f"{label} has an invalid profile: {exc}") from exc


class AgentProfile(BaseModel):
    """Synthetic behaviour of one agent cohort.

    Probabilities are converted to basis points before any draw so the
    simulator only ever compares integers.
    """

    name: str = Field(..., min_length=1)
    adversarial: bool = Field(
        False, description="Ground-truth label used only for offline scoring"
    )
    completion_rate: float = Field(..., ge=0, le=1)
    avg_quality: float = Field(..., ge=0, le=100, description="Mean quality (0-100)")
    quality_variance: float = Field(
        0.0, ge=0, le=100, description="Half-width of the uniform quality draw"
    )
    timeliness_factor: float = Field(
        1.0, ge=0, le=1, description="Probability a job is delivered on time"
    )
    dispute_rate: float = Field(0.0, ge=0, le=1)
    jobs_per_round: float = Field(1.0, gt=0, le=1_000)
    dispute_win_rate: float = Field(DEFAULT_DISPUTE_WIN_RATE, ge=0, le=1)
    fraud_flag_rate: float = Field(
        0.0, ge=0, le=1, description="Probability a job is flagged as fraud"
    )
    service_coverage: float = Field(
        1.0, ge=0, le=1, description="Share of counterparts served as profiled"
    )
    reset_below_bps: int = Field(
        0, ge=0, le=10_000, description="Abandon identity below this score (0=never)"
    )
    arrival_spread_rounds: int = Field(
        0, ge=0, description="Spread cohort arrivals over the first N rounds"
    )
    rating_weight: int = Field(DEFAULT_RATING_WEIGHT, ge=0, le=65_535)
    stake_amount: int = Field(0, ge=0, description="Collateral deposited on arrival")
    job_value: int = Field(DEFAULT_JOB_VALUE, ge=0)

    model_config = ConfigDict(frozen=True)

    def __init__(self, **data: Any) -> None:
        """Build a profile.

        Raises:
            InvalidProfile: If any behaviour parameter is missing or out of
                range. ``model_validate`` skips this wrapper; use
                ``services.scenarios.validate_profile`` for plain data.
        """
        try:
            super().__init__(**data)
        except ValidationError as exc:
            name = data.get("name", "<unnamed>")
            raise InvalidProfile(f"Profile {name!r} is invalid: {exc}") from exc


class Cohort(BaseModel):
    """A block of identical agents in a population mix."""

    profile: AgentProfile
    count: int = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            _reraise_profile_errors(exc, "Cohort")
            raise


class AttackScenario(BaseModel):
    """Immutable catalog entry describing a population and run length."""

    name: str = Field(..., min_length=1)
    description: str = ""
    cohorts: tuple[Cohort, ...] = Field(..., min_length=1)
    round_count: int = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)

    def __init__(self, **data: Any) -> None:
        """Build a scenario.

        Raises:
            InvalidProfile: If a cohort profile is out of range.
            ValidationError: For any other structural problem.
        """
        try:
            super().__init__(**data)
        except ValidationError as exc:
            _reraise_profile_errors(exc, f"Scenario {data.get('name', '<unnamed>')!r}")
            raise

    @property
    def population_mix(self) -> dict[str, int]:
        """Profile name -> agent count."""
        mix: dict[str, int] = {}
        for cohort in self.cohorts:
            mix[cohort.profile.name] = mix.get(cohort.profile.name, 0) + cohort.count
        return mix

    @property
    def agent_count(self) -> int:
        return sum(cohort.count for cohort in self.cohorts)

    @property
    def has_attackers(self) -> bool:
        return any(cohort.profile.adversarial for cohort in self.cohorts)


class RunPerformance(BaseModel):
    """Wall-clock measurements. Excluded from the reproducibility fingerprint."""

    elapsed_seconds: float = Field(..., ge=0)
    throughput_ops_per_sec: float = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


class SimulationResult(BaseModel):
    """Resistance metrics for one scenario run."""

    scenario: str
    seed: int
    rounds: int
    honest_count: int
    attacker_count: int
    honest_avg_score: float = Field(..., description="Mean final honest score (bps)")
    attacker_avg_score: float = Field(
        ..., description="Mean final attacker score (bps, 0 when no attackers)"
    )
    reputation_separation: float
    attack_resistance_score: float = Field(..., ge=0, le=100)
    detection_accuracy: float = Field(..., ge=0, le=1)
    false_positive_rate: float = Field(..., ge=0, le=1)
    convergence_round: int = Field(..., ge=1)
    tier_changes: int = Field(0, ge=0)
    identity_resets: int = Field(0, ge=0)
    separation_history: list[float] = Field(default_factory=list)
    performance: RunPerformance

    model_config = ConfigDict(frozen=True)

    def deterministic_dump(self) -> dict:
        """Every field that must be identical across reruns with the same seed."""
        return self.model_dump(exclude={"performance"})

    def fingerprint(self) -> str:
        """SHA-256 over the deterministic fields."""
        payload = self.model_dump_json(exclude={"performance"})
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()
