"""Configuration schemas for the trust engine and the simulator."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from trust_tier_sim.schemas.defaults import (
    DEFAULT_BASIC_MIN_STAKE,
    DEFAULT_BASIC_MULTIPLIER,
    DEFAULT_COMPLETION_WEIGHT,
    DEFAULT_CONVERGENCE_TOLERANCE_BPS,
    DEFAULT_DECAY_BPS_PER_DAY,
    DEFAULT_DISPUTE_LOSS_PENALTY_BPS,
    DEFAULT_DISPUTE_WEIGHT,
    DEFAULT_EMA_WEIGHT_BPS,
    DEFAULT_FRAUD_FORFEIT_BPS,
    DEFAULT_FRAUD_PENALTY_BPS,
    DEFAULT_INACTIVITY_THRESHOLD_SECS,
    DEFAULT_LOCK_DURATION_SECS,
    DEFAULT_PRO_MIN_STAKE,
    DEFAULT_PRO_MULTIPLIER,
    DEFAULT_QUALITY_WEIGHT,
    DEFAULT_ROUND_DURATION_SECS,
    DEFAULT_SATISFACTION_WEIGHT,
    DEFAULT_SIMULATION_START_TS,
    DEFAULT_SUSPICION_THRESHOLD_BPS,
    DEFAULT_TIMELINESS_WEIGHT,
    DEFAULT_VERIFIED_MIN_STAKE,
    DEFAULT_VERIFIED_MULTIPLIER,
    DEFAULT_WHALE_MIN_STAKE,
    DEFAULT_WHALE_MULTIPLIER,
)


class ScoringFactors(BaseModel):
    """Weights used to fold one job's performance into a 0-100 rating.

    Each weight is a whole percentage and together they must sum to 100.
    """

    completion_weight: int = Field(DEFAULT_COMPLETION_WEIGHT, ge=0, le=100)
    quality_weight: int = Field(DEFAULT_QUALITY_WEIGHT, ge=0, le=100)
    timeliness_weight: int = Field(DEFAULT_TIMELINESS_WEIGHT, ge=0, le=100)
    satisfaction_weight: int = Field(DEFAULT_SATISFACTION_WEIGHT, ge=0, le=100)
    dispute_weight: int = Field(DEFAULT_DISPUTE_WEIGHT, ge=0, le=100)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _weights_sum_to_100(self) -> "ScoringFactors":
        total = (
            self.completion_weight
            + self.quality_weight
            + self.timeliness_weight
            + self.satisfaction_weight
            + self.dispute_weight
        )
        if total != 100:
            raise ValueError(f"Scoring weights must sum to 100, got {total}")
        return self


class ReputationConfig(BaseModel):
    """Configuration for the Reputation Ledger.

    EMA update (integer only, truncated toward zero):
        delta = (rating * 100 - score) * ema_weight_bps * weight / 10_000^2
        score' = clamp(score + delta, 0, 10_000)
    """

    ema_weight_bps: int = Field(
        DEFAULT_EMA_WEIGHT_BPS,
        gt=0,
        le=10_000,
        description="EMA smoothing factor in bps (1250 = 1/8)",
    )
    fraud_penalty_bps: int = Field(
        DEFAULT_FRAUD_PENALTY_BPS,
        ge=0,
        le=10_000,
        description="Score deducted for a fraud finding",
    )
    dispute_loss_penalty_bps: int = Field(
        DEFAULT_DISPUTE_LOSS_PENALTY_BPS,
        ge=0,
        le=10_000,
        description="Score deducted for a lost dispute",
    )
    inactivity_threshold_secs: int = Field(
        DEFAULT_INACTIVITY_THRESHOLD_SECS,
        gt=0,
        description="Seconds since last payment before an account turns Inactive",
    )
    decay_bps_per_day: int = Field(
        DEFAULT_DECAY_BPS_PER_DAY,
        ge=0,
        le=10_000,
        description="Linear decay per idle day for the read-only decayed score",
    )
    factors: ScoringFactors = Field(default_factory=ScoringFactors)

    model_config = ConfigDict(frozen=True)


class StakingConfig(BaseModel):
    """Configuration for the Tier Classifier and Staking Controller.

    Thresholds are inclusive lower bounds; both thresholds and multipliers
    must be strictly ascending from Basic to Whale.
    """

    basic_min_stake: int = Field(DEFAULT_BASIC_MIN_STAKE, gt=0)
    verified_min_stake: int = Field(DEFAULT_VERIFIED_MIN_STAKE, gt=0)
    pro_min_stake: int = Field(DEFAULT_PRO_MIN_STAKE, gt=0)
    whale_min_stake: int = Field(DEFAULT_WHALE_MIN_STAKE, gt=0)
    basic_multiplier: int = Field(DEFAULT_BASIC_MULTIPLIER, gt=0, le=65_535)
    verified_multiplier: int = Field(DEFAULT_VERIFIED_MULTIPLIER, gt=0, le=65_535)
    pro_multiplier: int = Field(DEFAULT_PRO_MULTIPLIER, gt=0, le=65_535)
    whale_multiplier: int = Field(DEFAULT_WHALE_MULTIPLIER, gt=0, le=65_535)
    lock_duration_secs: int = Field(
        DEFAULT_LOCK_DURATION_SECS,
        ge=0,
        description="Lock refreshed on every deposit",
    )
    fraud_forfeit_bps: int = Field(
        DEFAULT_FRAUD_FORFEIT_BPS,
        ge=0,
        le=10_000,
        description="Share of stake slashed when an account is flagged for fraud",
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _ascending(self) -> "StakingConfig":
        thresholds = [
            self.basic_min_stake,
            self.verified_min_stake,
            self.pro_min_stake,
            self.whale_min_stake,
        ]
        multipliers = [
            self.basic_multiplier,
            self.verified_multiplier,
            self.pro_multiplier,
            self.whale_multiplier,
        ]
        for lower, upper in zip(thresholds, thresholds[1:]):
            if upper <= lower:
                raise ValueError(f"Tier thresholds must ascend: {thresholds}")
        for lower, upper in zip(multipliers, multipliers[1:]):
            if upper <= lower:
                raise ValueError(f"Tier multipliers must ascend: {multipliers}")
        return self


class EngineConfig(BaseModel):
    """Root configuration for a `TrustLedger`."""

    reputation: ReputationConfig = Field(default_factory=ReputationConfig)
    staking: StakingConfig = Field(default_factory=StakingConfig)

    model_config = ConfigDict(frozen=True)


class SimulationConfig(BaseModel):
    """Configuration for an adversarial simulation run."""

    suspicion_threshold_bps: int = Field(
        DEFAULT_SUSPICION_THRESHOLD_BPS,
        ge=0,
        le=10_000,
        description="Final scores strictly below this count as flagged",
    )
    convergence_tolerance_bps: int = Field(
        DEFAULT_CONVERGENCE_TOLERANCE_BPS,
        ge=0,
        description="Band around the final separation that counts as stable",
    )
    round_duration_secs: int = Field(DEFAULT_ROUND_DURATION_SECS, gt=0)
    start_timestamp: int = Field(DEFAULT_SIMULATION_START_TS, ge=0)
    reputation: ReputationConfig = Field(default_factory=ReputationConfig)
    staking: StakingConfig = Field(default_factory=StakingConfig)

    model_config = ConfigDict(frozen=True)
