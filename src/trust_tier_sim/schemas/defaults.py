"""Default parameter values for the trust engine and simulator.

These constants are used as `Field(default=...)` values in the Pydantic
config schemas.  They live here (in the schemas layer) rather than in
`core/` so that `schemas` does not depend on `core`.

All scores and percentages are integers: basis points (10_000 = 100%) for
scores and penalties, scale 100 (100 = 1.00x) for revenue multipliers.
"""

# =============================================================================
# TUNABLE CONSTANTS
# =============================================================================
# The EMA weight, penalty magnitudes and suspicion threshold have no derivation
# behind them; they are exposed as configuration.  The multipliers only need to
# be strictly ascending, one per tier.
# =============================================================================

# --- Reputation (EMA) ---
# score' = score + (rating*100 - score) * ema_weight * weight / 10_000^2
# 1250 bps = 1/8: recent jobs dominate, a single 0 rating removes 1/8 of score.
DEFAULT_EMA_WEIGHT_BPS = 1_250
DEFAULT_RATING_WEIGHT = 10_000  # full weight for a single rating
DEFAULT_FRAUD_PENALTY_BPS = 5_000  # 50% of the score range
DEFAULT_DISPUTE_LOSS_PENALTY_BPS = 1_000  # 10% of the score range
DEFAULT_INACTIVITY_THRESHOLD_SECS = 30 * 24 * 60 * 60  # 30 days
DEFAULT_DECAY_BPS_PER_DAY = 10  # 0.1% per idle day (read-only projection)

# --- Job scoring weights (sum to 100) ---
DEFAULT_COMPLETION_WEIGHT = 30
DEFAULT_QUALITY_WEIGHT = 30
DEFAULT_TIMELINESS_WEIGHT = 15
DEFAULT_SATISFACTION_WEIGHT = 15
DEFAULT_DISPUTE_WEIGHT = 10

# --- Staking tiers (inclusive lower bounds, smallest denomination) ---
DEFAULT_BASIC_MIN_STAKE = 1_000
DEFAULT_VERIFIED_MIN_STAKE = 5_000
DEFAULT_PRO_MIN_STAKE = 50_000
DEFAULT_WHALE_MIN_STAKE = 500_000
# Revenue multipliers, scale 100
DEFAULT_BASIC_MULTIPLIER = 100  # 1.00x
DEFAULT_VERIFIED_MULTIPLIER = 150  # 1.50x
DEFAULT_PRO_MULTIPLIER = 200  # 2.00x
DEFAULT_WHALE_MULTIPLIER = 300  # 3.00x
DEFAULT_LOCK_DURATION_SECS = 7 * 24 * 60 * 60  # 7 days
DEFAULT_FRAUD_FORFEIT_BPS = 5_000  # stake slashed on a fraud flag

# --- Simulation ---
DEFAULT_SIMULATION_SEED = 42
DEFAULT_SUSPICION_THRESHOLD_BPS = 5_000  # final score below this = flagged
DEFAULT_CONVERGENCE_TOLERANCE_BPS = 100  # separation band around final value
DEFAULT_ROUND_DURATION_SECS = 24 * 60 * 60  # one simulated day per round
DEFAULT_SIMULATION_START_TS = 1_700_000_000
DEFAULT_SCENARIO_ROUNDS = 100

# --- Agent profile defaults ---
DEFAULT_JOB_VALUE = 100  # settled payment per completed job
DEFAULT_DISPUTE_WIN_RATE = 0.5
