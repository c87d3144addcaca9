"""Scenario Library: fixed catalog of attacker/control profiles and mixes.

Honest agents are the control population in every scenario. Each attack
cohort carries ``adversarial=True``; that label is ground truth for offline
scoring only and is never visible to the scoring rules.

Catalog:
    honest_baseline     honest agents only
    sybil_attack        many zero-history accounts with identical poor behaviour
    wash_trading        self-dealt jobs with perfect self-ratings
    collusion_ring      ring members inflate each other's ratings
    selective_service   good service to some counterparts, failed jobs to the rest
    registration_spam   a burst of cheap accounts arriving over the first rounds
    reputation_washing  defrauding, then abandoning low-score identities
    mixed_attack        several of the above at once
"""

import logging

from trust_tier_sim.core.errors import UnknownScenario
from trust_tier_sim.schemas import AgentProfile, AttackScenario, Cohort
from trust_tier_sim.schemas.defaults import DEFAULT_SCENARIO_ROUNDS

logger = logging.getLogger(__name__)

# --- Profiles ---
HONEST = AgentProfile(
    name="honest",
    completion_rate=0.9,
    avg_quality=85,
    quality_variance=10,
    timeliness_factor=0.85,
    dispute_rate=0.05,
    dispute_win_rate=0.7,
    jobs_per_round=1.5,
    stake_amount=5_000,
)

SYBIL = AgentProfile(
    name="sybil",
    adversarial=True,
    completion_rate=0.3,
    avg_quality=20,
    quality_variance=10,
    timeliness_factor=0.4,
    dispute_rate=0.3,
    dispute_win_rate=0.2,
    jobs_per_round=1.5,
)

WASH_TRADER = AgentProfile(
    name="wash_trader",
    adversarial=True,
    completion_rate=1.0,
    avg_quality=100,
    timeliness_factor=1.0,
    jobs_per_round=4.0,
    fraud_flag_rate=0.08,
    stake_amount=1_000,
    job_value=10,
)

COLLUDER = AgentProfile(
    name="colluder",
    adversarial=True,
    completion_rate=1.0,
    avg_quality=95,
    quality_variance=5,
    timeliness_factor=1.0,
    jobs_per_round=3.0,
    fraud_flag_rate=0.05,
    stake_amount=5_000,
)

SELECTIVE_SERVER = AgentProfile(
    name="selective_server",
    adversarial=True,
    completion_rate=0.95,
    avg_quality=90,
    quality_variance=5,
    timeliness_factor=0.9,
    dispute_win_rate=0.1,
    service_coverage=0.5,
    jobs_per_round=2.0,
    stake_amount=5_000,
)

REGISTRATION_SPAMMER = AgentProfile(
    name="registration_spammer",
    adversarial=True,
    completion_rate=0.5,
    avg_quality=40,
    quality_variance=20,
    timeliness_factor=0.5,
    dispute_rate=0.2,
    dispute_win_rate=0.3,
    jobs_per_round=0.5,
    arrival_spread_rounds=20,
)

REPUTATION_WASHER = AgentProfile(
    name="reputation_washer",
    adversarial=True,
    completion_rate=0.8,
    avg_quality=70,
    quality_variance=15,
    timeliness_factor=0.7,
    dispute_rate=0.1,
    dispute_win_rate=0.3,
    jobs_per_round=2.0,
    fraud_flag_rate=0.1,
    reset_below_bps=4_000,
    stake_amount=1_000,
)


def _scenario(name: str, description: str, *cohorts: tuple[AgentProfile, int]) -> AttackScenario:
    return AttackScenario(
        name=name,
        description=description,
        cohorts=tuple(Cohort(profile=p, count=n) for p, n in cohorts),
        round_count=DEFAULT_SCENARIO_ROUNDS,
    )


SCENARIO_LIBRARY: dict[str, AttackScenario] = {
    s.name: s
    for s in (
        _scenario(
            "honest_baseline",
            "Honest population only; upper bound for every resistance metric.",
            (HONEST, 1_000),
        ),
        _scenario(
            "sybil_attack",
            "200 zero-history accounts with identical low-quality behaviour.",
            (HONEST, 1_000),
            (SYBIL, 200),
        ),
        _scenario(
            "wash_trading",
            "Self-dealt jobs rated 100 with tiny self-payments; occasionally flagged.",
            (HONEST, 500),
            (WASH_TRADER, 100),
        ),
        _scenario(
            "collusion_ring",
            "Ring members rate each other near-perfectly.",
            (HONEST, 500),
            (COLLUDER, 100),
        ),
        _scenario(
            "selective_service",
            "Good service to half of the counterparts, failed jobs to the rest.",
            (HONEST, 500),
            (SELECTIVE_SERVER, 100),
        ),
        _scenario(
            "registration_spam",
            "Burst of cheap accounts registered over the first 20 rounds.",
            (HONEST, 500),
            (REGISTRATION_SPAMMER, 300),
        ),
        _scenario(
            "reputation_washing",
            "Fraud-prone accounts that abandon identities once their score drops.",
            (HONEST, 500),
            (REPUTATION_WASHER, 100),
        ),
        _scenario(
            "mixed_attack",
            "Sybils, wash traders, colluders, spammers and washers together.",
            (HONEST, 500),
            (SYBIL, 60),
            (WASH_TRADER, 40),
            (COLLUDER, 40),
            (REGISTRATION_SPAMMER, 40),
            (REPUTATION_WASHER, 40),
        ),
    )
}


def list_scenarios() -> list[str]:
    """Names of all catalog scenarios, in catalog order."""
    return list(SCENARIO_LIBRARY)


def get_scenario(name: str) -> AttackScenario:
    """Look up a catalog scenario.

    Raises:
        UnknownScenario: If ``name`` is not in the catalog.
    """
    try:
        return SCENARIO_LIBRARY[name]
    except KeyError:
        raise UnknownScenario(name) from None


def validate_profile(profile: AgentProfile | dict) -> AgentProfile:
    """Re-validate a profile, reporting range violations as ``InvalidProfile``.

    Profiles built with ``model_construct`` skip validation; the simulator
    runs every profile through here before any round executes.
    """
    data = profile.model_dump() if isinstance(profile, AgentProfile) else profile
    return AgentProfile(**data)


def build_scenario(data: dict) -> AttackScenario:
    """Build a scenario from plain data (e.g. parsed JSON).

    Raises:
        InvalidProfile: If any cohort profile is out of range.
        ValidationError: For other structural problems.
    """
    return AttackScenario(**data)
