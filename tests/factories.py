"""Test data factories for generating valid schema objects."""

from typing import Any

from trust_tier_sim.schemas import (
    AgentProfile,
    AttackScenario,
    Cohort,
    ReputationConfig,
    StakingConfig,
)


def create_profile(name: str = "honest", adversarial: bool = False, **kwargs: Any) -> AgentProfile:
    """Create a valid AgentProfile with overrideable defaults."""
    defaults = {
        "completion_rate": 0.9,
        "avg_quality": 85,
        "quality_variance": 10,
        "timeliness_factor": 0.85,
        "dispute_rate": 0.05,
        "jobs_per_round": 1.5,
    }
    data = {**defaults, **kwargs}
    return AgentProfile(name=name, adversarial=adversarial, **data)


def create_scenario(
    name: str = "Test Scenario",
    honest: int = 20,
    attackers: int = 10,
    round_count: int = 10,
    **attacker_kwargs: Any,
) -> AttackScenario:
    """Create a small honest-vs-attacker scenario."""
    cohorts = [Cohort(profile=create_profile(), count=honest)]
    if attackers:
        defaults = {
            "completion_rate": 0.3,
            "avg_quality": 20,
            "timeliness_factor": 0.4,
            "dispute_rate": 0.3,
            "dispute_win_rate": 0.2,
        }
        profile = create_profile(
            name="attacker", adversarial=True, **{**defaults, **attacker_kwargs}
        )
        cohorts.append(Cohort(profile=profile, count=attackers))
    return AttackScenario(name=name, cohorts=tuple(cohorts), round_count=round_count)


def create_reputation_config(**kwargs: Any) -> ReputationConfig:
    """Create a ReputationConfig."""
    return ReputationConfig(**kwargs)


def create_staking_config(**kwargs: Any) -> StakingConfig:
    """Create a StakingConfig with no lock unless one is given."""
    defaults = {"lock_duration_secs": 0}
    return StakingConfig(**{**defaults, **kwargs})
