"""Schemas package.

- config.py: Configuration models (ReputationConfig, StakingConfig, etc.)
- data.py: Simulation models (AgentProfile, AttackScenario, SimulationResult)
"""

from .config import (
    EngineConfig,
    ReputationConfig,
    ScoringFactors,
    SimulationConfig,
    StakingConfig,
)
from .data import (
    AgentProfile,
    AttackScenario,
    Cohort,
    RunPerformance,
    SimulationResult,
    to_bps,
)

__all__ = [
    "ScoringFactors",
    "ReputationConfig",
    "StakingConfig",
    "EngineConfig",
    "SimulationConfig",
    "AgentProfile",
    "Cohort",
    "AttackScenario",
    "RunPerformance",
    "SimulationResult",
    "to_bps",
]
