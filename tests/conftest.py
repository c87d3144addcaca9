"""Shared test fixtures."""

from typing import Callable

import pytest

from trust_tier_sim.core.ledger import TrustLedger
from trust_tier_sim.core.staking import StakingController
from trust_tier_sim.schemas import (
    AgentProfile,
    AttackScenario,
    EngineConfig,
    ReputationConfig,
)
from .factories import (
    create_profile,
    create_scenario,
    create_staking_config,
)


@pytest.fixture
def profile_factory() -> Callable[..., AgentProfile]:
    """Fixture that returns the agent profile factory function."""
    return create_profile


@pytest.fixture
def scenario_factory() -> Callable[..., AttackScenario]:
    """Fixture that returns the scenario factory function."""
    return create_scenario


@pytest.fixture
def rep_config() -> ReputationConfig:
    """Return the default reputation configuration."""
    return ReputationConfig()


@pytest.fixture
def controller() -> StakingController:
    """Return a staking controller with the default table and no lock."""
    return StakingController.from_config(create_staking_config())


@pytest.fixture
def ledger() -> TrustLedger:
    """Return an empty ledger with a one-day stake lock."""
    return TrustLedger(
        EngineConfig(staking=create_staking_config(lock_duration_secs=86_400))
    )
