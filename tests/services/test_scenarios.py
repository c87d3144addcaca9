"""Tests for the built-in scenario catalog and profile validation."""

import pytest
from pydantic import ValidationError

from trust_tier_sim.core.errors import InvalidProfile, UnknownScenario
from trust_tier_sim.schemas import AgentProfile, AttackScenario
from trust_tier_sim.services.scenarios import (
    SCENARIO_LIBRARY,
    build_scenario,
    get_scenario,
    list_scenarios,
    validate_profile,
)

EXPECTED = [
    "honest_baseline",
    "sybil_attack",
    "wash_trading",
    "collusion_ring",
    "selective_service",
    "registration_spam",
    "reputation_washing",
    "mixed_attack",
]


def test_catalog_contents() -> None:
    """Catalog lists every scenario in a stable order."""
    assert list_scenarios() == EXPECTED


def test_sybil_population() -> None:
    """Sybil attack pits 1000 honest agents against 200 sybils."""
    scenario = get_scenario("sybil_attack")
    assert scenario.population_mix == {"honest": 1_000, "sybil": 200}
    assert scenario.round_count == 100
    assert scenario.has_attackers


def test_baseline_has_no_attackers() -> None:
    """Honest baseline contains only the control population."""
    assert not get_scenario("honest_baseline").has_attackers
    assert all(
        SCENARIO_LIBRARY[name].has_attackers for name in EXPECTED if name != "honest_baseline"
    )


def test_unknown_scenario() -> None:
    """Unknown names raise UnknownScenario."""
    with pytest.raises(UnknownScenario) as exc_info:
        get_scenario("does_not_exist")
    assert exc_info.value.name == "does_not_exist"


def test_validate_profile_rejects_out_of_range() -> None:
    """Profiles bypassing validation are caught before use."""
    bad = AgentProfile.model_construct(name="bad", completion_rate=1.5, avg_quality=50)
    with pytest.raises(InvalidProfile):
        validate_profile(bad)
    with pytest.raises(InvalidProfile):
        validate_profile({"name": "worse", "completion_rate": 0.5, "avg_quality": 50, "jobs_per_round": 0})


def test_build_scenario_from_dict(profile_factory) -> None:
    """Plain data builds a scenario; bad profiles raise InvalidProfile."""
    data = {
        "name": "custom",
        "round_count": 5,
        "cohorts": [{"count": 3, "profile": profile_factory().model_dump()}],
    }
    scenario = build_scenario(data)
    assert scenario.agent_count == 3

    data["cohorts"][0]["profile"]["avg_quality"] = 150
    with pytest.raises(InvalidProfile):
        build_scenario(data)


def test_direct_construction_raises_invalid_profile(profile_factory) -> None:
    """Out-of-range profiles built directly raise InvalidProfile."""
    with pytest.raises(InvalidProfile):
        AgentProfile(name="x", completion_rate=1.5, avg_quality=50)

    bad = {"name": "y", "completion_rate": 0.5, "avg_quality": 150}
    with pytest.raises(InvalidProfile):
        AttackScenario(name="nested", round_count=1, cohorts=[{"count": 1, "profile": bad}])

    good = profile_factory().model_dump()
    with pytest.raises(ValidationError):
        AttackScenario(name="no_rounds", round_count=0, cohorts=[{"count": 1, "profile": good}])
