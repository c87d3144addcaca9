import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

# Import the module to patch, not just the function
import trust_tier_sim.services.config_manager as config_manager_module
from trust_tier_sim.core.errors import InvalidProfile

from ..factories import create_profile


@pytest.fixture
def mock_scenario_dir():
    """Create a temporary directory for scenarios."""
    with tempfile.TemporaryDirectory() as tmpdir:
        tmp_path = Path(tmpdir)

        scenario_data = {
            "name": "file_sybils",
            "round_count": 10,
            "cohorts": [
                {"count": 20, "profile": create_profile().model_dump()},
                {
                    "count": 5,
                    "profile": create_profile(
                        name="sybil", adversarial=True, completion_rate=0.2
                    ).model_dump(),
                },
            ],
        }

        with open(tmp_path / "EXAMPLE_sybils.json", "w") as f:
            json.dump(scenario_data, f)

        bad = dict(scenario_data)
        bad["cohorts"] = [{"count": 1, "profile": {"name": "x", "completion_rate": 3, "avg_quality": 1}}]
        with open(tmp_path / "EXAMPLE_broken.json", "w") as f:
            json.dump(bad, f)

        # Patch the SCENARIO_DIR in the module
        with patch.object(config_manager_module, "SCENARIO_DIR", tmp_path):
            yield tmp_path


def test_manager(mock_scenario_dir) -> None:
    """List, load and save scenario files."""
    scenarios = config_manager_module.list_scenarios()
    assert scenarios == ["EXAMPLE_broken.json", "EXAMPLE_sybils.json"]

    scenario = config_manager_module.load_scenario("EXAMPLE_sybils.json")
    assert scenario.population_mix == {"honest": 20, "sybil": 5}

    path = config_manager_module.save_scenario(scenario, "test_save.json")
    assert (mock_scenario_dir / "test_save.json").exists()
    assert config_manager_module.load_scenario_file(path) == scenario


def test_invalid_file_profile(mock_scenario_dir) -> None:
    """Out-of-range profiles in a file raise InvalidProfile."""
    with pytest.raises(InvalidProfile):
        config_manager_module.load_scenario("EXAMPLE_broken.json")


def test_missing_file(mock_scenario_dir) -> None:
    """Missing files raise FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        config_manager_module.load_scenario("nope.json")
