"""Scenario Management Module.

Handles listing, loading, and saving of custom attack scenarios stored as
JSON files. Loaded files go through the same profile validation as catalog
scenarios.
"""

import json
from pathlib import Path
from typing import List

from ..schemas import AttackScenario
from .scenarios import build_scenario

SCENARIO_DIR = Path.cwd() / "scenarios"


def list_scenarios() -> List[str]:
    """List all scenario files in the scenarios directory.

    Returns:
        List of filenames (e.g., ['flash_sybils.json']).
    """
    if not SCENARIO_DIR.exists():
        return []
    return sorted(f.name for f in SCENARIO_DIR.glob("*.json"))


def load_scenario_file(path: Path) -> AttackScenario:
    """Load and validate a scenario from an explicit path.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        InvalidProfile: If a cohort profile is out of range.
        ValidationError: If the JSON doesn't match the scenario schema.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Scenario file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    return build_scenario(data)


def load_scenario(filename: str) -> AttackScenario:
    """Load a scenario by filename from the scenarios directory."""
    return load_scenario_file(SCENARIO_DIR / filename)


def save_scenario(scenario: AttackScenario, filename: str) -> Path:
    """Save a scenario to a JSON file in the scenarios directory."""
    SCENARIO_DIR.mkdir(parents=True, exist_ok=True)
    file_path = SCENARIO_DIR / filename

    with open(file_path, "w", encoding="utf-8") as f:
        f.write(scenario.model_dump_json(indent=2))
    return file_path
