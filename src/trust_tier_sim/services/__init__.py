"""Services package for simulation orchestration.

This package contains:
- scenarios.py: built-in attack scenario catalog
- model_wrapper.py: Mesa model integration (ReputationSimulationModel)
- data_collect.py: Mesa data collection functions
- metrics.py: resistance metrics
- simulation.py: scenario and suite runners
- config_manager.py: custom scenario file loading/saving
"""

from trust_tier_sim.services.model_wrapper import ReputationSimulationModel
from trust_tier_sim.services.simulation import results_frame, run_scenario, run_suite

__all__ = ["ReputationSimulationModel", "run_scenario", "run_suite", "results_frame"]
