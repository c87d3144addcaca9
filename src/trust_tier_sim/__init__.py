"""Reputation and tiered trust engine with an adversarial scenario simulator.

- core/: pure reputation, tier and staking transitions
- schemas/: pydantic configuration and simulation models
- services/: mesa model, scenario catalog and runners
"""

__version__ = "0.1.0"
