"""Data collection reporters for the simulation model."""

import mesa

from trust_tier_sim.services.metrics import average_score, reputation_separation


def _scores(model: mesa.Model, adversarial: bool) -> list[int]:
    from trust_tier_sim.services.model_wrapper import TrustAgent

    return [
        a.reputation.score
        for a in model.agents
        if isinstance(a, TrustAgent) and a.profile.adversarial is adversarial
    ]


def compute_honest_average(model: mesa.Model) -> float:
    """Mean honest score (bps) at the end of the current round."""
    return average_score(_scores(model, adversarial=False))


def compute_attacker_average(model: mesa.Model) -> float:
    """Mean attacker score (bps) at the end of the current round."""
    return average_score(_scores(model, adversarial=True))


def compute_separation(model: mesa.Model) -> float:
    """Honest minus attacker mean score (bps)."""
    return reputation_separation(
        _scores(model, adversarial=False), _scores(model, adversarial=True)
    )


def compute_tier_changes(model: mesa.Model) -> int:
    """Cumulative tier change records emitted so far."""
    return len(getattr(model, "tier_changes", []))
