"""Centralized resistance-metric calculation.

Pure functions over final integer scores (bps) and the per-round separation
series, shared by the mesa model, the suite runner and the tests. Averages
are single correctly-rounded float divisions of integer sums, so identical
inputs always give identical floats.
"""

from typing import Sequence

MAX_SCORE = 10_000


def average_score(scores: Sequence[int]) -> float:
    """Mean score in bps (0.0 for an empty population)."""
    if not scores:
        return 0.0
    return sum(scores) / len(scores)


def reputation_separation(honest: Sequence[int], attackers: Sequence[int]) -> float:
    """avg(honest) - avg(attackers); an absent attacker population averages 0."""
    return average_score(honest) - average_score(attackers)


def attack_resistance_score(separation: float, has_attackers: bool = True) -> float:
    """Separation mapped onto [0, 100].

    With no attackers there is nothing to resist and the score is 100.
    """
    if not has_attackers:
        return 100.0
    return min(max(separation / MAX_SCORE * 100, 0.0), 100.0)


def detection_accuracy(attackers: Sequence[int], threshold_bps: int) -> float:
    """Share of attackers whose final score is below the suspicion threshold.

    Vacuously 1.0 when the scenario has no attackers.
    """
    if not attackers:
        return 1.0
    return sum(1 for s in attackers if s < threshold_bps) / len(attackers)


def false_positive_rate(honest: Sequence[int], threshold_bps: int) -> float:
    """Share of honest agents wrongly below the suspicion threshold."""
    if not honest:
        return 0.0
    return sum(1 for s in honest if s < threshold_bps) / len(honest)


def convergence_round(history: Sequence[float], tolerance_bps: float) -> int:
    """First (1-based) round after which separation stays near its final value.

    Every round from the returned one onward lies within ``tolerance_bps`` of
    the last value. A run with no history converges at round 1.
    """
    if not history:
        return 1
    final = history[-1]
    converged_from = len(history)
    # Walk backwards while the band holds; loop bounded by the round count.
    for index in range(len(history) - 1, -1, -1):
        if abs(history[index] - final) > tolerance_bps:
            break
        converged_from = index + 1
    return converged_from


def throughput(agent_count: int, rounds: int, elapsed_seconds: float) -> float:
    """Agent-rounds processed per wall-clock second."""
    if elapsed_seconds <= 0:
        return 0.0
    return agent_count * rounds / elapsed_seconds
