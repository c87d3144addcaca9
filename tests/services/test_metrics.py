"""Unit tests for metrics service."""

from trust_tier_sim.services.metrics import (
    attack_resistance_score,
    average_score,
    convergence_round,
    detection_accuracy,
    false_positive_rate,
    reputation_separation,
    throughput,
)


def test_average_score_empty() -> None:
    """Test average of an empty population."""
    assert average_score([]) == 0.0


def test_separation() -> None:
    """Test separation between honest and attacker averages."""
    assert reputation_separation([8_000, 9_000], [1_000, 3_000]) == 6_500.0
    # No attackers: attacker average counts as zero
    assert reputation_separation([8_000], []) == 8_000.0


def test_attack_resistance_score() -> None:
    """Test resistance mapping and clamping."""
    assert attack_resistance_score(5_000) == 50.0
    assert attack_resistance_score(-200) == 0.0
    assert attack_resistance_score(12_000) == 100.0
    assert attack_resistance_score(0, has_attackers=False) == 100.0


def test_detection_and_false_positives() -> None:
    """Test threshold-based detection (strictly below flags)."""
    assert detection_accuracy([1_000, 4_999, 5_000, 9_000], 5_000) == 0.5
    assert detection_accuracy([], 5_000) == 1.0
    assert false_positive_rate([4_000, 8_000, 9_000, 9_500], 5_000) == 0.25
    assert false_positive_rate([], 5_000) == 0.0


def test_convergence_round() -> None:
    """Test first round from which separation stays within tolerance."""
    history = [100.0, 2_000.0, 5_000.0, 5_950.0, 6_020.0, 6_000.0]
    assert convergence_round(history, 100) == 4
    assert convergence_round([1.0, 2.0, 3.0], 0) == 3
    assert convergence_round([], 100) == 1
    assert convergence_round([7.0, 7.0], 0) == 1


def test_throughput() -> None:
    """Test throughput with zero elapsed time."""
    assert throughput(100, 10, 2.0) == 500.0
    assert throughput(100, 10, 0.0) == 0.0
