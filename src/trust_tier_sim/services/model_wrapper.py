"""Mesa model integration for the adversarial trust simulator.

Each synthetic account is a `TrustAgent` holding its own `ReputationRecord`
and `StakeRecord`. The model drives them through the same pure transitions a
real event stream would use (`record_payment`, `apply_rating`,
`apply_penalty`, `StakingController`).

All randomness comes from one `XorShift64Star` stream seeded with the run
seed. Agents act in creation order and draw in a fixed sequence, so a seed
and a scenario fully determine every score. Mesa's own RNG is never used for
synthetic draws.

Per-job draw sequence (each draw skipped when its probability is 0 or 1):
    coverage -> completion -> quality -> on-time -> delay -> dispute
    -> dispute won -> fraud flag
"""

import logging
from typing import TYPE_CHECKING

import mesa

from trust_tier_sim.core.performance import JobPerformance, job_rating
from trust_tier_sim.core.prng import XorShift64Star
from trust_tier_sim.core.reputation import (
    Outcome,
    PenaltyKind,
    ReputationRecord,
    apply_penalty,
    apply_rating,
    penalty_for,
    record_payment,
)
from trust_tier_sim.core.staking import (
    StakeRecord,
    StakeTransition,
    StakingController,
    TierChangeRecord,
)
from trust_tier_sim.schemas import AgentProfile, AttackScenario, SimulationConfig, to_bps
from trust_tier_sim.services.data_collect import (
    compute_attacker_average,
    compute_honest_average,
    compute_separation,
    compute_tier_changes,
)
from trust_tier_sim.services.scenarios import validate_profile

if TYPE_CHECKING:
    from trust_tier_sim.schemas import ReputationConfig

logger = logging.getLogger(__name__)

# Nominal job length used for the timeliness factor.
EXPECTED_JOB_SECS = 3_600
# An identity is only abandoned once it has some history to escape.
MIN_JOBS_BEFORE_RESET = 5


class TrustAgent(mesa.Agent):
    """Mesa wrapper around one synthetic account.

    Attributes:
        account: Account identifier (changes on identity reset).
        profile: Behaviour profile driving the draws.
        reputation: Current reputation record.
        stake: Current stake record.
        arrival_round: First round (0-based) in which the agent acts.
        identity_resets: Times the agent abandoned its identity.
        fraud_flags: Jobs flagged as fraud.
        jobs_done: Jobs rated across all identities.
        clock: Timestamp of the agent's latest event.
    """

    def __init__(
        self,
        model: "ReputationSimulationModel",
        account: str,
        profile: AgentProfile,
        arrival_round: int = 0,
    ) -> None:
        super().__init__(model)
        self.account: str = account
        self.profile: AgentProfile = profile
        self.arrival_round: int = arrival_round
        self.reputation: ReputationRecord = ReputationRecord()
        self.stake: StakeRecord = StakeRecord.empty()
        self.identity_resets: int = 0
        self.fraud_flags: int = 0
        self.jobs_done: int = 0
        self.registered: bool = False
        # Latest event timestamp; never moves backwards across rounds
        self.clock: int = 0

        # Probabilities as integer bps, fixed for the whole run
        self._jobs_bps = to_bps(profile.jobs_per_round)
        self._coverage_bps = to_bps(profile.service_coverage)
        self._completion_bps = to_bps(profile.completion_rate)
        self._timeliness_bps = to_bps(profile.timeliness_factor)
        self._dispute_bps = to_bps(profile.dispute_rate)
        self._dispute_win_bps = to_bps(profile.dispute_win_rate)
        self._fraud_bps = to_bps(profile.fraud_flag_rate)
        self._quality = int(round(profile.avg_quality))
        self._spread = int(round(profile.quality_variance))

    def step(self) -> None:
        """Act for the model's current round.

        Note: the model calls agents explicitly, in creation order.
        """
        model = self.model
        round_index = model.current_round
        if round_index < self.arrival_round:
            return

        base_ts = model.config.start_timestamp + round_index * model.config.round_duration_secs
        if not self.registered:
            self._register(self._tick(base_ts))

        prng = model.prng
        whole, fraction = divmod(self._jobs_bps, 10_000)
        job_count = whole + (1 if prng.chance_bps(fraction) else 0)

        for job_index in range(job_count):
            self._work_job(prng, self._tick(base_ts + job_index + 1))

        self._maybe_abandon_identity(self._tick(base_ts + job_count + 1))

    def _tick(self, candidate: int) -> int:
        self.clock = max(candidate, self.clock)
        return self.clock

    def _register(self, now: int) -> None:
        self.registered = True
        if self.profile.stake_amount > 0:
            self._apply_stake(
                self.model.staking.deposit(
                    self.account, self.stake, self.profile.stake_amount, now
                )
            )

    def _work_job(self, prng: XorShift64Star, now: int) -> None:
        config: "ReputationConfig" = self.model.config.reputation

        if prng.chance_bps(self._coverage_bps):
            completed = prng.chance_bps(self._completion_bps)
            quality = self._quality
            if self._spread > 0:
                quality += prng.between(-self._spread, self._spread)
            quality = min(max(quality, 0), 100)
            actual = EXPECTED_JOB_SECS
            if not prng.chance_bps(self._timeliness_bps):
                actual += EXPECTED_JOB_SECS * prng.between(1, 10_000) // 10_000
            disputed = prng.chance_bps(self._dispute_bps)
        else:
            # Uncovered counterpart: failed delivery that ends in a dispute
            completed = False
            quality = 0
            actual = 2 * EXPECTED_JOB_SECS
            disputed = True

        dispute_won = disputed and prng.chance_bps(self._dispute_win_bps)
        rating = job_rating(
            JobPerformance(
                completed=completed,
                quality=quality,
                expected_duration=EXPECTED_JOB_SECS,
                actual_duration=actual,
                satisfaction=quality if completed else quality // 2,
                had_dispute=disputed,
                dispute_won=dispute_won,
            ),
            config.factors,
        )
        outcome = Outcome.SUCCESS if completed and not disputed else Outcome.DISPUTE

        record = self.reputation
        if completed:
            record = record_payment(record, self.profile.job_value, now)
        record = apply_rating(record, rating, outcome, self.profile.rating_weight, config)
        if disputed and not dispute_won:
            record = apply_penalty(record, penalty_for(PenaltyKind.DISPUTE_LOSS, config))
        self.reputation = record
        self.jobs_done += 1

        if prng.chance_bps(self._fraud_bps):
            self.fraud_flags += 1
            self.reputation = apply_penalty(
                self.reputation, penalty_for(PenaltyKind.FRAUD, config)
            )
            if self.stake.amount_staked > 0:
                self._apply_stake(
                    self.model.staking.forfeit(
                        self.account,
                        self.stake,
                        self.model.config.staking.fraud_forfeit_bps,
                        now,
                    )
                )

    def _maybe_abandon_identity(self, now: int) -> None:
        threshold = self.profile.reset_below_bps
        if threshold == 0 or self.reputation.total_jobs < MIN_JOBS_BEFORE_RESET:
            return
        if self.reputation.score >= threshold:
            return
        self.identity_resets += 1
        self.account = f"{self.account.split('#')[0]}#{self.identity_resets}"
        self.reputation = ReputationRecord()
        self.stake = StakeRecord.empty()
        logger.debug(f"{self.account} abandoned its identity (reset #{self.identity_resets})")
        self._register(now)

    def _apply_stake(self, transition: StakeTransition) -> None:
        self.stake = transition.record
        if transition.change is not None:
            self.model.tier_changes.append(transition.change)


class ReputationSimulationModel(mesa.Model):
    """Drives a scenario's population through the trust engine round by round.

    Rounds run strictly in sequence: round n+1 reads the records round n
    produced.
    """

    def __init__(
        self,
        scenario: AttackScenario,
        seed: int,
        rounds: int | None = None,
        config: SimulationConfig | None = None,
    ) -> None:
        """Initialize the model.

        Args:
            scenario: Population mix and default round count.
            seed: Seed for the xorshift stream (and Mesa's own RNG).
            rounds: Overrides ``scenario.round_count`` when given.
            config: Engine and metric configuration.

        Raises:
            InvalidProfile: If any cohort profile is out of range. Raised
                before any agent is created.
        """
        profiles = [validate_profile(c.profile) for c in scenario.cohorts]
        if rounds is not None and rounds <= 0:
            raise ValueError(f"rounds must be positive, got {rounds}")

        super().__init__(seed=seed)
        self.scenario = scenario
        self.config = config or SimulationConfig()
        self.seed_value = seed
        self.round_count = rounds if rounds is not None else scenario.round_count
        self.current_round = 0
        self.prng = XorShift64Star(seed)
        self.staking = StakingController.from_config(self.config.staking)
        self.tier_changes: list[TierChangeRecord] = []
        self.running = True

        self.participants: list[TrustAgent] = []
        for cohort, profile in zip(scenario.cohorts, profiles):
            spread = profile.arrival_spread_rounds
            for k in range(cohort.count):
                arrival = k * spread // cohort.count if spread else 0
                agent = TrustAgent(
                    self,
                    account=f"{profile.name}-{len(self.participants):05d}",
                    profile=profile,
                    arrival_round=arrival,
                )
                self.participants.append(agent)

        self.datacollector = mesa.DataCollector(
            model_reporters={
                "Honest_Avg": compute_honest_average,
                "Attacker_Avg": compute_attacker_average,
                "Separation": compute_separation,
                "Tier_Changes": compute_tier_changes,
            }
        )
        logger.info(
            f"Scenario {scenario.name}: {len(self.participants)} agents, "
            f"{self.round_count} rounds, seed={seed}"
        )

    def step(self) -> None:
        """Execute one round."""
        for agent in self.participants:
            agent.step()
        self.current_round += 1
        self.datacollector.collect(self)
        if self.current_round >= self.round_count:
            self.running = False

    def run(self) -> None:
        """Run every remaining round."""
        while self.current_round < self.round_count:
            self.step()

    def final_scores(self, adversarial: bool) -> list[int]:
        return [
            a.reputation.score
            for a in self.participants
            if a.profile.adversarial is adversarial
        ]

    def separation_history(self) -> list[float]:
        df = self.datacollector.get_model_vars_dataframe()
        if df.empty:
            return []
        return [float(v) for v in df["Separation"].tolist()]
