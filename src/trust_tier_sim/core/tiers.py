"""Tier Classifier: maps a staked amount to an access tier.

`classify` is total and side-effect free. It never reads or writes a
`StakeRecord`, which lets the simulator and the staking controller share it.

Default table (thresholds are inclusive lower bounds, ties go to the higher
tier):

    Tier       Min stake   Multiplier   Benefits
    NONE               0        0.00x   -
    BASIC          1,000        1.00x   pay-per-use
    VERIFIED       5,000        1.50x   unlimited verification
    PRO           50,000        2.00x   unlimited verification + metered API
    WHALE        500,000        3.00x   unlimited verification + unlimited API
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TYPE_CHECKING

from trust_tier_sim.core.fixed_point import check_u64

if TYPE_CHECKING:
    from ..schemas import StakingConfig


class AccessTier(IntEnum):
    """Closed, ordered set of access tiers."""

    NONE = 0
    BASIC = 1
    VERIFIED = 2
    PRO = 3
    WHALE = 4


class Benefit(str, Enum):
    PAY_PER_USE = "pay_per_use"
    UNLIMITED_VERIFICATIONS = "unlimited_verifications"
    METERED_API = "metered_api"
    UNLIMITED_API = "unlimited_api"


TIER_BENEFITS: dict[AccessTier, frozenset[Benefit]] = {
    AccessTier.NONE: frozenset(),
    AccessTier.BASIC: frozenset({Benefit.PAY_PER_USE}),
    AccessTier.VERIFIED: frozenset({Benefit.UNLIMITED_VERIFICATIONS}),
    AccessTier.PRO: frozenset({Benefit.UNLIMITED_VERIFICATIONS, Benefit.METERED_API}),
    AccessTier.WHALE: frozenset(
        {Benefit.UNLIMITED_VERIFICATIONS, Benefit.UNLIMITED_API}
    ),
}


@dataclass(frozen=True)
class TierSpec:
    tier: AccessTier
    min_stake: int
    multiplier: int  # scale 100


@dataclass(frozen=True)
class TierAssignment:
    """Result of classifying a staked amount."""

    tier: AccessTier
    multiplier: int
    benefits: frozenset[Benefit]


class TierTable:
    """Ascending threshold table, one row per tier.

    Attributes:
        specs: Rows ordered from NONE to WHALE.
    """

    def __init__(self, specs: list[TierSpec]) -> None:
        tiers = [spec.tier for spec in specs]
        if tiers != list(AccessTier):
            raise ValueError(f"Tier table must list every tier in order, got {tiers}")
        if specs[0].min_stake != 0 or specs[0].multiplier != 0:
            raise ValueError("NONE tier must start at 0 with a 0 multiplier")
        for lower, upper in zip(specs, specs[1:]):
            if upper.min_stake <= lower.min_stake:
                raise ValueError("Tier thresholds must be strictly ascending")
            if upper.multiplier <= lower.multiplier:
                raise ValueError("Tier multipliers must be strictly ascending")
        self.specs: tuple[TierSpec, ...] = tuple(specs)

    def threshold(self, tier: AccessTier) -> int:
        return self.specs[tier].min_stake

    def multiplier(self, tier: AccessTier) -> int:
        return self.specs[tier].multiplier


def build_tier_table(config: "StakingConfig") -> TierTable:
    """Build a tier table from staking configuration."""
    return TierTable(
        [
            TierSpec(AccessTier.NONE, 0, 0),
            TierSpec(AccessTier.BASIC, config.basic_min_stake, config.basic_multiplier),
            TierSpec(
                AccessTier.VERIFIED,
                config.verified_min_stake,
                config.verified_multiplier,
            ),
            TierSpec(AccessTier.PRO, config.pro_min_stake, config.pro_multiplier),
            TierSpec(AccessTier.WHALE, config.whale_min_stake, config.whale_multiplier),
        ]
    )


DEFAULT_TIER_TABLE = TierTable(
    [
        TierSpec(AccessTier.NONE, 0, 0),
        TierSpec(AccessTier.BASIC, 1_000, 100),
        TierSpec(AccessTier.VERIFIED, 5_000, 150),
        TierSpec(AccessTier.PRO, 50_000, 200),
        TierSpec(AccessTier.WHALE, 500_000, 300),
    ]
)


def classify(amount_staked: int, table: TierTable = DEFAULT_TIER_TABLE) -> TierAssignment:
    """Map a staked amount to its tier, multiplier and benefits.

    Raises:
        Underflow / Overflow: If ``amount_staked`` does not fit u64.
    """
    check_u64(amount_staked, "amount_staked")
    tier = AccessTier.NONE
    # Highest threshold not above the amount; loop bounded by tier count.
    for spec in table.specs:
        if amount_staked >= spec.min_stake:
            tier = spec.tier
    return TierAssignment(
        tier=tier,
        multiplier=table.multiplier(tier),
        benefits=TIER_BENEFITS[tier],
    )
