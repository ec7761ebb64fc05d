"""
Application pricing rules.

A bid costs credits according to the active tier covering the order budget.
Team bids use the tier's team columns when set. Without a matching tier the
cost falls back to a share of the budget, clamped to 1..100 credits.
Refunds are a percentage of that cost, rounded half up.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from marketplace.domain.entities.pricing_tier import PricingTier

INDIVIDUAL_FALLBACK_RATE = 0.05
TEAM_FALLBACK_RATE = 0.07
MIN_FALLBACK_COST = 1
MAX_FALLBACK_COST = 100


@dataclass(frozen=True)
class PricingQuote:
    credit_cost: int
    refund_percentage: float
    is_team: bool
    tier_id: Optional[int] = None

    @property
    def refund_amount(self) -> int:
        return refund_amount(self.credit_cost, self.refund_percentage)


def round_half_up(value) -> int:
    """Round .5 away from zero. Floats go through str() so 15 * 0.7 stays 10.5."""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _percent_of(amount: int, rate: float) -> Decimal:
    return Decimal(amount) * Decimal(str(rate))


def refund_amount(credit_cost: int, refund_percentage: float) -> int:
    return max(0, round_half_up(_percent_of(credit_cost, refund_percentage)))


def fallback_credit_cost(budget: int, is_team: bool = False) -> int:
    rate = TEAM_FALLBACK_RATE if is_team else INDIVIDUAL_FALLBACK_RATE
    cost = round_half_up(_percent_of(budget, rate))
    return max(MIN_FALLBACK_COST, min(MAX_FALLBACK_COST, cost))


def quote(
    tier: Optional[PricingTier],
    budget: int,
    is_team: bool,
    default_refund_percentage: float,
) -> PricingQuote:
    if tier is None:
        return PricingQuote(
            credit_cost=fallback_credit_cost(budget, is_team),
            refund_percentage=default_refund_percentage,
            is_team=is_team,
        )
    return PricingQuote(
        credit_cost=tier.cost_for(is_team),
        refund_percentage=tier.refund_percentage_for(is_team),
        is_team=is_team,
        tier_id=tier.id,
    )


def select_tier(tiers: list[PricingTier], budget: int) -> Optional[PricingTier]:
    """Highest min_budget among active tiers covering the budget."""
    matching = [t for t in tiers if t.is_active and t.covers(budget)]
    if not matching:
        return None
    return max(matching, key=lambda t: t.min_budget)


def default_tiers() -> list[PricingTier]:
    return [
        PricingTier(
            id=None,
            min_budget=0,
            max_budget=500,
            credit_cost=1,
            team_credit_cost=2,
            refund_percentage=0.5,
            team_refund_percentage=0.5,
            description="Small orders (0-500)",
        ),
        PricingTier(
            id=None,
            min_budget=500,
            max_budget=2000,
            credit_cost=5,
            team_credit_cost=8,
            refund_percentage=0.6,
            team_refund_percentage=0.6,
            description="Medium orders (500-2000)",
        ),
        PricingTier(
            id=None,
            min_budget=2000,
            max_budget=5000,
            credit_cost=10,
            team_credit_cost=15,
            refund_percentage=0.7,
            team_refund_percentage=0.7,
            description="Large orders (2000-5000)",
        ),
        PricingTier(
            id=None,
            min_budget=5000,
            max_budget=None,
            credit_cost=20,
            team_credit_cost=30,
            refund_percentage=0.8,
            team_refund_percentage=0.8,
            description="Premium orders (5000+)",
        ),
    ]
