"""Prices applications from the active budget tiers."""

import logging

from marketplace.domain.ports.repositories import PricingRepository
from marketplace.domain.services import pricing
from marketplace.domain.services.pricing import PricingQuote

logger = logging.getLogger(__name__)


class PricingService:
    def __init__(self, default_refund_percentage: float):
        self._default_refund_percentage = default_refund_percentage

    async def quote(
        self, repository: PricingRepository, budget: int, is_team: bool = False
    ) -> PricingQuote:
        tier = await repository.find_tier_for_budget(budget)
        if tier is None:
            logger.warning(
                f"[Pricing] No tier for budget {budget} ({'team' if is_team else 'individual'}), using fallback"
            )
        return pricing.quote(tier, budget, is_team, self._default_refund_percentage)
