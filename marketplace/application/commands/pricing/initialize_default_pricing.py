"""Initialize Default Pricing Command (admin) - seeds the four standard tiers."""

import logging
from dataclasses import dataclass

from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.domain.entities.pricing_tier import PricingTier
from marketplace.domain.ports.repositories import PricingRepository
from marketplace.domain.services.pricing import default_tiers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InitializeDefaultPricingCommand(Command[list[PricingTier]]):
    pass


class InitializeDefaultPricingHandler(CommandHandler[list[PricingTier]]):
    def __init__(self, pricing_repository: PricingRepository):
        self._pricing_repository = pricing_repository

    async def execute(self, command: InitializeDefaultPricingCommand) -> list[PricingTier]:
        saved = []
        for tier in default_tiers():
            existing = await self._pricing_repository.find_by_range(
                tier.min_budget, tier.max_budget
            )
            if existing is not None:
                tier.id = existing.id
            saved.append(await self._pricing_repository.save(tier))
        logger.info(f"[Pricing] Initialized {len(saved)} default tiers")
        return saved
