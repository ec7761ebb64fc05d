"""Deactivate Pricing Tier Command (admin)."""

from dataclasses import dataclass

from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.domain.exceptions import EntityNotFoundError
from marketplace.domain.ports.repositories import PricingRepository


@dataclass(frozen=True)
class DeactivatePricingTierCommand(Command[None]):
    tier_id: int


class DeactivatePricingTierHandler(CommandHandler[None]):
    def __init__(self, pricing_repository: PricingRepository):
        self._pricing_repository = pricing_repository

    async def execute(self, command: DeactivatePricingTierCommand) -> None:
        if not await self._pricing_repository.deactivate(command.tier_id):
            raise EntityNotFoundError("Pricing tier not found")
