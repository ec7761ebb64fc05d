"""
Upsert Pricing Tier Command (admin).

A tier is identified by its budget range: saving a range that already
exists updates that tier (and reactivates it) instead of adding a second one.
"""

from dataclasses import dataclass
from typing import Optional

from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.domain.entities.pricing_tier import PricingTier
from marketplace.domain.exceptions import DomainValidationError
from marketplace.domain.ports.repositories import PricingRepository


@dataclass(frozen=True)
class UpsertPricingTierCommand(Command[PricingTier]):
    min_budget: int
    credit_cost: int
    max_budget: Optional[int] = None
    team_credit_cost: Optional[int] = None
    refund_percentage: float = 0.5
    team_refund_percentage: Optional[float] = None
    description: Optional[str] = None


class UpsertPricingTierHandler(CommandHandler[PricingTier]):
    def __init__(self, pricing_repository: PricingRepository):
        self._pricing_repository = pricing_repository

    async def execute(self, command: UpsertPricingTierCommand) -> PricingTier:
        existing = await self._pricing_repository.find_by_range(
            command.min_budget, command.max_budget
        )
        try:
            tier = PricingTier(
                id=existing.id if existing else None,
                min_budget=command.min_budget,
                max_budget=command.max_budget,
                credit_cost=command.credit_cost,
                team_credit_cost=(
                    command.team_credit_cost
                    if command.team_credit_cost is not None
                    else (existing.team_credit_cost if existing else None)
                ),
                refund_percentage=command.refund_percentage,
                team_refund_percentage=(
                    command.team_refund_percentage
                    if command.team_refund_percentage is not None
                    else (existing.team_refund_percentage if existing else None)
                ),
                description=command.description,
                is_active=True,
            )
        except ValueError as e:
            raise DomainValidationError(str(e)) from e
        return await self._pricing_repository.save(tier)
