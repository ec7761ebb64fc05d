"""Prisma Pricing Repository Implementation."""

from typing import Optional

from prisma import Prisma
from prisma.models import OrderPricing as PrismaOrderPricing

from marketplace.domain.entities.pricing_tier import PricingTier
from marketplace.domain.ports.repositories import PricingRepository


class PrismaPricingRepository(PricingRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaOrderPricing) -> PricingTier:
        return PricingTier(
            id=record.id,
            min_budget=record.min_budget,
            max_budget=record.max_budget,
            credit_cost=record.credit_cost,
            team_credit_cost=record.team_credit_cost,
            refund_percentage=record.refund_percentage,
            team_refund_percentage=record.team_refund_percentage,
            description=record.description,
            is_active=record.is_active,
        )

    def _to_data(self, tier: PricingTier) -> dict:
        return {
            "min_budget": tier.min_budget,
            "max_budget": tier.max_budget,
            "credit_cost": tier.credit_cost,
            "team_credit_cost": tier.team_credit_cost,
            "refund_percentage": tier.refund_percentage,
            "team_refund_percentage": tier.team_refund_percentage,
            "description": tier.description,
            "is_active": tier.is_active,
        }

    async def find_tier_for_budget(self, budget: int) -> Optional[PricingTier]:
        record = await self._prisma.orderpricing.find_first(
            where={
                "is_active": True,
                "min_budget": {"lte": budget},
                "OR": [{"max_budget": {"gte": budget}}, {"max_budget": None}],
            },
            order={"min_budget": "desc"},
        )
        return self._to_entity(record) if record else None

    async def list_active(self) -> list[PricingTier]:
        records = await self._prisma.orderpricing.find_many(
            where={"is_active": True}, order={"min_budget": "asc"}
        )
        return [self._to_entity(record) for record in records]

    async def get_by_id(self, tier_id: int) -> Optional[PricingTier]:
        record = await self._prisma.orderpricing.find_unique(where={"id": tier_id})
        return self._to_entity(record) if record else None

    async def find_by_range(
        self, min_budget: int, max_budget: Optional[int]
    ) -> Optional[PricingTier]:
        record = await self._prisma.orderpricing.find_first(
            where={"min_budget": min_budget, "max_budget": max_budget}
        )
        return self._to_entity(record) if record else None

    async def save(self, tier: PricingTier) -> PricingTier:
        if tier.id is None:
            record = await self._prisma.orderpricing.create(data=self._to_data(tier))
        else:
            record = await self._prisma.orderpricing.update(
                where={"id": tier.id}, data=self._to_data(tier)
            )
        return self._to_entity(record)

    async def deactivate(self, tier_id: int) -> bool:
        updated = await self._prisma.orderpricing.update_many(
            where={"id": tier_id}, data={"is_active": False}
        )
        return updated > 0
