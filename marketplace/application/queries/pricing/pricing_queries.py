"""Pricing tier listing and cost quotes."""

from dataclasses import dataclass

from marketplace.application.common.interfaces import Query, QueryHandler
from marketplace.application.services import PricingService
from marketplace.domain.entities.pricing_tier import PricingTier
from marketplace.domain.exceptions import DomainValidationError
from marketplace.domain.ports.repositories import PricingRepository
from marketplace.domain.services.pricing import PricingQuote


@dataclass(frozen=True)
class ListPricingTiersQuery(Query[list[PricingTier]]):
    pass


class ListPricingTiersHandler(QueryHandler[list[PricingTier]]):
    def __init__(self, pricing_repository: PricingRepository):
        self._pricing_repository = pricing_repository

    async def execute(self, query: ListPricingTiersQuery) -> list[PricingTier]:
        return await self._pricing_repository.list_active()


@dataclass(frozen=True)
class QuotePricingQuery(Query[PricingQuote]):
    budget: int
    is_team: bool = False


class QuotePricingHandler(QueryHandler[PricingQuote]):
    def __init__(self, pricing_repository: PricingRepository, pricing_service: PricingService):
        self._pricing_repository = pricing_repository
        self._pricing_service = pricing_service

    async def execute(self, query: QuotePricingQuery) -> PricingQuote:
        if query.budget < 0:
            raise DomainValidationError("Budget cannot be negative")
        return await self._pricing_service.quote(
            self._pricing_repository, query.budget, query.is_team
        )
