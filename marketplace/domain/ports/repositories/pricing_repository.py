"""
Pricing Repository Port - Budget tiers used to price applications.
Implementation: marketplace/infrastructure/persistence/prisma_pricing_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from marketplace.domain.entities.pricing_tier import PricingTier


class PricingRepository(ABC):
    @abstractmethod
    async def find_tier_for_budget(self, budget: int) -> Optional[PricingTier]:
        """Active tier with the highest min_budget that still covers budget."""
        ...

    @abstractmethod
    async def list_active(self) -> list[PricingTier]: ...

    @abstractmethod
    async def get_by_id(self, tier_id: int) -> Optional[PricingTier]: ...

    @abstractmethod
    async def save(self, tier: PricingTier) -> PricingTier:
        """Create when tier.id is None, otherwise update in place."""
        ...

    @abstractmethod
    async def deactivate(self, tier_id: int) -> bool: ...

    @abstractmethod
    async def find_by_range(
        self, min_budget: int, max_budget: Optional[int]
    ) -> Optional[PricingTier]:
        """Tier with exactly this budget range, active or not."""
        ...
