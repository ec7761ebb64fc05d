"""Credit and pricing DTOs for API responses."""

from datetime import datetime
from typing import Any, Optional

from marketplace.application.dto.base import CamelModel
from marketplace.domain.entities.credit_transaction import CreditTransaction
from marketplace.domain.entities.pricing_tier import PricingTier
from marketplace.domain.services.pricing import PricingQuote


class CreditTransactionDTO(CamelModel):
    id: int
    amount: int
    balance_after: int
    type: str
    status: str
    description: str
    reference_type: Optional[str] = None
    reference_id: Optional[str] = None
    metadata: dict[str, Any] = {}
    created_at: datetime

    @classmethod
    def from_entity(cls, tx: CreditTransaction) -> "CreditTransactionDTO":
        return cls(
            id=tx.id,
            amount=tx.amount,
            balance_after=tx.balance_after,
            type=tx.reason.value,
            status=tx.status,
            description=tx.description,
            reference_type=tx.reference.reference_type if tx.reference else None,
            reference_id=tx.reference.reference_id if tx.reference else None,
            metadata=tx.metadata,
            created_at=tx.created_at,
        )


class PricingTierDTO(CamelModel):
    id: int
    min_budget: int
    max_budget: Optional[int] = None
    credit_cost: int
    team_credit_cost: Optional[int] = None
    refund_percentage: float
    team_refund_percentage: Optional[float] = None
    description: Optional[str] = None
    is_active: bool

    @classmethod
    def from_entity(cls, tier: PricingTier) -> "PricingTierDTO":
        return cls(
            id=tier.id,
            min_budget=tier.min_budget,
            max_budget=tier.max_budget,
            credit_cost=tier.credit_cost,
            team_credit_cost=tier.team_credit_cost,
            refund_percentage=tier.refund_percentage,
            team_refund_percentage=tier.team_refund_percentage,
            description=tier.description,
            is_active=tier.is_active,
        )


class PricingQuoteDTO(CamelModel):
    budget: int
    is_team: bool
    credit_cost: int
    refund_percentage: float
    refund_amount: int
    tier_id: Optional[int] = None

    @classmethod
    def from_quote(cls, budget: int, quote: PricingQuote) -> "PricingQuoteDTO":
        return cls(
            budget=budget,
            is_team=quote.is_team,
            credit_cost=quote.credit_cost,
            refund_percentage=quote.refund_percentage,
            refund_amount=quote.refund_amount,
            tier_id=quote.tier_id,
        )
