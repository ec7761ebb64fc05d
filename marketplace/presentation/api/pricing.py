"""Order pricing API - tier listing, quotes and admin tier management."""

import logging
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Path, Query, status
from pydantic import Field

from marketplace.application.commands.pricing import (
    DeactivatePricingTierCommand,
    DeactivatePricingTierHandler,
    InitializeDefaultPricingCommand,
    InitializeDefaultPricingHandler,
    UpsertPricingTierCommand,
    UpsertPricingTierHandler,
)
from marketplace.application.dto import CamelModel, PricingQuoteDTO, PricingTierDTO
from marketplace.application.queries.pricing import (
    ListPricingTiersHandler,
    ListPricingTiersQuery,
    QuotePricingHandler,
    QuotePricingQuery,
)
from marketplace.presentation.dependencies.auth import (
    AuthUser,
    get_current_user,
    require_admin,
)

logger = logging.getLogger(__name__)


class UpsertPricingTierRequest(CamelModel):
    min_budget: int = Field(ge=0)
    max_budget: Optional[int] = Field(default=None, ge=0)
    credit_cost: int = Field(ge=1)
    team_credit_cost: Optional[int] = Field(default=None, ge=1)
    refund_percentage: float = Field(default=0.5, ge=0, le=1)
    team_refund_percentage: Optional[float] = Field(default=None, ge=0, le=1)
    description: Optional[str] = Field(default=None, max_length=500)


class DeleteResponse(CamelModel):
    success: bool = True


router = APIRouter(prefix="/order-pricing", tags=["pricing"])


@router.get("", response_model=list[PricingTierDTO])
@inject
async def list_tiers(
    handler: FromDishka[ListPricingTiersHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    tiers = await handler.execute(ListPricingTiersQuery())
    return [PricingTierDTO.from_entity(t) for t in tiers]


@router.get("/quote", response_model=PricingQuoteDTO)
@inject
async def quote(
    handler: FromDishka[QuotePricingHandler],
    budget: int = Query(ge=0),
    is_team: bool = Query(default=False, alias="isTeam"),
    current_user: AuthUser = Depends(get_current_user),
):
    """Credit cost and refund for an order budget, before applying."""
    result = await handler.execute(QuotePricingQuery(budget=budget, is_team=is_team))
    return PricingQuoteDTO.from_quote(budget, result)


@router.post("", response_model=PricingTierDTO, status_code=status.HTTP_201_CREATED)
@inject
async def upsert_tier(
    request: UpsertPricingTierRequest,
    handler: FromDishka[UpsertPricingTierHandler],
    admin: AuthUser = Depends(require_admin),
):
    tier = await handler.execute(UpsertPricingTierCommand(**request.model_dump()))
    logger.info(f"[Pricing] Admin {admin.id} saved tier {tier.id}")
    return PricingTierDTO.from_entity(tier)


@router.delete("/{tier_id}", response_model=DeleteResponse)
@inject
async def deactivate_tier(
    handler: FromDishka[DeactivatePricingTierHandler],
    tier_id: int = Path(gt=0),
    admin: AuthUser = Depends(require_admin),
):
    await handler.execute(DeactivatePricingTierCommand(tier_id=tier_id))
    logger.info(f"[Pricing] Admin {admin.id} deactivated tier {tier_id}")
    return DeleteResponse()


@router.post("/initialize", response_model=list[PricingTierDTO])
@inject
async def initialize_defaults(
    handler: FromDishka[InitializeDefaultPricingHandler],
    admin: AuthUser = Depends(require_admin),
):
    tiers = await handler.execute(InitializeDefaultPricingCommand())
    return [PricingTierDTO.from_entity(t) for t in tiers]
