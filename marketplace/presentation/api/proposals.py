"""Order proposals API - submit a bid and list the bids on an order."""

from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Path, status
from pydantic import Field

from marketplace.application.commands.proposals import (
    SubmitProposalCommand,
    SubmitProposalHandler,
)
from marketplace.application.dto import CamelModel, ProposalDTO
from marketplace.application.queries.proposals import (
    ListOrderProposalsHandler,
    ListOrderProposalsQuery,
)
from marketplace.domain.value_objects import OrderId, UserId
from marketplace.presentation.dependencies.auth import AuthUser, get_current_user


class SubmitProposalRequest(CamelModel):
    order_id: int = Field(gt=0)
    message: str = Field(min_length=1, max_length=5000)
    price: Optional[int] = Field(default=None, ge=0)
    team_id: Optional[int] = Field(default=None, gt=0)
    peer_ids: list[int] = Field(default_factory=list)


class SubmitProposalResponse(CamelModel):
    proposal: ProposalDTO
    credit_cost: int
    balance_after: int


router = APIRouter(prefix="/order-proposals", tags=["proposals"])


@router.post("", response_model=SubmitProposalResponse, status_code=status.HTTP_201_CREATED)
@inject
async def submit_proposal(
    request: SubmitProposalRequest,
    handler: FromDishka[SubmitProposalHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    """Apply to an order. The application fee is debited in the same transaction."""
    result = await handler.execute(
        SubmitProposalCommand(
            order_id=OrderId(request.order_id),
            bidder_id=current_user.id,
            message=request.message,
            price=request.price,
            team_id=request.team_id,
            peer_ids=tuple(UserId(uid) for uid in request.peer_ids),
        )
    )
    return SubmitProposalResponse(
        proposal=ProposalDTO.from_entity(result.proposal),
        credit_cost=result.quote.credit_cost,
        balance_after=result.balance_after,
    )


@router.get("/order/{order_id}", response_model=list[ProposalDTO])
@inject
async def list_order_proposals(
    handler: FromDishka[ListOrderProposalsHandler],
    order_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
):
    proposals = await handler.execute(
        ListOrderProposalsQuery(order_id=OrderId(order_id), user_id=current_user.id)
    )
    return [ProposalDTO.from_entity(p) for p in proposals]
