"""Credits API - balance and transaction history for the caller."""

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Query

from marketplace.application.common.pagination import PageRequest
from marketplace.application.dto import CamelModel, CreditTransactionDTO, PaginationDTO
from marketplace.application.queries.credits import (
    GetCreditBalanceHandler,
    GetCreditBalanceQuery,
    ListCreditTransactionsHandler,
    ListCreditTransactionsQuery,
)
from marketplace.presentation.dependencies.auth import AuthUser, get_current_user


class BalanceResponse(CamelModel):
    balance: int


class TransactionListResponse(CamelModel):
    transactions: list[CreditTransactionDTO]
    pagination: PaginationDTO


router = APIRouter(prefix="/credits", tags=["credits"])


@router.get("/balance", response_model=BalanceResponse)
@inject
async def get_balance(
    handler: FromDishka[GetCreditBalanceHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    balance = await handler.execute(GetCreditBalanceQuery(user_id=current_user.id))
    return BalanceResponse(balance=balance)


@router.get("/transactions", response_model=TransactionListResponse)
@inject
async def list_transactions(
    handler: FromDishka[ListCreditTransactionsHandler],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1),
    current_user: AuthUser = Depends(get_current_user),
):
    """Newest first. The page size is capped server-side."""
    result = await handler.execute(
        ListCreditTransactionsQuery(user_id=current_user.id, page=PageRequest(page, limit))
    )
    return TransactionListResponse(
        transactions=[CreditTransactionDTO.from_entity(t) for t in result.items],
        pagination=PaginationDTO.from_page(result),
    )
