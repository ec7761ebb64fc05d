"""Credit balance and ledger history queries."""

from dataclasses import dataclass

from marketplace.application.common.interfaces import Query, QueryHandler
from marketplace.application.common.pagination import Page, PageRequest
from marketplace.domain.entities.credit_transaction import CreditTransaction
from marketplace.domain.exceptions import EntityNotFoundError
from marketplace.domain.ports.repositories import (
    CreditTransactionRepository,
    UserRepository,
)
from marketplace.domain.value_objects import UserId


@dataclass(frozen=True)
class GetCreditBalanceQuery(Query[int]):
    user_id: UserId


class GetCreditBalanceHandler(QueryHandler[int]):
    def __init__(self, user_repository: UserRepository):
        self._user_repository = user_repository

    async def execute(self, query: GetCreditBalanceQuery) -> int:
        user = await self._user_repository.get_by_id(query.user_id)
        if user is None:
            raise EntityNotFoundError("User not found")
        return user.credit_balance


@dataclass(frozen=True)
class ListCreditTransactionsQuery(Query[Page[CreditTransaction]]):
    user_id: UserId
    page: PageRequest = PageRequest()


class ListCreditTransactionsHandler(QueryHandler[Page[CreditTransaction]]):
    def __init__(self, transaction_repository: CreditTransactionRepository, max_limit: int = 100):
        self._transaction_repository = transaction_repository
        self._max_limit = max_limit

    async def execute(self, query: ListCreditTransactionsQuery) -> Page[CreditTransaction]:
        page = query.page.capped(self._max_limit)
        items = await self._transaction_repository.list_by_user(
            query.user_id, page.skip, page.limit
        )
        total = await self._transaction_repository.count_by_user(query.user_id)
        return Page(items=items, total=total, page=page.page, limit=page.limit)
