"""List Order Proposals Query - only the order's client sees the bids."""

from dataclasses import dataclass

from marketplace.application.common.interfaces import Query, QueryHandler
from marketplace.domain.entities.proposal import Proposal
from marketplace.domain.exceptions import EntityNotFoundError
from marketplace.domain.ports.repositories import OrderRepository, ProposalRepository
from marketplace.domain.value_objects import OrderId, UserId


@dataclass(frozen=True)
class ListOrderProposalsQuery(Query[list[Proposal]]):
    order_id: OrderId
    user_id: UserId


class ListOrderProposalsHandler(QueryHandler[list[Proposal]]):
    def __init__(
        self,
        order_repository: OrderRepository,
        proposal_repository: ProposalRepository,
    ):
        self._order_repository = order_repository
        self._proposal_repository = proposal_repository

    async def execute(self, query: ListOrderProposalsQuery) -> list[Proposal]:
        order = await self._order_repository.get_by_id(query.order_id)
        if order is None:
            raise EntityNotFoundError("Order not found")
        order.ensure_owner(query.user_id)
        return await self._proposal_repository.list_by_order(order.id)
