"""
Submit Proposal Command.

A specialist (optionally with peers or on behalf of a team) bids on an open
order. The application cost is debited in the same transaction that stores
the bid; the order's client is notified after commit.
"""

from dataclasses import dataclass, field
from typing import Optional

from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.application.services import (
    EventPublisher,
    ProposalRegistry,
    SubmittedProposal,
)
from marketplace.domain.entities.outbox_event import OutboxEvent
from marketplace.domain.ports import UnitOfWork
from marketplace.domain.value_objects import OrderId, UserId


@dataclass(frozen=True)
class SubmitProposalCommand(Command[SubmittedProposal]):
    order_id: OrderId
    bidder_id: UserId
    message: str
    price: Optional[int] = None
    team_id: Optional[int] = None
    peer_ids: tuple[UserId, ...] = field(default_factory=tuple)


class SubmitProposalHandler(CommandHandler[SubmittedProposal]):
    def __init__(
        self,
        uow: UnitOfWork,
        registry: ProposalRegistry,
        publisher: EventPublisher,
    ):
        self._uow = uow
        self._registry = registry
        self._publisher = publisher

    async def execute(self, command: SubmitProposalCommand) -> SubmittedProposal:
        async with self._uow.begin() as tx:
            submitted = await self._registry.submit(
                tx,
                order_id=command.order_id,
                bidder_id=command.bidder_id,
                message=command.message,
                price=command.price,
                team_id=command.team_id,
                peer_ids=list(command.peer_ids),
            )
            order = submitted.order
            await tx.record(
                OutboxEvent.new(
                    "proposal_submitted",
                    recipient_ids=[order.client_id],
                    payload={
                        "orderId": order.id.value,
                        "proposalId": submitted.proposal.id.value,
                        "bidderId": command.bidder_id.value,
                    },
                    title="New application",
                    body=f"You received a new application for \"{order.title}\".",
                )
            )

        self._publisher.publish(tx.recorded_events)
        return submitted
