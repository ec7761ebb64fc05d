"""
Reject Applications Command.

The client turns down every pending bid at once: each bid is rejected and
its lead bidder refunded, the order closes and so do its conversations.
"""

from dataclasses import dataclass

from marketplace.application.commands.orders.lifecycle import (
    LifecycleResult,
    bid_members,
    lock_owned_order,
    move_order,
    order_event,
)
from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.application.services import (
    ConversationManager,
    EventPublisher,
    ProposalRegistry,
)
from marketplace.domain.exceptions import InvalidStateError
from marketplace.domain.ports import UnitOfWork
from marketplace.domain.value_objects import (
    ConversationStatus,
    CreditReason,
    OrderId,
    OrderStatus,
    ProposalStatus,
    UserId,
)
from marketplace.observability.metrics import (
    add_credits_refunded,
    increment_order_transition,
)


@dataclass(frozen=True)
class RejectApplicationsCommand(Command[LifecycleResult]):
    order_id: OrderId
    client_id: UserId


class RejectApplicationsHandler(CommandHandler[LifecycleResult]):
    def __init__(
        self,
        uow: UnitOfWork,
        registry: ProposalRegistry,
        conversations: ConversationManager,
        publisher: EventPublisher,
    ):
        self._uow = uow
        self._registry = registry
        self._conversations = conversations
        self._publisher = publisher

    async def execute(self, command: RejectApplicationsCommand) -> LifecycleResult:
        async with self._uow.begin() as tx:
            order = await lock_owned_order(tx, command.order_id, command.client_id)
            pending = await tx.proposals.list_by_order(order.id, ProposalStatus.PENDING)
            if not pending:
                raise InvalidStateError("No pending applications to reject")

            refunded = 0
            recipients = []
            for proposal in pending:
                recipients.extend(bid_members(proposal))
                await self._registry.mark_rejected(tx, proposal)
                refunded += await self._registry.refund(
                    tx, order, proposal, CreditReason.REJECTION_REFUND
                )

            await move_order(tx, order, OrderStatus.CLOSED)
            await self._conversations.set_status_for_order(
                tx, order.id, ConversationStatus.CLOSED
            )
            await tx.record(
                order_event(
                    "applications_rejected",
                    order,
                    recipients,
                    title="Application rejected",
                    body=f"Your application for \"{order.title}\" was not selected.",
                    email=True,
                )
            )

        self._publisher.publish(tx.recorded_events)
        increment_order_transition("reject")
        add_credits_refunded(CreditReason.REJECTION_REFUND.value, refunded)
        return LifecycleResult(
            message=f"Rejected {len(pending)} application(s)",
            refunded_credits=refunded,
        )
