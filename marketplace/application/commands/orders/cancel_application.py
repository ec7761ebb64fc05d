"""
Cancel Application Command.

The client withdraws a hire. The accepted bid is canceled, the order and
its conversations close. With REFUND_ON_CANCEL the lead bidder gets the
tier's refund share back.
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
class CancelApplicationCommand(Command[LifecycleResult]):
    order_id: OrderId
    client_id: UserId


class CancelApplicationHandler(CommandHandler[LifecycleResult]):
    def __init__(
        self,
        uow: UnitOfWork,
        registry: ProposalRegistry,
        conversations: ConversationManager,
        publisher: EventPublisher,
        refund_on_cancel: bool = True,
    ):
        self._uow = uow
        self._registry = registry
        self._conversations = conversations
        self._publisher = publisher
        self._refund_on_cancel = refund_on_cancel

    async def execute(self, command: CancelApplicationCommand) -> LifecycleResult:
        async with self._uow.begin() as tx:
            order = await lock_owned_order(tx, command.order_id, command.client_id)
            accepted = await tx.proposals.list_by_order(order.id, ProposalStatus.ACCEPTED)
            if not accepted:
                raise InvalidStateError("No accepted application to cancel")

            refunded = 0
            recipients = []
            for proposal in accepted:
                await self._registry.mark_canceled(tx, proposal)
                if self._refund_on_cancel:
                    refunded += await self._registry.refund(
                        tx, order, proposal, CreditReason.CANCELLATION_REFUND
                    )
                recipients.extend(bid_members(proposal))

            await move_order(tx, order, OrderStatus.CLOSED)
            await self._conversations.set_status_for_order(
                tx, order.id, ConversationStatus.CLOSED
            )
            await tx.record(
                order_event(
                    "application_canceled",
                    order,
                    recipients,
                    title="Hire canceled",
                    body=f"The client canceled the hire for \"{order.title}\".",
                    email=True,
                )
            )

        self._publisher.publish(tx.recorded_events)
        increment_order_transition("cancel")
        add_credits_refunded(CreditReason.CANCELLATION_REFUND.value, refunded)
        return LifecycleResult(message="Application canceled", refunded_credits=refunded)
