"""Complete Order Command. Only an order in progress can be completed."""

from dataclasses import dataclass

from marketplace.application.commands.orders.lifecycle import (
    LifecycleResult,
    bid_members,
    lock_owned_order,
    move_order,
    order_event,
)
from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.application.services import ConversationManager, EventPublisher
from marketplace.domain.ports import UnitOfWork
from marketplace.domain.value_objects import (
    ConversationStatus,
    OrderId,
    OrderStatus,
    ProposalStatus,
    UserId,
)
from marketplace.observability.metrics import increment_order_transition


@dataclass(frozen=True)
class CompleteOrderCommand(Command[LifecycleResult]):
    order_id: OrderId
    client_id: UserId


class CompleteOrderHandler(CommandHandler[LifecycleResult]):
    def __init__(
        self,
        uow: UnitOfWork,
        conversations: ConversationManager,
        publisher: EventPublisher,
    ):
        self._uow = uow
        self._conversations = conversations
        self._publisher = publisher

    async def execute(self, command: CompleteOrderCommand) -> LifecycleResult:
        async with self._uow.begin() as tx:
            order = await lock_owned_order(tx, command.order_id, command.client_id)
            await move_order(tx, order, OrderStatus.COMPLETED)
            await self._conversations.set_status_for_order(
                tx, order.id, ConversationStatus.COMPLETED
            )
            hired = await tx.proposals.list_by_order(order.id, ProposalStatus.ACCEPTED)
            recipients = [uid for proposal in hired for uid in bid_members(proposal)]
            if recipients:
                await tx.record(
                    order_event(
                        "order_completed",
                        order,
                        recipients,
                        title="Order completed",
                        body=f"\"{order.title}\" was marked as completed.",
                        email=True,
                    )
                )

        self._publisher.publish(tx.recorded_events)
        increment_order_transition("complete")
        return LifecycleResult(message="Order completed")
