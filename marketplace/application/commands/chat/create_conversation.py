"""
Create Conversation Command.

The caller is always a participant. With an order id the exact-set rule of
the Conversation Manager applies, so repeating the call reuses the thread.
"""

from dataclasses import dataclass, field
from typing import Optional

from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.application.services import ConversationManager
from marketplace.domain.entities.conversation import Conversation
from marketplace.domain.exceptions import DomainValidationError, EntityNotFoundError
from marketplace.domain.ports import UnitOfWork
from marketplace.domain.value_objects import OrderId, UserId


@dataclass(frozen=True)
class CreateConversationCommand(Command[Conversation]):
    creator_id: UserId
    participant_ids: tuple[UserId, ...] = field(default_factory=tuple)
    order_id: Optional[OrderId] = None
    title: Optional[str] = None


class CreateConversationHandler(CommandHandler[Conversation]):
    def __init__(self, uow: UnitOfWork, manager: ConversationManager):
        self._uow = uow
        self._manager = manager

    async def execute(self, command: CreateConversationCommand) -> Conversation:
        participant_ids = list(dict.fromkeys([command.creator_id, *command.participant_ids]))
        if len(participant_ids) < 2:
            raise DomainValidationError("A conversation needs at least one other participant")

        async with self._uow.begin() as tx:
            users = await tx.users.get_many(participant_ids)
            if len(users) != len(participant_ids):
                raise EntityNotFoundError("One or more participants not found")

            if command.order_id is None:
                return await self._manager.create(tx, participant_ids, title=command.title)

            order = await tx.orders.get_by_id(command.order_id)
            if order is None:
                raise EntityNotFoundError("Order not found")
            conversation, _ = await self._manager.get_or_create_for_order(
                tx, order.id, participant_ids, title=command.title or order.title
            )
            return conversation
