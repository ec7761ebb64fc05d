"""Send Message Command."""

from dataclasses import dataclass

from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.application.services import ConversationManager, EventPublisher
from marketplace.domain.entities.message import Message
from marketplace.domain.ports import UnitOfWork
from marketplace.domain.value_objects import ConversationId, MessageType, UserId


@dataclass(frozen=True)
class SendMessageCommand(Command[Message]):
    conversation_id: ConversationId
    sender_id: UserId
    content: str
    message_type: MessageType = MessageType.TEXT


class SendMessageHandler(CommandHandler[Message]):
    def __init__(
        self,
        uow: UnitOfWork,
        manager: ConversationManager,
        publisher: EventPublisher,
    ):
        self._uow = uow
        self._manager = manager
        self._publisher = publisher

    async def execute(self, command: SendMessageCommand) -> Message:
        async with self._uow.begin() as tx:
            message = await self._manager.send(
                tx,
                command.conversation_id,
                command.sender_id,
                command.content,
                command.message_type,
            )
        self._publisher.publish(tx.recorded_events)
        return message
