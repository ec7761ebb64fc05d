"""Mark Read Command - moves the caller's read marker to now."""

from dataclasses import dataclass
from datetime import datetime, timezone

from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.domain.exceptions import EntityNotFoundError, NotAParticipantError
from marketplace.domain.ports import UnitOfWork
from marketplace.domain.value_objects import ConversationId, UserId


@dataclass(frozen=True)
class MarkReadCommand(Command[datetime]):
    conversation_id: ConversationId
    user_id: UserId


class MarkReadHandler(CommandHandler[datetime]):
    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def execute(self, command: MarkReadCommand) -> datetime:
        read_at = datetime.now(timezone.utc)
        async with self._uow.begin() as tx:
            conversation = await tx.conversations.get_by_id(command.conversation_id)
            if conversation is None:
                raise EntityNotFoundError("Conversation not found")
            if not conversation.has_active_participant(command.user_id):
                raise NotAParticipantError()
            await tx.conversations.mark_read(conversation.id, command.user_id, read_at)
        return read_at
