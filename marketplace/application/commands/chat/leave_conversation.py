"""
Leave Conversation Command.

Participants are soft-removed so their messages keep their author. When the
last active participant leaves, the conversation is marked removed.
"""

from dataclasses import dataclass

from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.application.services import EventPublisher
from marketplace.application.services.conversation_manager import conversation_channel
from marketplace.domain.entities.outbox_event import OutboxEvent
from marketplace.domain.exceptions import EntityNotFoundError, NotAParticipantError
from marketplace.domain.ports import UnitOfWork
from marketplace.domain.value_objects import ConversationId, ConversationStatus, UserId


@dataclass(frozen=True)
class LeaveConversationCommand(Command[bool]):
    conversation_id: ConversationId
    user_id: UserId


class LeaveConversationHandler(CommandHandler[bool]):
    """Returns True when the conversation was removed by this call."""

    def __init__(self, uow: UnitOfWork, publisher: EventPublisher):
        self._uow = uow
        self._publisher = publisher

    async def execute(self, command: LeaveConversationCommand) -> bool:
        async with self._uow.begin() as tx:
            conversation = await tx.conversations.get_by_id(command.conversation_id)
            if conversation is None:
                raise EntityNotFoundError("Conversation not found")
            if not conversation.has_active_participant(command.user_id):
                raise NotAParticipantError()

            await tx.conversations.deactivate_participant(conversation.id, command.user_id)
            remaining = conversation.active_participant_ids - {command.user_id}
            removed = not remaining
            if removed:
                await tx.conversations.update_status(conversation.id, ConversationStatus.REMOVED)
            else:
                await tx.record(
                    OutboxEvent.new(
                        "participant_left",
                        recipient_ids=sorted(remaining, key=lambda uid: uid.value),
                        payload={
                            "conversationId": conversation.id.value,
                            "userId": command.user_id.value,
                        },
                        channel=conversation_channel(conversation.id),
                    )
                )

        self._publisher.publish(tx.recorded_events)
        return removed
