"""Get Conversation Query - visible to active participants only."""

from dataclasses import dataclass

from marketplace.application.common.interfaces import Query, QueryHandler
from marketplace.domain.entities.conversation import Conversation, Participant
from marketplace.domain.exceptions import EntityNotFoundError, NotAParticipantError
from marketplace.domain.ports.repositories import ConversationRepository
from marketplace.domain.value_objects import ConversationId, UserId


async def load_for_participant(
    repository: ConversationRepository, conversation_id: ConversationId, user_id: UserId
) -> Conversation:
    conversation = await repository.get_by_id(conversation_id)
    if conversation is None:
        raise EntityNotFoundError("Conversation not found")
    if not conversation.has_active_participant(user_id):
        raise NotAParticipantError()
    return conversation


@dataclass(frozen=True)
class GetConversationQuery(Query[Conversation]):
    conversation_id: ConversationId
    user_id: UserId


class GetConversationHandler(QueryHandler[Conversation]):
    def __init__(self, conversation_repository: ConversationRepository):
        self._conversation_repository = conversation_repository

    async def execute(self, query: GetConversationQuery) -> Conversation:
        return await load_for_participant(
            self._conversation_repository, query.conversation_id, query.user_id
        )


@dataclass(frozen=True)
class GetParticipantsQuery(Query[list[Participant]]):
    conversation_id: ConversationId
    user_id: UserId


class GetParticipantsHandler(QueryHandler[list[Participant]]):
    def __init__(self, conversation_repository: ConversationRepository):
        self._conversation_repository = conversation_repository

    async def execute(self, query: GetParticipantsQuery) -> list[Participant]:
        conversation = await load_for_participant(
            self._conversation_repository, query.conversation_id, query.user_id
        )
        return [p for p in conversation.participants if p.is_active]
