"""List Messages Query - oldest first, sender attached."""

from dataclasses import dataclass

from marketplace.application.common.interfaces import Query, QueryHandler
from marketplace.application.common.pagination import Page, PageRequest
from marketplace.application.queries.chat.get_conversation import load_for_participant
from marketplace.domain.entities.message import Message
from marketplace.domain.ports.repositories import (
    ConversationRepository,
    MessageRepository,
)
from marketplace.domain.value_objects import ConversationId, UserId


@dataclass(frozen=True)
class ListMessagesQuery(Query[Page[Message]]):
    conversation_id: ConversationId
    user_id: UserId
    page: PageRequest = PageRequest(limit=50)


class ListMessagesHandler(QueryHandler[Page[Message]]):
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
    ):
        self._conversation_repository = conversation_repository
        self._message_repository = message_repository

    async def execute(self, query: ListMessagesQuery) -> Page[Message]:
        conversation = await load_for_participant(
            self._conversation_repository, query.conversation_id, query.user_id
        )
        items = await self._message_repository.list_by_conversation(
            conversation.id, query.page.skip, query.page.limit
        )
        total = await self._message_repository.count_by_conversation(conversation.id)
        return Page(items=items, total=total, page=query.page.page, limit=query.page.limit)
