"""List Conversations Query - the caller's active threads, newest activity first."""

from dataclasses import dataclass

from marketplace.application.common.interfaces import Query, QueryHandler
from marketplace.application.common.pagination import Page, PageRequest
from marketplace.domain.entities.conversation import Conversation
from marketplace.domain.ports.repositories import ConversationRepository
from marketplace.domain.value_objects import UserId


@dataclass(frozen=True)
class ListConversationsQuery(Query[Page[Conversation]]):
    user_id: UserId
    page: PageRequest = PageRequest()


class ListConversationsHandler(QueryHandler[Page[Conversation]]):
    def __init__(self, conversation_repository: ConversationRepository):
        self._conversation_repository = conversation_repository

    async def execute(self, query: ListConversationsQuery) -> Page[Conversation]:
        items = await self._conversation_repository.list_for_user(
            query.user_id, query.page.skip, query.page.limit
        )
        total = await self._conversation_repository.count_for_user(query.user_id)
        return Page(items=items, total=total, page=query.page.page, limit=query.page.limit)
