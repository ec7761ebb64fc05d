"""Unread Count Query - messages from others after the caller's read marker."""

from dataclasses import dataclass

from marketplace.application.common.interfaces import Query, QueryHandler
from marketplace.domain.ports.repositories import MessageRepository
from marketplace.domain.value_objects import UserId


@dataclass(frozen=True)
class GetUnreadCountQuery(Query[int]):
    user_id: UserId


class GetUnreadCountHandler(QueryHandler[int]):
    def __init__(self, message_repository: MessageRepository):
        self._message_repository = message_repository

    async def execute(self, query: GetUnreadCountQuery) -> int:
        return await self._message_repository.count_unread_for_user(query.user_id)
