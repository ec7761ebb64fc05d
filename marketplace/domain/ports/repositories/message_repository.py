"""
Message Repository Port - Interface for message persistence.
Implementation: marketplace/infrastructure/persistence/prisma_message_repository.py
"""

from abc import ABC, abstractmethod

from marketplace.domain.entities.message import Message
from marketplace.domain.value_objects import ConversationId, UserId


class MessageRepository(ABC):
    @abstractmethod
    async def add(self, message: Message) -> Message:
        """Insert and return the stored message with its sender attached."""
        ...

    @abstractmethod
    async def list_by_conversation(
        self, conversation_id: ConversationId, skip: int, take: int
    ) -> list[Message]:
        """Oldest first, sender attached."""
        ...

    @abstractmethod
    async def count_by_conversation(self, conversation_id: ConversationId) -> int: ...

    @abstractmethod
    async def count_unread_for_user(self, user_id: UserId) -> int: ...
