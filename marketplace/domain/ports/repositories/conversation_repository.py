"""
Conversation Repository Port - Threads and their participant rows.
Implementation: marketplace/infrastructure/persistence/prisma_conversation_repository.py
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from marketplace.domain.entities.conversation import Conversation
from marketplace.domain.value_objects import (
    ConversationId,
    ConversationStatus,
    OrderId,
    UserId,
)


class ConversationRepository(ABC):
    @abstractmethod
    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]:
        """Conversation with all participant rows (active and inactive)."""
        ...

    @abstractmethod
    async def list_by_order(self, order_id: OrderId) -> list[Conversation]: ...

    @abstractmethod
    async def list_for_user(
        self, user_id: UserId, skip: int, take: int
    ) -> list[Conversation]:
        """Active memberships, most recently updated first, with last message."""
        ...

    @abstractmethod
    async def count_for_user(self, user_id: UserId) -> int: ...

    @abstractmethod
    async def add(self, conversation: Conversation) -> Conversation: ...

    @abstractmethod
    async def update_status(
        self, conversation_id: ConversationId, status: ConversationStatus
    ) -> None: ...

    @abstractmethod
    async def set_status_for_order(
        self,
        order_id: OrderId,
        status: ConversationStatus,
        exclude_status: Optional[ConversationStatus] = ConversationStatus.REMOVED,
    ) -> int:
        """Bulk status change for an order's threads. Returns rows updated."""
        ...

    @abstractmethod
    async def touch(self, conversation_id: ConversationId) -> None: ...

    @abstractmethod
    async def deactivate_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> None: ...

    @abstractmethod
    async def mark_read(
        self, conversation_id: ConversationId, user_id: UserId, read_at: datetime
    ) -> None: ...
