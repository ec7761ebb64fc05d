"""
Event Repository Port - Transactional outbox.
Implementation: marketplace/infrastructure/persistence/prisma_event_repository.py
"""

from abc import ABC, abstractmethod

from marketplace.domain.entities.outbox_event import OutboxEvent


class EventRepository(ABC):
    @abstractmethod
    async def add(self, event: OutboxEvent) -> OutboxEvent: ...

    @abstractmethod
    async def list_pending(
        self, limit: int, max_attempts: int, stale_after_seconds: int
    ) -> list[OutboxEvent]:
        """Undispatched events with attempts left and no live claim, oldest first."""
        ...

    @abstractmethod
    async def claim(self, event_id: int, stale_after_seconds: int) -> bool:
        """
        Atomically take an undispatched event for delivery and count the attempt.
        A claim older than stale_after_seconds is treated as abandoned.
        Returns False when the event is dispatched or claimed by someone else.
        """
        ...

    @abstractmethod
    async def release(self, event_id: int) -> None: ...

    @abstractmethod
    async def mark_dispatched(self, event_id: int) -> None: ...
