"""
Unit of Work Port - One database transaction spanning several aggregates.
Implementation: marketplace/infrastructure/persistence/prisma_unit_of_work.py

Usage:
    async with uow.begin() as tx:
        order = await tx.orders.lock_for_update(order_id)
        ...
        await tx.record(OutboxEvent.new(...))
    # committed here; any exception inside the block rolls everything back
    publisher.publish(tx.recorded_events)
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field

from marketplace.domain.entities.outbox_event import OutboxEvent
from marketplace.domain.ports.repositories import (
    ConversationRepository,
    CreditTransactionRepository,
    EventRepository,
    MessageRepository,
    OrderRepository,
    PricingRepository,
    ProposalRepository,
    UserRepository,
)


@dataclass
class TransactionContext:
    """Repositories bound to the same open transaction."""

    orders: OrderRepository
    proposals: ProposalRepository
    users: UserRepository
    credit_transactions: CreditTransactionRepository
    pricing: PricingRepository
    conversations: ConversationRepository
    messages: MessageRepository
    events: EventRepository
    recorded_events: list[OutboxEvent] = field(default_factory=list)

    async def record(self, event: OutboxEvent) -> OutboxEvent:
        """Write an outbox event inside the transaction and remember it."""
        stored = await self.events.add(event)
        self.recorded_events.append(stored)
        return stored


class UnitOfWork(ABC):
    @abstractmethod
    def begin(self) -> AbstractAsyncContextManager[TransactionContext]: ...
