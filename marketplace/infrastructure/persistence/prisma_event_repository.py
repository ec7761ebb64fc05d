"""Prisma outbox Event Repository Implementation."""

from datetime import datetime, timedelta, timezone

from prisma import Json, Prisma
from prisma.models import OutboxEvent as PrismaOutboxEvent

from marketplace.domain.entities.outbox_event import OutboxEvent
from marketplace.domain.ports.repositories import EventRepository
from marketplace.domain.value_objects import UserId


class PrismaEventRepository(EventRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaOutboxEvent) -> OutboxEvent:
        return OutboxEvent(
            id=record.id,
            event_type=record.event_type,
            recipient_ids=[UserId(uid) for uid in record.recipient_ids],
            payload=record.payload or {},
            created_at=record.created_at,
            channel=record.channel,
            title=record.title,
            body=record.body,
            email=record.email,
            claimed_at=record.claimed_at,
            attempts=record.attempts,
            dispatched_at=record.dispatched_at,
        )

    async def add(self, event: OutboxEvent) -> OutboxEvent:
        record = await self._prisma.outboxevent.create(
            data={
                "event_type": event.event_type,
                "recipient_ids": [uid.value for uid in event.recipient_ids],
                "payload": Json(event.payload),
                "channel": event.channel,
                "title": event.title,
                "body": event.body,
                "email": event.email,
            }
        )
        return self._to_entity(record)

    @staticmethod
    def _unclaimed(stale_after_seconds: int) -> list[dict]:
        stale_before = datetime.now(timezone.utc) - timedelta(seconds=stale_after_seconds)
        return [{"claimed_at": None}, {"claimed_at": {"lt": stale_before}}]

    async def list_pending(
        self, limit: int, max_attempts: int, stale_after_seconds: int
    ) -> list[OutboxEvent]:
        records = await self._prisma.outboxevent.find_many(
            where={
                "dispatched_at": None,
                "attempts": {"lt": max_attempts},
                "OR": self._unclaimed(stale_after_seconds),
            },
            order=[{"created_at": "asc"}, {"id": "asc"}],
            take=limit,
        )
        return [self._to_entity(record) for record in records]

    async def claim(self, event_id: int, stale_after_seconds: int) -> bool:
        # Conditional update: only one caller sees count == 1
        count = await self._prisma.outboxevent.update_many(
            where={
                "id": event_id,
                "dispatched_at": None,
                "OR": self._unclaimed(stale_after_seconds),
            },
            data={
                "claimed_at": datetime.now(timezone.utc),
                "attempts": {"increment": 1},
            },
        )
        return count == 1

    async def release(self, event_id: int) -> None:
        await self._prisma.outboxevent.update_many(
            where={"id": event_id, "dispatched_at": None},
            data={"claimed_at": None},
        )

    async def mark_dispatched(self, event_id: int) -> None:
        await self._prisma.outboxevent.update(
            where={"id": event_id},
            data={"dispatched_at": datetime.now(timezone.utc)},
        )
