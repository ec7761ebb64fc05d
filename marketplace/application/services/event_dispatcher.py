"""
Event Dispatcher - delivers committed outbox events.

Delivery is best-effort: every channel failure is logged and counted, never
raised, and the event is marked dispatched once all channels were attempted.
Events left undispatched (process died between commit and delivery) are
picked up by dispatch_pending(), run periodically by run_outbox_worker.py.

Each delivery first claims the event row, so the API process and the worker
never send the same event twice. A claim that is never completed expires
after claim_timeout_seconds; an event that fails max_attempts times is left
undispatched and no longer retried.

Channels:
- push:     recipients with a device token
- email:    recipients with an address, only for events flagged email=True
- realtime: the event's own channel plus each recipient's user channel
"""

import asyncio
import logging
from abc import ABC, abstractmethod

from marketplace.domain.entities.outbox_event import OutboxEvent
from marketplace.domain.ports import EmailSender, PushSender, RealtimePublisher
from marketplace.domain.ports.repositories import EventRepository, UserRepository
from marketplace.observability.metrics import (
    MetricsOutcome,
    MetricsErrorType,
    increment_error,
    increment_events_dispatched,
    increment_notification,
)

logger = logging.getLogger(__name__)


def user_channel(user_id) -> str:
    return f"user-{user_id}"


class EventPublisher(ABC):
    @abstractmethod
    def publish(self, events: list[OutboxEvent]) -> None:
        """Hand committed events over for delivery. Must not block or raise."""
        ...


class EventDispatcher(EventPublisher):
    def __init__(
        self,
        events: EventRepository,
        users: UserRepository,
        push: PushSender,
        email: EmailSender,
        realtime: RealtimePublisher,
        claim_timeout_seconds: int = 300,
        max_attempts: int = 5,
    ):
        self._events = events
        self._users = users
        self._push = push
        self._email = email
        self._realtime = realtime
        self._claim_timeout_seconds = claim_timeout_seconds
        self._max_attempts = max_attempts
        self._tasks: set[asyncio.Task] = set()

    def publish(self, events: list[OutboxEvent]) -> None:
        if not events:
            return
        task = asyncio.create_task(self._dispatch_all(list(events)))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait for in-flight deliveries (shutdown and tests)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def dispatch_pending(self, limit: int) -> int:
        pending = await self._events.list_pending(
            limit, self._max_attempts, self._claim_timeout_seconds
        )
        await self._dispatch_all(pending)
        return len(pending)

    async def _dispatch_all(self, events: list[OutboxEvent]) -> None:
        for event in events:
            await self.dispatch(event)

    async def dispatch(self, event: OutboxEvent) -> None:
        if event.id is not None:
            try:
                claimed = await self._events.claim(event.id, self._claim_timeout_seconds)
            except Exception as e:
                logger.error(f"[Dispatcher] Could not claim event {event.id}: {e}")
                return
            if not claimed:
                logger.debug(f"[Dispatcher] Event {event.id} already taken, skipping")
                return

        try:
            recipients = await self._users.get_many(event.recipient_ids)
        except Exception as e:
            logger.error(f"[Dispatcher] Could not load recipients for event {event.id}: {e}")
            await self._give_back(event)
            return

        if self._push.enabled and event.title:
            for user in recipients:
                if not user.fcm_token:
                    continue
                await self._attempt(
                    "push",
                    event,
                    self._push.send(
                        user.fcm_token,
                        event.title,
                        event.body or "",
                        {"type": event.event_type, **{k: str(v) for k, v in event.payload.items()}},
                    ),
                )

        if self._email.enabled and event.email:
            for user in recipients:
                if not user.email:
                    continue
                await self._attempt(
                    "email",
                    event,
                    self._email.send(user.email, event.title or event.event_type, event.body or ""),
                )

        if self._realtime.enabled:
            if event.channel:
                await self._attempt(
                    "realtime",
                    event,
                    self._realtime.publish(event.channel, event.event_type, event.payload),
                )
            for user_id in event.recipient_ids:
                await self._attempt(
                    "realtime",
                    event,
                    self._realtime.publish(user_channel(user_id), event.event_type, event.payload),
                )

        if event.id is not None:
            try:
                await self._events.mark_dispatched(event.id)
            except Exception as e:
                logger.error(f"[Dispatcher] Could not mark event {event.id} dispatched: {e}")
                return
        increment_events_dispatched(event.event_type)

    async def _attempt(self, channel: str, event: OutboxEvent, delivery) -> None:
        try:
            await delivery
            increment_notification(channel, MetricsOutcome.SENT)
        except Exception as e:
            increment_notification(channel, MetricsOutcome.FAILED)
            logger.warning(
                f"[Dispatcher] {channel} delivery failed for {event.event_type} event {event.id}: {e}"
            )

    async def _give_back(self, event: OutboxEvent) -> None:
        if event.id is None:
            return
        # attempts on the entity predates the claim
        if event.attempts + 1 >= self._max_attempts:
            increment_error(MetricsErrorType.OUTBOX_GAVE_UP)
            logger.error(
                f"[Dispatcher] Giving up on {event.event_type} event {event.id} "
                f"after {self._max_attempts} attempts"
            )
        try:
            await self._events.release(event.id)
        except Exception as e:
            logger.error(f"[Dispatcher] Could not release event {event.id}: {e}")
