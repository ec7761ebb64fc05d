"""
OutboxEvent Entity - A notification recorded in the same transaction as
the state change it describes, delivered after commit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from marketplace.domain.value_objects import UserId


@dataclass
class OutboxEvent:
    id: Optional[int]
    event_type: str
    recipient_ids: list[UserId]
    payload: dict[str, Any]
    created_at: datetime
    channel: Optional[str] = None  # real-time channel, e.g. "conversation-12"
    title: Optional[str] = None
    body: Optional[str] = None
    email: bool = False
    claimed_at: Optional[datetime] = None
    attempts: int = 0
    dispatched_at: Optional[datetime] = None

    @classmethod
    def new(
        cls,
        event_type: str,
        recipient_ids: list[UserId],
        payload: Optional[dict[str, Any]] = None,
        channel: Optional[str] = None,
        title: Optional[str] = None,
        body: Optional[str] = None,
        email: bool = False,
    ) -> OutboxEvent:
        return cls(
            id=None,
            event_type=event_type,
            recipient_ids=list(dict.fromkeys(recipient_ids)),
            payload=payload or {},
            created_at=datetime.now(timezone.utc),
            channel=channel,
            title=title,
            body=body,
            email=email,
        )

    @property
    def is_dispatched(self) -> bool:
        return self.dispatched_at is not None
