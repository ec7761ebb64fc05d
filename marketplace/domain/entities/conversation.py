"""
Conversation Entity - A message thread, optionally bound to one order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from marketplace.domain.exceptions import ConversationRemovedError, NotAParticipantError
from marketplace.domain.value_objects import (
    ConversationId,
    ConversationStatus,
    OrderId,
    UserId,
)


@dataclass
class Participant:
    user_id: UserId
    joined_at: datetime
    is_active: bool = True
    last_read_at: Optional[datetime] = None
    name: Optional[str] = None


@dataclass
class Conversation:
    id: Optional[ConversationId]
    title: Optional[str]
    status: ConversationStatus
    created_at: datetime
    updated_at: datetime
    order_id: Optional[OrderId] = None
    participants: list[Participant] = field(default_factory=list)
    last_message: Optional[str] = None
    unread_count: int = 0

    @classmethod
    def start(
        cls,
        participant_ids: list[UserId],
        order_id: Optional[OrderId] = None,
        title: Optional[str] = None,
    ) -> Conversation:
        now = datetime.now(timezone.utc)
        unique_ids = list(dict.fromkeys(participant_ids))
        return cls(
            id=None,
            title=title,
            status=ConversationStatus.ACTIVE,
            created_at=now,
            updated_at=now,
            order_id=order_id,
            participants=[Participant(user_id=uid, joined_at=now) for uid in unique_ids],
        )

    @property
    def active_participant_ids(self) -> frozenset[UserId]:
        return frozenset(p.user_id for p in self.participants if p.is_active)

    def has_active_participant(self, user_id: UserId) -> bool:
        return user_id in self.active_participant_ids

    def has_participant(self, user_id: UserId) -> bool:
        """True for current and former members (history stays visible)."""
        return any(p.user_id == user_id for p in self.participants)

    @property
    def is_removed(self) -> bool:
        return self.status == ConversationStatus.REMOVED

    def ensure_writable_by(self, user_id: UserId) -> None:
        # Removed is checked before membership
        if self.is_removed:
            raise ConversationRemovedError()
        if not self.has_active_participant(user_id):
            raise NotAParticipantError()

    def reopen(self) -> bool:
        """Reopen a closed thread. Returns True when the status changed."""
        if self.is_removed:
            raise ConversationRemovedError()
        if self.status == ConversationStatus.CLOSED:
            self.status = ConversationStatus.ACTIVE
            self.updated_at = datetime.now(timezone.utc)
            return True
        return False
