"""
Message Entity - A single immutable message in a conversation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from marketplace.domain.value_objects import (
    ConversationId,
    MessageId,
    MessageType,
    UserId,
)


@dataclass(frozen=True)
class SenderSummary:
    id: UserId
    name: Optional[str] = None
    role: Optional[str] = None


@dataclass
class Message:
    id: Optional[MessageId]
    conversation_id: ConversationId
    sender_id: UserId
    content: str
    message_type: MessageType
    created_at: datetime
    metadata: dict[str, Any] = field(default_factory=dict)
    sender: Optional[SenderSummary] = None

    def __post_init__(self):
        if not self.content or not self.content.strip():
            raise ValueError("Message content cannot be empty")

    @classmethod
    def create(
        cls,
        conversation_id: ConversationId,
        sender_id: UserId,
        content: str,
        message_type: MessageType = MessageType.TEXT,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Message:
        return cls(
            id=None,
            conversation_id=conversation_id,
            sender_id=sender_id,
            content=content,
            message_type=message_type,
            created_at=datetime.now(timezone.utc),
            metadata=metadata or {},
        )
