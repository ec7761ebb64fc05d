"""Chat DTOs for API responses."""

from datetime import datetime
from typing import Any, Optional

from marketplace.application.dto.base import CamelModel
from marketplace.application.dto.pagination import PaginationDTO
from marketplace.domain.entities.conversation import Conversation, Participant
from marketplace.domain.entities.message import Message


class SenderDTO(CamelModel):
    id: int
    name: Optional[str] = None
    role: Optional[str] = None


class MessageDTO(CamelModel):
    id: int
    conversation_id: int
    sender_id: int
    content: str
    message_type: str
    metadata: dict[str, Any] = {}
    created_at: datetime
    sender: Optional[SenderDTO] = None

    @classmethod
    def from_entity(cls, message: Message) -> "MessageDTO":
        sender = None
        if message.sender is not None:
            sender = SenderDTO(
                id=message.sender.id.value,
                name=message.sender.name,
                role=message.sender.role,
            )
        return cls(
            id=message.id.value,
            conversation_id=message.conversation_id.value,
            sender_id=message.sender_id.value,
            content=message.content,
            message_type=message.message_type.value,
            metadata=message.metadata,
            created_at=message.created_at,
            sender=sender,
        )


class ParticipantDTO(CamelModel):
    user_id: int
    name: Optional[str] = None
    joined_at: datetime
    last_read_at: Optional[datetime] = None
    is_active: bool

    @classmethod
    def from_entity(cls, participant: Participant) -> "ParticipantDTO":
        return cls(
            user_id=participant.user_id.value,
            name=participant.name,
            joined_at=participant.joined_at,
            last_read_at=participant.last_read_at,
            is_active=participant.is_active,
        )


class ConversationDTO(CamelModel):
    id: int
    order_id: Optional[int] = None
    title: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime
    participants: list[ParticipantDTO] = []
    last_message: Optional[str] = None

    @classmethod
    def from_entity(cls, conversation: Conversation) -> "ConversationDTO":
        return cls(
            id=conversation.id.value,
            order_id=conversation.order_id.value if conversation.order_id else None,
            title=conversation.title,
            status=conversation.status.value,
            created_at=conversation.created_at,
            updated_at=conversation.updated_at,
            participants=[
                ParticipantDTO.from_entity(p) for p in conversation.participants if p.is_active
            ],
            last_message=conversation.last_message,
        )


class ConversationListDTO(CamelModel):
    conversations: list[ConversationDTO]
    pagination: PaginationDTO


class MessageListDTO(CamelModel):
    messages: list[MessageDTO]
    pagination: PaginationDTO
