"""Prisma Message Repository Implementation."""

from prisma import Json, Prisma
from prisma.models import Message as PrismaMessage

from marketplace.domain.entities.message import Message, SenderSummary
from marketplace.domain.ports.repositories import MessageRepository
from marketplace.domain.value_objects import (
    ConversationId,
    MessageId,
    MessageType,
    UserId,
)

_UNREAD_SQL = """
SELECT COUNT(*)::int AS count
FROM "Message" m
JOIN "ConversationParticipant" p ON p."conversationId" = m."conversationId"
JOIN "Conversation" c ON c.id = m."conversationId"
WHERE p."userId" = $1
  AND p."isActive" = true
  AND c.status <> 'removed'
  AND m."senderId" <> $1
  AND (p."lastReadAt" IS NULL OR m."createdAt" > p."lastReadAt")
"""


class PrismaMessageRepository(MessageRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaMessage) -> Message:
        """Map Prisma record to domain entity."""
        sender = None
        if record.sender is not None:
            sender = SenderSummary(
                id=UserId(record.sender.id),
                name=record.sender.name,
                role=record.sender.role,
            )
        return Message(
            id=MessageId(record.id),
            conversation_id=ConversationId(record.conversation_id),
            sender_id=UserId(record.sender_id),
            content=record.content,
            message_type=MessageType(record.message_type),
            created_at=record.created_at,
            metadata=record.metadata or {},
            sender=sender,
        )

    async def add(self, message: Message) -> Message:
        record = await self._prisma.message.create(
            data={
                "conversation_id": message.conversation_id.value,
                "sender_id": message.sender_id.value,
                "content": message.content,
                "message_type": message.message_type.value,
                "metadata": Json(message.metadata),
            },
            include={"sender": True},
        )
        return self._to_entity(record)

    async def list_by_conversation(
        self, conversation_id: ConversationId, skip: int, take: int
    ) -> list[Message]:
        records = await self._prisma.message.find_many(
            where={"conversation_id": conversation_id.value},
            order=[{"created_at": "asc"}, {"id": "asc"}],
            skip=skip,
            take=take,
            include={"sender": True},
        )
        return [self._to_entity(record) for record in records]

    async def count_by_conversation(self, conversation_id: ConversationId) -> int:
        return await self._prisma.message.count(
            where={"conversation_id": conversation_id.value}
        )

    async def count_unread_for_user(self, user_id: UserId) -> int:
        rows = await self._prisma.query_raw(_UNREAD_SQL, user_id.value)
        return int(rows[0]["count"]) if rows else 0
