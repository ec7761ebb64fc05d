"""
Prisma Conversation Repository Implementation.

Conversations are always loaded with every participant row (active or not)
so the domain can compare active participant sets.
"""

from datetime import datetime, timezone
from typing import Optional

from prisma import Prisma
from prisma.models import Conversation as PrismaConversation

from marketplace.domain.entities.conversation import Conversation, Participant
from marketplace.domain.ports.repositories import ConversationRepository
from marketplace.domain.value_objects import (
    ConversationId,
    ConversationStatus,
    OrderId,
    UserId,
)

_WITH_PARTICIPANTS = {"participants": {"include": {"user": True}}}
PREVIEW_LENGTH = 50


class PrismaConversationRepository(ConversationRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaConversation) -> Conversation:
        """Map Prisma record to domain entity."""
        participants = [
            Participant(
                user_id=UserId(p.user_id),
                joined_at=p.joined_at,
                is_active=p.is_active,
                last_read_at=p.last_read_at,
                name=p.user.name if p.user else None,
            )
            for p in (record.participants or [])
        ]
        return Conversation(
            id=ConversationId(record.id),
            title=record.title,
            status=ConversationStatus(record.status),
            created_at=record.created_at,
            updated_at=record.updated_at,
            order_id=OrderId(record.order_id) if record.order_id else None,
            participants=participants,
            last_message=record.messages[0].content[:PREVIEW_LENGTH] if record.messages else None,
        )

    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]:
        record = await self._prisma.conversation.find_unique(
            where={"id": conversation_id.value}, include=_WITH_PARTICIPANTS
        )
        return self._to_entity(record) if record else None

    async def list_by_order(self, order_id: OrderId) -> list[Conversation]:
        records = await self._prisma.conversation.find_many(
            where={"order_id": order_id.value},
            order=[{"created_at": "asc"}, {"id": "asc"}],
            include=_WITH_PARTICIPANTS,
        )
        return [self._to_entity(record) for record in records]

    def _user_filter(self, user_id: UserId) -> dict:
        return {
            "participants": {"some": {"user_id": user_id.value, "is_active": True}},
            "status": {"not": ConversationStatus.REMOVED.value},
        }

    async def list_for_user(
        self, user_id: UserId, skip: int, take: int
    ) -> list[Conversation]:
        """Get conversations for user, ordered by updated_at desc."""
        records = await self._prisma.conversation.find_many(
            where=self._user_filter(user_id),
            order={"updated_at": "desc"},
            skip=skip,
            take=take,
            include={
                **_WITH_PARTICIPANTS,
                "messages": {
                    "order_by": {"created_at": "desc"},
                    "take": 1,
                },
            },
        )
        return [self._to_entity(record) for record in records]

    async def count_for_user(self, user_id: UserId) -> int:
        return await self._prisma.conversation.count(where=self._user_filter(user_id))

    async def add(self, conversation: Conversation) -> Conversation:
        record = await self._prisma.conversation.create(
            data={
                "order_id": conversation.order_id.value if conversation.order_id else None,
                "title": conversation.title,
                "status": conversation.status.value,
                "participants": {
                    "create": [
                        {"user_id": p.user_id.value, "is_active": p.is_active}
                        for p in conversation.participants
                    ]
                },
            },
            include=_WITH_PARTICIPANTS,
        )
        return self._to_entity(record)

    async def update_status(
        self, conversation_id: ConversationId, status: ConversationStatus
    ) -> None:
        await self._prisma.conversation.update(
            where={"id": conversation_id.value}, data={"status": status.value}
        )

    async def set_status_for_order(
        self,
        order_id: OrderId,
        status: ConversationStatus,
        exclude_status: Optional[ConversationStatus] = ConversationStatus.REMOVED,
    ) -> int:
        where = {"order_id": order_id.value}
        if exclude_status is not None:
            where["status"] = {"not": exclude_status.value}
        return await self._prisma.conversation.update_many(
            where=where, data={"status": status.value}
        )

    async def touch(self, conversation_id: ConversationId) -> None:
        await self._prisma.conversation.update(
            where={"id": conversation_id.value},
            data={"updated_at": datetime.now(timezone.utc)},
        )

    async def deactivate_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> None:
        await self._prisma.conversationparticipant.update_many(
            where={"conversation_id": conversation_id.value, "user_id": user_id.value},
            data={"is_active": False},
        )

    async def mark_read(
        self, conversation_id: ConversationId, user_id: UserId, read_at: datetime
    ) -> None:
        await self._prisma.conversationparticipant.update_many(
            where={"conversation_id": conversation_id.value, "user_id": user_id.value},
            data={"last_read_at": read_at},
        )
