"""
Conversation Manager - order-bound threads and message delivery rules.

An order conversation is identified by its exact set of active participants:
asking again for the same set returns the same thread (reopened if it was
closed) instead of creating a duplicate.
"""

import logging
from typing import Any, Optional

from marketplace.domain.entities.conversation import Conversation
from marketplace.domain.entities.message import Message
from marketplace.domain.entities.outbox_event import OutboxEvent
from marketplace.domain.exceptions import (
    ContactInfoBlockedError,
    ConversationRemovedError,
    DomainValidationError,
    EntityNotFoundError,
)
from marketplace.domain.ports import TransactionContext
from marketplace.observability.metrics import increment_messages_blocked
from marketplace.domain.services.content_policy import ContentPolicy
from marketplace.domain.value_objects import (
    ConversationId,
    ConversationStatus,
    MessageType,
    OrderId,
    UserId,
)

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 100


def conversation_channel(conversation_id: ConversationId) -> str:
    return f"conversation-{conversation_id}"


class ConversationManager:
    def __init__(self, content_policy: ContentPolicy):
        self._content_policy = content_policy

    async def get_or_create_for_order(
        self,
        tx: TransactionContext,
        order_id: OrderId,
        participant_ids: list[UserId],
        title: Optional[str] = None,
    ) -> tuple[Conversation, bool]:
        """Returns the conversation and whether it was created by this call."""
        wanted = frozenset(participant_ids)
        for conversation in await tx.conversations.list_by_order(order_id):
            if conversation.is_removed or conversation.active_participant_ids != wanted:
                continue
            if conversation.reopen():
                await tx.conversations.update_status(conversation.id, conversation.status)
                logger.info(f"[ConversationManager] Reopened conversation {conversation.id}")
            return conversation, False

        conversation = await tx.conversations.add(
            Conversation.start(list(participant_ids), order_id=order_id, title=title)
        )
        logger.info(
            f"[ConversationManager] Created conversation {conversation.id} for order {order_id}"
        )
        return conversation, True

    async def create(
        self,
        tx: TransactionContext,
        participant_ids: list[UserId],
        title: Optional[str] = None,
    ) -> Conversation:
        """Ad-hoc conversation not bound to any order."""
        return await tx.conversations.add(Conversation.start(participant_ids, title=title))

    async def send(
        self,
        tx: TransactionContext,
        conversation_id: ConversationId,
        sender_id: UserId,
        content: str,
        message_type: MessageType = MessageType.TEXT,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Message:
        conversation = await tx.conversations.get_by_id(conversation_id)
        if conversation is None:
            raise EntityNotFoundError("Conversation not found")
        if message_type == MessageType.SYSTEM:
            raise DomainValidationError("System messages cannot be sent by users")
        conversation.ensure_writable_by(sender_id)

        # Every user-sent type is checked, captions and file names included
        order_status = None
        if conversation.order_id is not None:
            order = await tx.orders.get_by_id(conversation.order_id)
            order_status = order.status if order else None
        if self._content_policy.is_violation(content, order_status):
            logger.info(
                f"[ConversationManager] Blocked contact info from user {sender_id} "
                f"in conversation {conversation_id}"
            )
            increment_messages_blocked()
            raise ContactInfoBlockedError()

        return await self._append(tx, conversation, sender_id, content, message_type, metadata)

    async def post_system_message(
        self,
        tx: TransactionContext,
        conversation: Conversation,
        sender_id: UserId,
        content: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Message:
        """System notices skip the content policy and membership checks."""
        if conversation.is_removed:
            raise ConversationRemovedError()
        return await self._append(
            tx, conversation, sender_id, content, MessageType.SYSTEM, metadata
        )

    async def _append(
        self,
        tx: TransactionContext,
        conversation: Conversation,
        sender_id: UserId,
        content: str,
        message_type: MessageType,
        metadata: Optional[dict[str, Any]],
    ) -> Message:
        message = await tx.messages.add(
            Message.create(
                conversation_id=conversation.id,
                sender_id=sender_id,
                content=content,
                message_type=message_type,
                metadata=metadata,
            )
        )
        await tx.conversations.touch(conversation.id)

        recipients = [uid for uid in conversation.active_participant_ids if uid != sender_id]
        sender_name = message.sender.name if message.sender and message.sender.name else "New message"
        await tx.record(
            OutboxEvent.new(
                "message_sent",
                recipient_ids=sorted(recipients, key=lambda uid: uid.value),
                payload={
                    "conversationId": conversation.id.value,
                    "messageId": message.id.value,
                    "senderId": sender_id.value,
                    "messageType": message_type.value,
                    "content": content,
                    "createdAt": message.created_at.isoformat(),
                },
                channel=conversation_channel(conversation.id),
                title=sender_name,
                body=content[:PREVIEW_LENGTH],
            )
        )
        return message

    async def set_status_for_order(
        self, tx: TransactionContext, order_id: OrderId, status: ConversationStatus
    ) -> int:
        updated = await tx.conversations.set_status_for_order(order_id, status)
        logger.info(f"[ConversationManager] {updated} conversations of order {order_id} -> {status.value}")
        return updated
