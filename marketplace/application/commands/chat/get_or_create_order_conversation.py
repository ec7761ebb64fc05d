"""
Get-or-Create Order Conversation Command.

Opens the thread between an order's client and one bidder (plus the bidder's
peers). A bidder calls it for their own bid; the client names the specialist.
When the thread is new, the bid's message is replayed into it as the
bidder's opening message.

The opening message is sent after the conversation commits, in its own
transaction. A freshly inserted participant row may not be visible yet, so
NotAParticipant is retried a few times with exponential backoff. Failing
for good only loses the opening message, never the conversation.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.application.services import ConversationManager, EventPublisher
from marketplace.domain.entities.conversation import Conversation
from marketplace.domain.entities.message import Message
from marketplace.domain.entities.proposal import Proposal
from marketplace.domain.exceptions import (
    AccessDeniedError,
    DomainError,
    DomainValidationError,
    EntityNotFoundError,
    NotAParticipantError,
)
from marketplace.domain.ports import UnitOfWork
from marketplace.domain.value_objects import OrderId, UserId
from marketplace.observability.metrics import MetricsErrorType, increment_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderConversation:
    conversation: Conversation
    created: bool
    opening_message: Optional[Message] = None


@dataclass(frozen=True)
class GetOrCreateOrderConversationCommand(Command[OrderConversation]):
    order_id: OrderId
    caller_id: UserId
    specialist_id: Optional[UserId] = None


class GetOrCreateOrderConversationHandler(CommandHandler[OrderConversation]):
    def __init__(
        self,
        uow: UnitOfWork,
        manager: ConversationManager,
        publisher: EventPublisher,
        max_attempts: int = 3,
        retry_multiplier: float = 1.0,
    ):
        self._uow = uow
        self._manager = manager
        self._publisher = publisher
        self._max_attempts = max_attempts
        self._retry_multiplier = retry_multiplier

    async def execute(self, command: GetOrCreateOrderConversationCommand) -> OrderConversation:
        async with self._uow.begin() as tx:
            order = await tx.orders.get_by_id(command.order_id)
            if order is None:
                raise EntityNotFoundError("Order not found")

            if order.is_owned_by(command.caller_id):
                if command.specialist_id is None:
                    raise DomainValidationError("specialistId is required for the order owner")
                bidder_id = command.specialist_id
            else:
                bidder_id = command.caller_id

            proposal = await tx.proposals.find_by_bidder(order.id, bidder_id)
            if proposal is None:
                if order.is_owned_by(command.caller_id):
                    raise EntityNotFoundError("Application not found for this specialist")
                raise AccessDeniedError("You have not applied to this order")

            participants = [order.client_id, proposal.user_id, *proposal.active_peer_ids]
            conversation, created = await self._manager.get_or_create_for_order(
                tx, order.id, participants, title=order.title
            )

        opening_message = None
        if created and proposal.message and proposal.message.strip():
            opening_message = await self._post_opening_message(conversation, proposal)
        return OrderConversation(
            conversation=conversation, created=created, opening_message=opening_message
        )

    async def _post_opening_message(
        self, conversation: Conversation, proposal: Proposal
    ) -> Optional[Message]:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=self._retry_multiplier, min=0, max=10),
            retry=retry_if_exception_type(NotAParticipantError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    async with self._uow.begin() as tx:
                        message = await self._manager.send(
                            tx,
                            conversation.id,
                            proposal.user_id,
                            proposal.message,
                            metadata={"proposalId": proposal.id.value},
                        )
                    self._publisher.publish(tx.recorded_events)
                    return message
        except NotAParticipantError:
            increment_error(MetricsErrorType.FIRST_MESSAGE_FAILED)
            logger.error(
                f"[OrderConversation] Opening message for conversation {conversation.id} "
                f"failed after {self._max_attempts} attempts"
            )
        except DomainError as e:
            logger.warning(
                f"[OrderConversation] Opening message for conversation {conversation.id} not sent: {e}"
            )
        return None
