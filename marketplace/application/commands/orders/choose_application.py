"""
Choose Application Command.

The client hires one bidder. The chosen bid is accepted, every other pending
bid is rejected and refunded, and the order moves to in_progress. Order
conversations that include the chosen bidder get a system notice that
contact details may now be shared; the remaining ones are closed.

Without an explicit proposal id the earliest pending bid (created_at, id)
is chosen.
"""

from dataclasses import dataclass
from typing import Optional

from marketplace.application.commands.orders.lifecycle import (
    LifecycleResult,
    bid_members,
    lock_owned_order,
    move_order,
    order_event,
)
from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.application.services import (
    ConversationManager,
    EventPublisher,
    ProposalRegistry,
)
from marketplace.domain.entities.proposal import Proposal
from marketplace.domain.exceptions import EntityNotFoundError, InvalidStateError
from marketplace.domain.ports import TransactionContext, UnitOfWork
from marketplace.domain.value_objects import (
    ConversationStatus,
    CreditReason,
    OrderId,
    OrderStatus,
    ProposalId,
    ProposalStatus,
    UserId,
)
from marketplace.observability.metrics import (
    add_credits_refunded,
    increment_order_transition,
)

CONTACT_UNLOCKED_MESSAGE = (
    "The client has chosen this application. "
    "You can now share contact information in this conversation."
)


@dataclass(frozen=True)
class ChooseResult(LifecycleResult):
    chosen_proposal_id: Optional[ProposalId] = None


@dataclass(frozen=True)
class ChooseApplicationCommand(Command[ChooseResult]):
    order_id: OrderId
    client_id: UserId
    proposal_id: Optional[ProposalId] = None


class ChooseApplicationHandler(CommandHandler[ChooseResult]):
    def __init__(
        self,
        uow: UnitOfWork,
        registry: ProposalRegistry,
        conversations: ConversationManager,
        publisher: EventPublisher,
    ):
        self._uow = uow
        self._registry = registry
        self._conversations = conversations
        self._publisher = publisher

    async def execute(self, command: ChooseApplicationCommand) -> ChooseResult:
        async with self._uow.begin() as tx:
            order = await lock_owned_order(tx, command.order_id, command.client_id)
            pending = await tx.proposals.list_by_order(order.id, ProposalStatus.PENDING)
            if not pending:
                raise InvalidStateError("No pending applications to choose from")
            chosen = await self._select(tx, pending, command)

            await self._registry.mark_accepted(tx, chosen)
            refunded = 0
            rejected_members = []
            for proposal in pending:
                if proposal.id == chosen.id:
                    continue
                rejected_members.extend(bid_members(proposal))
                await self._registry.mark_rejected(tx, proposal)
                refunded += await self._registry.refund(
                    tx, order, proposal, CreditReason.SELECTION_REFUND
                )

            await move_order(tx, order, OrderStatus.IN_PROGRESS)
            await self._update_conversations(tx, order.id, chosen, command.client_id)

            await tx.record(
                order_event(
                    "application_chosen",
                    order,
                    bid_members(chosen),
                    title="You have been hired",
                    body=f"Your application for \"{order.title}\" was chosen.",
                    email=True,
                    proposalId=chosen.id.value,
                )
            )
            if rejected_members:
                await tx.record(
                    order_event(
                        "applications_rejected",
                        order,
                        rejected_members,
                        title="Application rejected",
                        body=f"Another application for \"{order.title}\" was chosen.",
                        email=True,
                    )
                )

        self._publisher.publish(tx.recorded_events)
        increment_order_transition("choose")
        add_credits_refunded(CreditReason.SELECTION_REFUND.value, refunded)
        return ChooseResult(
            message="Application chosen",
            refunded_credits=refunded,
            chosen_proposal_id=chosen.id,
        )

    async def _select(
        self,
        tx: TransactionContext,
        pending: list[Proposal],
        command: ChooseApplicationCommand,
    ) -> Proposal:
        if command.proposal_id is None:
            return pending[0]
        for proposal in pending:
            if proposal.id == command.proposal_id:
                return proposal
        proposal = await tx.proposals.get_by_id(command.proposal_id)
        if proposal is None or proposal.order_id != command.order_id:
            raise EntityNotFoundError("Application not found for this order")
        raise InvalidStateError(
            f"Application {command.proposal_id} is {proposal.status.value}, not pending"
        )

    async def _update_conversations(
        self,
        tx: TransactionContext,
        order_id: OrderId,
        chosen: Proposal,
        client_id: UserId,
    ) -> None:
        for conversation in await tx.conversations.list_by_order(order_id):
            if conversation.is_removed:
                continue
            if conversation.has_active_participant(chosen.user_id):
                if conversation.reopen():
                    await tx.conversations.update_status(conversation.id, conversation.status)
                await self._conversations.post_system_message(
                    tx,
                    conversation,
                    client_id,
                    CONTACT_UNLOCKED_MESSAGE,
                    metadata={"event": "application_chosen", "proposalId": chosen.id.value},
                )
            elif conversation.status != ConversationStatus.CLOSED:
                await tx.conversations.update_status(conversation.id, ConversationStatus.CLOSED)
