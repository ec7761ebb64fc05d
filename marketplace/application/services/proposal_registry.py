"""
Proposal Registry - records bids on orders and moves them through their
statuses. Charging for a bid and refunding it go through the Credit Ledger
inside the caller's transaction.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from marketplace.application.services.credit_ledger import CreditLedger
from marketplace.application.services.pricing_service import PricingService
from marketplace.domain.entities.order import Order
from marketplace.domain.entities.proposal import Proposal
from marketplace.domain.exceptions import (
    DomainValidationError,
    EntityNotFoundError,
    InvalidStateError,
)
from marketplace.domain.ports import TransactionContext
from marketplace.domain.services.pricing import PricingQuote
from marketplace.domain.value_objects import (
    CreditReason,
    CreditReference,
    OrderId,
    OrderStatus,
    ProposalStatus,
    UserId,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmittedProposal:
    proposal: Proposal
    order: Order
    quote: PricingQuote
    balance_after: int


class ProposalRegistry:
    def __init__(self, ledger: CreditLedger, pricing: PricingService, max_peers: int):
        self._ledger = ledger
        self._pricing = pricing
        self._max_peers = max_peers

    async def submit(
        self,
        tx: TransactionContext,
        order_id: OrderId,
        bidder_id: UserId,
        message: str,
        price: Optional[int] = None,
        team_id: Optional[int] = None,
        peer_ids: Optional[list[UserId]] = None,
    ) -> SubmittedProposal:
        order = await tx.orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError("Order not found")
        bidder = await tx.users.get_by_id(bidder_id)
        if bidder is None:
            raise EntityNotFoundError("User not found")
        if order.status != OrderStatus.OPEN:
            raise InvalidStateError("Order is not accepting applications")
        if order.is_owned_by(bidder_id):
            raise DomainValidationError("You cannot apply to your own order")

        existing = await tx.proposals.find_by_bidder(
            order_id, bidder_id, status=ProposalStatus.PENDING
        )
        if existing is not None:
            raise InvalidStateError("You already have a pending application for this order")

        peer_ids = list(peer_ids or [])
        if peer_ids:
            await self._validate_peers(tx, order_id, bidder_id, peer_ids)

        proposal = Proposal.submit(
            order_id=order_id,
            user_id=bidder_id,
            message=message,
            price=price,
            team_id=team_id,
            peer_ids=peer_ids,
        )
        quote = await self._pricing.quote(tx.pricing, order.budget, proposal.is_team_bid)
        balance_after = await self._ledger.debit(
            tx,
            bidder_id,
            quote.credit_cost,
            CreditReason.ORDER_APPLICATION,
            reference=CreditReference.for_order(order_id),
            description=f"Applied to order #{order_id}",
            metadata={"orderId": order_id.value, "applicationCost": quote.credit_cost},
        )
        stored = await tx.proposals.add(proposal)
        logger.info(
            f"[ProposalRegistry] Proposal {stored.id} submitted on order {order_id} by user {bidder_id}"
            + (f" with {len(peer_ids)} peers" if peer_ids else "")
        )
        return SubmittedProposal(
            proposal=stored, order=order, quote=quote, balance_after=balance_after
        )

    async def _validate_peers(
        self,
        tx: TransactionContext,
        order_id: OrderId,
        bidder_id: UserId,
        peer_ids: list[UserId],
    ) -> None:
        if len(peer_ids) > self._max_peers:
            raise DomainValidationError(
                f"Maximum {self._max_peers} peers allowed per application"
            )
        if len(set(peer_ids)) != len(peer_ids):
            raise DomainValidationError("Duplicate peers are not allowed")
        if bidder_id in peer_ids:
            raise DomainValidationError("Cannot add self as peer")

        peers = await tx.users.get_many(peer_ids)
        if len([p for p in peers if p.is_specialist]) != len(peer_ids):
            raise DomainValidationError("One or more peers not found or are not specialists")

        conflicts = await tx.proposals.find_peer_conflicts(order_id, peer_ids)
        if conflicts:
            raise InvalidStateError(
                "One or more peers already take part in an application for this order: "
                + ", ".join(str(uid) for uid in conflicts)
            )

    async def mark_accepted(self, tx: TransactionContext, proposal: Proposal) -> None:
        proposal.mark_accepted()
        await tx.proposals.save_status(proposal)

    async def mark_rejected(self, tx: TransactionContext, proposal: Proposal) -> None:
        proposal.mark_rejected()
        await tx.proposals.save_status(proposal)

    async def mark_canceled(self, tx: TransactionContext, proposal: Proposal) -> None:
        proposal.mark_canceled()
        await tx.proposals.save_status(proposal)

    async def refund(
        self,
        tx: TransactionContext,
        order: Order,
        proposal: Proposal,
        reason: CreditReason,
    ) -> int:
        """
        Return part of the application cost to the proposal's lead bidder.
        Returns the amount refunded (0 when the tier's share rounds to nothing).
        """
        quote = await self._pricing.quote(tx.pricing, order.budget, proposal.is_team_bid)
        amount = quote.refund_amount
        if amount <= 0:
            logger.info(f"[ProposalRegistry] No refund for proposal {proposal.id} (amount {amount})")
            return 0
        await self._ledger.credit(
            tx,
            proposal.refund_recipient,
            amount,
            reason,
            reference=CreditReference.for_proposal(proposal.id),
            description=f"Refund for application on order #{order.id}",
            metadata={
                "orderId": order.id.value,
                "proposalId": proposal.id.value,
                "creditCost": quote.credit_cost,
                "refundPercentage": quote.refund_percentage,
            },
        )
        return amount
