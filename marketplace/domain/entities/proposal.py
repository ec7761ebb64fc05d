"""
Proposal Entity - A specialist's (or team's) bid on an order.

Group applications carry peer sub-records whose status mirrors the
proposal's own status changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from marketplace.domain.exceptions import InvalidStateError
from marketplace.domain.value_objects import (
    OrderId,
    ProposalId,
    ProposalStatus,
    UserId,
)


@dataclass
class ProposalPeer:
    user_id: UserId
    status: ProposalStatus = ProposalStatus.PENDING


@dataclass
class Proposal:
    # Required fields (no defaults) - must come first
    id: Optional[ProposalId]
    order_id: OrderId
    user_id: UserId
    status: ProposalStatus
    message: str
    created_at: datetime
    # Optional fields (with defaults) - must come last
    price: Optional[int] = None
    lead_user_id: Optional[UserId] = None
    team_id: Optional[int] = None
    is_group_application: bool = False
    peers: list[ProposalPeer] = field(default_factory=list)

    @classmethod
    def submit(
        cls,
        order_id: OrderId,
        user_id: UserId,
        message: str,
        price: Optional[int] = None,
        team_id: Optional[int] = None,
        peer_ids: Optional[list[UserId]] = None,
    ) -> Proposal:
        """Factory for a new pending bid; the id is assigned on insert."""
        peer_ids = peer_ids or []
        is_group = bool(peer_ids)
        return cls(
            id=None,
            order_id=order_id,
            user_id=user_id,
            status=ProposalStatus.PENDING,
            message=message,
            created_at=datetime.now(timezone.utc),
            price=price,
            lead_user_id=user_id if is_group else None,
            team_id=team_id,
            is_group_application=is_group,
            peers=[ProposalPeer(user_id=peer_id) for peer_id in peer_ids],
        )

    @property
    def is_team_bid(self) -> bool:
        return self.team_id is not None

    @property
    def refund_recipient(self) -> UserId:
        """The lead bidder receives refunds on behalf of a group bid."""
        return self.lead_user_id or self.user_id

    @property
    def active_peer_ids(self) -> list[UserId]:
        return [
            peer.user_id
            for peer in self.peers
            if peer.status != ProposalStatus.REJECTED
        ]

    def mark_accepted(self) -> None:
        self._move(ProposalStatus.PENDING, ProposalStatus.ACCEPTED)

    def mark_rejected(self) -> None:
        self._move(ProposalStatus.PENDING, ProposalStatus.REJECTED)

    def mark_canceled(self) -> None:
        self._move(ProposalStatus.ACCEPTED, ProposalStatus.CANCELED)

    def _move(self, expected: ProposalStatus, new_status: ProposalStatus) -> None:
        if self.status != expected:
            raise InvalidStateError(
                f"Proposal {self.id} is {self.status.value}, expected {expected.value}"
            )
        self.status = new_status
        for peer in self.peers:
            if peer.status != ProposalStatus.REJECTED:
                peer.status = new_status
