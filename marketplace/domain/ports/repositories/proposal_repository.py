"""
Proposal Repository Port - Interface for proposal persistence.
Implementation: marketplace/infrastructure/persistence/prisma_proposal_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from marketplace.domain.entities.proposal import Proposal
from marketplace.domain.value_objects import OrderId, ProposalId, ProposalStatus, UserId


class ProposalRepository(ABC):
    @abstractmethod
    async def get_by_id(self, proposal_id: ProposalId) -> Optional[Proposal]: ...

    @abstractmethod
    async def list_by_order(
        self, order_id: OrderId, status: Optional[ProposalStatus] = None
    ) -> list[Proposal]:
        """Proposals for an order, oldest first (created_at, then id)."""
        ...

    @abstractmethod
    async def find_by_bidder(
        self,
        order_id: OrderId,
        user_id: UserId,
        status: Optional[ProposalStatus] = None,
    ) -> Optional[Proposal]:
        """Most recent proposal the user submitted on the order."""
        ...

    @abstractmethod
    async def find_peer_conflicts(
        self, order_id: OrderId, user_ids: list[UserId]
    ) -> list[UserId]:
        """Users already bidding on the order or listed as a non-rejected peer."""
        ...

    @abstractmethod
    async def add(self, proposal: Proposal) -> Proposal: ...

    @abstractmethod
    async def save_status(self, proposal: Proposal) -> None:
        """Persist the proposal status together with its peers' statuses."""
        ...
