"""Proposal DTOs for API responses."""

from datetime import datetime
from typing import Optional

from marketplace.application.dto.base import CamelModel
from marketplace.domain.entities.proposal import Proposal


class ProposalPeerDTO(CamelModel):
    user_id: int
    status: str


class ProposalDTO(CamelModel):
    id: int
    order_id: int
    user_id: int
    lead_user_id: Optional[int] = None
    team_id: Optional[int] = None
    is_group_application: bool
    status: str
    message: str
    price: Optional[int] = None
    created_at: datetime
    peers: list[ProposalPeerDTO] = []

    @classmethod
    def from_entity(cls, proposal: Proposal) -> "ProposalDTO":
        return cls(
            id=proposal.id.value,
            order_id=proposal.order_id.value,
            user_id=proposal.user_id.value,
            lead_user_id=proposal.lead_user_id.value if proposal.lead_user_id else None,
            team_id=proposal.team_id,
            is_group_application=proposal.is_group_application,
            status=proposal.status.value,
            message=proposal.message,
            price=proposal.price,
            created_at=proposal.created_at,
            peers=[
                ProposalPeerDTO(user_id=peer.user_id.value, status=peer.status.value)
                for peer in proposal.peers
            ],
        )
