"""Prisma Proposal Repository Implementation (proposals with their peers)."""

from typing import Optional

from prisma import Prisma
from prisma.models import OrderProposal as PrismaProposal

from marketplace.domain.entities.proposal import Proposal, ProposalPeer
from marketplace.domain.ports.repositories import ProposalRepository
from marketplace.domain.value_objects import (
    OrderId,
    ProposalId,
    ProposalStatus,
    UserId,
)

_ORDERING = [{"created_at": "asc"}, {"id": "asc"}]


class PrismaProposalRepository(ProposalRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaProposal) -> Proposal:
        """Map Prisma record to domain entity."""
        return Proposal(
            id=ProposalId(record.id),
            order_id=OrderId(record.order_id),
            user_id=UserId(record.user_id),
            status=ProposalStatus(record.status),
            message=record.message,
            created_at=record.created_at,
            price=record.price,
            lead_user_id=UserId(record.lead_user_id) if record.lead_user_id else None,
            team_id=record.team_id,
            is_group_application=record.is_group_application,
            peers=[
                ProposalPeer(user_id=UserId(peer.user_id), status=ProposalStatus(peer.status))
                for peer in (record.peers or [])
            ],
        )

    async def get_by_id(self, proposal_id: ProposalId) -> Optional[Proposal]:
        record = await self._prisma.orderproposal.find_unique(
            where={"id": proposal_id.value}, include={"peers": True}
        )
        return self._to_entity(record) if record else None

    async def list_by_order(
        self, order_id: OrderId, status: Optional[ProposalStatus] = None
    ) -> list[Proposal]:
        where = {"order_id": order_id.value}
        if status is not None:
            where["status"] = status.value
        records = await self._prisma.orderproposal.find_many(
            where=where, order=_ORDERING, include={"peers": True}
        )
        return [self._to_entity(record) for record in records]

    async def find_by_bidder(
        self,
        order_id: OrderId,
        user_id: UserId,
        status: Optional[ProposalStatus] = None,
    ) -> Optional[Proposal]:
        where = {"order_id": order_id.value, "user_id": user_id.value}
        if status is not None:
            where["status"] = status.value
        record = await self._prisma.orderproposal.find_first(
            where=where,
            order=[{"created_at": "desc"}, {"id": "desc"}],
            include={"peers": True},
        )
        return self._to_entity(record) if record else None

    async def find_peer_conflicts(
        self, order_id: OrderId, user_ids: list[UserId]
    ) -> list[UserId]:
        ids = [uid.value for uid in user_ids]
        bidders = await self._prisma.orderproposal.find_many(
            where={"order_id": order_id.value, "user_id": {"in": ids}}
        )
        peers = await self._prisma.proposalpeer.find_many(
            where={
                "user_id": {"in": ids},
                "status": {"not": ProposalStatus.REJECTED.value},
                "proposal": {"is": {"order_id": order_id.value}},
            }
        )
        conflicting = {r.user_id for r in bidders} | {p.user_id for p in peers}
        return [UserId(uid) for uid in sorted(conflicting)]

    async def add(self, proposal: Proposal) -> Proposal:
        data = {
            "order_id": proposal.order_id.value,
            "user_id": proposal.user_id.value,
            "lead_user_id": proposal.lead_user_id.value if proposal.lead_user_id else None,
            "team_id": proposal.team_id,
            "is_group_application": proposal.is_group_application,
            "status": proposal.status.value,
            "message": proposal.message,
            "price": proposal.price,
        }
        if proposal.peers:
            data["peers"] = {
                "create": [
                    {"user_id": peer.user_id.value, "status": peer.status.value}
                    for peer in proposal.peers
                ]
            }
        record = await self._prisma.orderproposal.create(data=data, include={"peers": True})
        return self._to_entity(record)

    async def save_status(self, proposal: Proposal) -> None:
        await self._prisma.orderproposal.update(
            where={"id": proposal.id.value},
            data={"status": proposal.status.value},
        )
        by_status: dict[ProposalStatus, list[int]] = {}
        for peer in proposal.peers:
            by_status.setdefault(peer.status, []).append(peer.user_id.value)
        for status, user_ids in by_status.items():
            await self._prisma.proposalpeer.update_many(
                where={"proposal_id": proposal.id.value, "user_id": {"in": user_ids}},
                data={"status": status.value},
            )
