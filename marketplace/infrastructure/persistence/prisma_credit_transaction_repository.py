"""Prisma CreditTransaction Repository Implementation (append-only)."""

from prisma import Json, Prisma
from prisma.models import CreditTransaction as PrismaCreditTransaction

from marketplace.domain.entities.credit_transaction import CreditTransaction
from marketplace.domain.ports.repositories import CreditTransactionRepository
from marketplace.domain.value_objects import (
    CreditReason,
    CreditReference,
    UserId,
)


class PrismaCreditTransactionRepository(CreditTransactionRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaCreditTransaction) -> CreditTransaction:
        reference = None
        if record.reference_type and record.reference_id:
            reference = CreditReference(record.reference_type, record.reference_id)
        return CreditTransaction(
            id=record.id,
            user_id=UserId(record.user_id),
            amount=record.amount,
            balance_after=record.balance_after,
            reason=CreditReason(record.type),
            description=record.description or "",
            reference=reference,
            created_at=record.created_at,
            status=record.status,
            metadata=record.metadata or {},
        )

    async def add(self, transaction: CreditTransaction) -> CreditTransaction:
        record = await self._prisma.credittransaction.create(
            data={
                "user_id": transaction.user_id.value,
                "amount": transaction.amount,
                "balance_after": transaction.balance_after,
                "type": transaction.reason.value,
                "status": transaction.status,
                "description": transaction.description,
                "reference_type": (
                    transaction.reference.reference_type if transaction.reference else None
                ),
                "reference_id": (
                    transaction.reference.reference_id if transaction.reference else None
                ),
                "metadata": Json(transaction.metadata),
            }
        )
        return self._to_entity(record)

    async def exists(
        self, user_id: UserId, reason: CreditReason, reference: CreditReference
    ) -> bool:
        count = await self._prisma.credittransaction.count(
            where={
                "user_id": user_id.value,
                "type": reason.value,
                "reference_type": reference.reference_type,
                "reference_id": reference.reference_id,
            }
        )
        return count > 0

    async def list_by_user(
        self, user_id: UserId, skip: int, take: int
    ) -> list[CreditTransaction]:
        records = await self._prisma.credittransaction.find_many(
            where={"user_id": user_id.value},
            order=[{"created_at": "desc"}, {"id": "desc"}],
            skip=skip,
            take=take,
        )
        return [self._to_entity(record) for record in records]

    async def count_by_user(self, user_id: UserId) -> int:
        return await self._prisma.credittransaction.count(where={"user_id": user_id.value})
