"""
CreditTransaction Repository Port - Append-only ledger storage.
Implementation: marketplace/infrastructure/persistence/prisma_credit_transaction_repository.py
"""

from abc import ABC, abstractmethod

from marketplace.domain.entities.credit_transaction import CreditTransaction
from marketplace.domain.value_objects import CreditReason, CreditReference, UserId


class CreditTransactionRepository(ABC):
    @abstractmethod
    async def add(self, transaction: CreditTransaction) -> CreditTransaction: ...

    @abstractmethod
    async def exists(
        self, user_id: UserId, reason: CreditReason, reference: CreditReference
    ) -> bool: ...

    @abstractmethod
    async def list_by_user(
        self, user_id: UserId, skip: int, take: int
    ) -> list[CreditTransaction]:
        """Newest first."""
        ...

    @abstractmethod
    async def count_by_user(self, user_id: UserId) -> int: ...
