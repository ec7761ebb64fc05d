"""
User Repository Port - Interface for user lookups and credit balances.
Implementation: marketplace/infrastructure/persistence/prisma_user_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from marketplace.domain.entities.user import User
from marketplace.domain.value_objects import UserId


class UserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> Optional[User]: ...

    @abstractmethod
    async def get_many(self, user_ids: list[UserId]) -> list[User]: ...

    @abstractmethod
    async def decrement_balance(self, user_id: UserId, amount: int) -> Optional[int]:
        """
        Conditional decrement: only applies when the balance covers amount.
        Returns the new balance, or None when the row was not updated.
        """
        ...

    @abstractmethod
    async def increment_balance(self, user_id: UserId, amount: int) -> int: ...
