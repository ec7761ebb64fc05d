"""
Prisma User Repository Implementation.

Balance changes are single UPDATE statements, never read-modify-write.
"""

from typing import Optional

from prisma import Prisma
from prisma.models import User as PrismaUser

from marketplace.domain.entities.user import User
from marketplace.domain.exceptions import EntityNotFoundError
from marketplace.domain.ports.repositories import UserRepository
from marketplace.domain.value_objects import UserId


class PrismaUserRepository(UserRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaUser) -> User:
        return User(
            id=UserId(record.id),
            role=record.role,
            credit_balance=record.credit_balance,
            name=record.name,
            email=record.email,
            fcm_token=record.fcm_token,
        )

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        record = await self._prisma.user.find_unique(where={"id": user_id.value})
        return self._to_entity(record) if record else None

    async def get_many(self, user_ids: list[UserId]) -> list[User]:
        if not user_ids:
            return []
        records = await self._prisma.user.find_many(
            where={"id": {"in": [uid.value for uid in user_ids]}}
        )
        return [self._to_entity(record) for record in records]

    async def decrement_balance(self, user_id: UserId, amount: int) -> Optional[int]:
        updated = await self._prisma.user.update_many(
            where={"id": user_id.value, "credit_balance": {"gte": amount}},
            data={"credit_balance": {"decrement": amount}},
        )
        if updated == 0:
            return None
        record = await self._prisma.user.find_unique(where={"id": user_id.value})
        return record.credit_balance

    async def increment_balance(self, user_id: UserId, amount: int) -> int:
        record = await self._prisma.user.update(
            where={"id": user_id.value},
            data={"credit_balance": {"increment": amount}},
        )
        if record is None:
            raise EntityNotFoundError("User not found")
        return record.credit_balance
