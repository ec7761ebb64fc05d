"""
Prisma Order Repository Implementation.

lock_for_update takes a row lock with SELECT ... FOR UPDATE. It only
serializes anything when called on a transaction client (see
PrismaUnitOfWork); on the root client the lock is released immediately.
"""

from typing import Optional

from prisma import Prisma
from prisma.models import Order as PrismaOrder

from marketplace.domain.entities.order import Order
from marketplace.domain.ports.repositories import OrderRepository
from marketplace.domain.value_objects import OrderId, OrderStatus, UserId

_LOCK_ORDER_SQL = 'SELECT id FROM "Order" WHERE id = $1 FOR UPDATE'


class PrismaOrderRepository(OrderRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaOrder) -> Order:
        """Map Prisma record to domain entity."""
        return Order(
            id=OrderId(record.id),
            client_id=UserId(record.client_id),
            title=record.title or "",
            status=OrderStatus(record.status),
            budget=record.budget,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    async def get_by_id(self, order_id: OrderId) -> Optional[Order]:
        record = await self._prisma.order.find_unique(where={"id": order_id.value})
        return self._to_entity(record) if record else None

    async def lock_for_update(self, order_id: OrderId) -> Optional[Order]:
        rows = await self._prisma.query_raw(_LOCK_ORDER_SQL, order_id.value)
        if not rows:
            return None
        return await self.get_by_id(order_id)

    async def save_status(self, order: Order) -> None:
        await self._prisma.order.update(
            where={"id": order.id.value},
            data={"status": order.status.value},
        )
