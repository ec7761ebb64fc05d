"""
Order Repository Port - Interface for order persistence.
Implementation: marketplace/infrastructure/persistence/prisma_order_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from marketplace.domain.entities.order import Order
from marketplace.domain.value_objects import OrderId


class OrderRepository(ABC):
    @abstractmethod
    async def get_by_id(self, order_id: OrderId) -> Optional[Order]: ...

    @abstractmethod
    async def lock_for_update(self, order_id: OrderId) -> Optional[Order]:
        """Take the row lock that serializes lifecycle operations on one order."""
        ...

    @abstractmethod
    async def save_status(self, order: Order) -> None: ...
