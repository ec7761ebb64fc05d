"""
Order Entity - A unit of requested work posted by a client.

The status moves along a fixed set of edges:
    open -> in_progress -> completed
    open -> closed, in_progress -> closed
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from marketplace.domain.exceptions import InvalidStateError, NotOwnerError
from marketplace.domain.value_objects import OrderId, OrderStatus, UserId

ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.OPEN: frozenset({OrderStatus.IN_PROGRESS, OrderStatus.CLOSED}),
    OrderStatus.IN_PROGRESS: frozenset({OrderStatus.COMPLETED, OrderStatus.CLOSED}),
    OrderStatus.CLOSED: frozenset(),
    OrderStatus.COMPLETED: frozenset(),
}


@dataclass
class Order:
    id: OrderId
    client_id: UserId
    title: str
    status: OrderStatus
    budget: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.client_id == user_id

    def ensure_owner(self, user_id: UserId) -> None:
        if not self.is_owned_by(user_id):
            raise NotOwnerError()

    def can_transition_to(self, new_status: OrderStatus) -> bool:
        return new_status in ALLOWED_TRANSITIONS[self.status]

    def transition_to(self, new_status: OrderStatus) -> None:
        if not self.can_transition_to(new_status):
            raise InvalidStateError(
                f"Order {self.id} cannot move from {self.status.value} to {new_status.value}"
            )
        self.status = new_status
        self.updated_at = datetime.now(timezone.utc)
