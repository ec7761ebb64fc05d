"""Steps shared by the order lifecycle commands."""

from dataclasses import dataclass

from marketplace.domain.entities.order import Order
from marketplace.domain.entities.outbox_event import OutboxEvent
from marketplace.domain.entities.proposal import Proposal
from marketplace.domain.exceptions import EntityNotFoundError
from marketplace.domain.ports import TransactionContext
from marketplace.domain.value_objects import OrderId, OrderStatus, UserId


@dataclass(frozen=True)
class LifecycleResult:
    message: str
    refunded_credits: int = 0


async def lock_owned_order(
    tx: TransactionContext, order_id: OrderId, client_id: UserId
) -> Order:
    """Lock the order row for the rest of the transaction and check ownership."""
    order = await tx.orders.lock_for_update(order_id)
    if order is None:
        raise EntityNotFoundError("Order not found")
    order.ensure_owner(client_id)
    return order


async def move_order(tx: TransactionContext, order: Order, status: OrderStatus) -> None:
    order.transition_to(status)
    await tx.orders.save_status(order)


def bid_members(proposal: Proposal) -> list[UserId]:
    """Everyone who takes part in a bid: the bidder and its remaining peers."""
    return list(dict.fromkeys([proposal.user_id, *proposal.active_peer_ids]))


def order_event(
    event_type: str,
    order: Order,
    recipients: list[UserId],
    title: str,
    body: str,
    email: bool = False,
    **payload,
) -> OutboxEvent:
    return OutboxEvent.new(
        event_type,
        recipient_ids=recipients,
        payload={"orderId": order.id.value, "orderStatus": order.status.value, **payload},
        title=title,
        body=body,
        email=email,
    )
