import pytest

from marketplace.application.commands.proposals import (
    SubmitProposalCommand,
    SubmitProposalHandler,
)
from marketplace.domain.exceptions import (
    DomainValidationError,
    EntityNotFoundError,
    InsufficientBalanceError,
    InvalidStateError,
)
from marketplace.domain.value_objects import (
    CreditReason,
    CreditReference,
    OrderId,
    OrderStatus,
    ProposalStatus,
    UserId,
)


@pytest.fixture()
def handler(uow, registry, publisher):
    return SubmitProposalHandler(uow, registry, publisher)


@pytest.fixture(autouse=True)
def seed(store):
    store.add_user(1, role="client")
    store.add_user(2, balance=10)
    store.add_user(3, balance=0)
    store.add_user(4, balance=0)
    store.add_user(5, role="client")
    store.add_order(100, client_id=1, budget=1000)


def command(bidder=2, order=100, **kwargs):
    return SubmitProposalCommand(
        order_id=OrderId(order), bidder_id=UserId(bidder), message="Hello", **kwargs
    )


async def test_submit_debits_tier_cost_and_notifies_client(store, handler, publisher):
    result = await handler.execute(command())

    assert result.proposal.status == ProposalStatus.PENDING
    assert result.quote.credit_cost == 5
    assert result.balance_after == 5
    assert store.balance(2) == 5
    [entry] = store.transactions_for(2)
    assert entry.reason == CreditReason.ORDER_APPLICATION
    assert entry.reference == CreditReference.for_order(OrderId(100))
    [event] = publisher.of_type("proposal_submitted")
    assert event.recipient_ids == [UserId(1)]


async def test_team_bid_uses_team_cost(store, handler):
    result = await handler.execute(command(team_id=42))
    assert result.quote.credit_cost == 8
    assert store.balance(2) == 2


async def test_group_bid_records_peers(store, handler):
    result = await handler.execute(command(peer_ids=(UserId(3), UserId(4))))

    assert result.proposal.is_group_application
    assert result.proposal.lead_user_id == UserId(2)
    assert [p.user_id for p in result.proposal.peers] == [UserId(3), UserId(4)]
    # Only the lead pays
    assert store.balance(3) == 0


async def test_insufficient_balance_stores_nothing(store, handler, publisher):
    with pytest.raises(InsufficientBalanceError):
        await handler.execute(command(bidder=3))

    assert store.proposals == {}
    assert store.transactions == []
    assert publisher.published == []


async def test_second_pending_bid_rejected(store, handler):
    await handler.execute(command())
    with pytest.raises(InvalidStateError):
        await handler.execute(command())
    assert store.balance(2) == 5


async def test_can_bid_again_after_rejection(store, handler):
    store.add_proposal(100, 2, status=ProposalStatus.REJECTED)
    result = await handler.execute(command())
    assert result.proposal.status == ProposalStatus.PENDING


@pytest.mark.parametrize(
    "status", [OrderStatus.IN_PROGRESS, OrderStatus.CLOSED, OrderStatus.COMPLETED]
)
async def test_order_must_be_open(store, handler, status):
    store.orders[100].status = status
    with pytest.raises(InvalidStateError):
        await handler.execute(command())


async def test_owner_cannot_bid_on_own_order(store, handler):
    store.users[1].credit_balance = 50
    with pytest.raises(DomainValidationError):
        await handler.execute(command(bidder=1))


async def test_unknown_order(handler):
    with pytest.raises(EntityNotFoundError):
        await handler.execute(command(order=999))


@pytest.mark.parametrize(
    "peer_ids",
    [
        (UserId(2),),  # self
        (UserId(3), UserId(3)),  # duplicate
        (UserId(5),),  # not a specialist
        (UserId(77),),  # unknown
        tuple(UserId(i) for i in range(10, 16)),  # too many
    ],
)
async def test_invalid_peers(store, handler, peer_ids):
    with pytest.raises(DomainValidationError):
        await handler.execute(command(peer_ids=peer_ids))
    assert store.balance(2) == 10


async def test_peer_already_bidding_conflicts(store, handler):
    store.add_proposal(100, 3)
    with pytest.raises(InvalidStateError):
        await handler.execute(command(peer_ids=(UserId(3),)))


async def test_peer_on_another_group_bid_conflicts(store, handler):
    store.add_user(6, balance=10)
    store.add_proposal(100, 6, peer_ids=[4])
    with pytest.raises(InvalidStateError):
        await handler.execute(command(peer_ids=(UserId(4),)))
