import pytest

from marketplace.application.commands.orders import (
    CancelApplicationCommand,
    CancelApplicationHandler,
    ChooseApplicationCommand,
    ChooseApplicationHandler,
    CompleteOrderCommand,
    CompleteOrderHandler,
    RejectApplicationsCommand,
    RejectApplicationsHandler,
)
from marketplace.application.commands.orders.choose_application import (
    CONTACT_UNLOCKED_MESSAGE,
)
from marketplace.domain.exceptions import (
    EntityNotFoundError,
    InvalidStateError,
    NotOwnerError,
)
from marketplace.domain.value_objects import (
    ConversationStatus,
    CreditReason,
    CreditReference,
    MessageType,
    OrderId,
    OrderStatus,
    ProposalId,
    ProposalStatus,
    UserId,
)

CLIENT, A, B, PEER = 1, 2, 3, 4
ORDER = 100


@pytest.fixture(autouse=True)
def seed(store):
    store.add_user(CLIENT, role="client", name="Client")
    store.add_user(A, name="Alice")
    store.add_user(B, name="Bob")
    store.add_user(PEER, name="Pete")
    # budget 1000: tier 500-2000 costs 5 credits, refund 60% -> 3
    store.add_order(ORDER, client_id=CLIENT, budget=1000)


@pytest.fixture()
def reject(uow, registry, manager, publisher):
    return RejectApplicationsHandler(uow, registry, manager, publisher)


@pytest.fixture()
def choose(uow, registry, manager, publisher):
    return ChooseApplicationHandler(uow, registry, manager, publisher)


@pytest.fixture()
def cancel(uow, registry, manager, publisher):
    return CancelApplicationHandler(uow, registry, manager, publisher)


@pytest.fixture()
def complete(uow, manager, publisher):
    return CompleteOrderHandler(uow, manager, publisher)


def statuses(store):
    return [p.status for p in sorted(store.proposals.values(), key=lambda p: p.id.value)]


class TestRejectApplications:
    async def test_rejects_all_pending_and_refunds_each(self, store, reject, publisher):
        store.add_proposal(ORDER, A)
        store.add_proposal(ORDER, B)
        conversation = store.add_conversation([CLIENT, A], order_id=ORDER)
        removed = store.add_conversation(
            [CLIENT, B], order_id=ORDER, status=ConversationStatus.REMOVED
        )

        result = await reject.execute(RejectApplicationsCommand(OrderId(ORDER), UserId(CLIENT)))

        assert result.message == "Rejected 2 application(s)"
        assert result.refunded_credits == 6
        assert statuses(store) == [ProposalStatus.REJECTED, ProposalStatus.REJECTED]
        assert store.balance(A) == store.balance(B) == 3
        assert store.orders[ORDER].status == OrderStatus.CLOSED
        assert store.conversations[conversation.id.value].status == ConversationStatus.CLOSED
        assert store.conversations[removed.id.value].status == ConversationStatus.REMOVED

        [event] = publisher.of_type("applications_rejected")
        assert event.recipient_ids == [UserId(A), UserId(B)]
        assert event.email is True

    async def test_group_bid_refund_goes_to_lead(self, store, reject, publisher):
        store.add_proposal(ORDER, A, peer_ids=[PEER])

        await reject.execute(RejectApplicationsCommand(OrderId(ORDER), UserId(CLIENT)))

        assert store.balance(A) == 3
        assert store.balance(PEER) == 0
        [proposal] = store.proposals.values()
        assert [p.status for p in proposal.peers] == [ProposalStatus.REJECTED]
        [event] = publisher.of_type("applications_rejected")
        assert event.recipient_ids == [UserId(A), UserId(PEER)]

    async def test_nothing_pending(self, store, reject, publisher):
        with pytest.raises(InvalidStateError, match="No pending applications to reject"):
            await reject.execute(RejectApplicationsCommand(OrderId(ORDER), UserId(CLIENT)))
        assert store.orders[ORDER].status == OrderStatus.OPEN
        assert publisher.published == []

    async def test_second_call_does_not_refund_again(self, store, reject):
        store.add_proposal(ORDER, A)
        await reject.execute(RejectApplicationsCommand(OrderId(ORDER), UserId(CLIENT)))
        with pytest.raises(InvalidStateError):
            await reject.execute(RejectApplicationsCommand(OrderId(ORDER), UserId(CLIENT)))
        assert store.balance(A) == 3

    async def test_only_owner(self, store, reject):
        store.add_proposal(ORDER, A)
        with pytest.raises(NotOwnerError):
            await reject.execute(RejectApplicationsCommand(OrderId(ORDER), UserId(B)))
        assert statuses(store) == [ProposalStatus.PENDING]

    async def test_unknown_order(self, reject):
        with pytest.raises(EntityNotFoundError):
            await reject.execute(RejectApplicationsCommand(OrderId(999), UserId(CLIENT)))


class TestChooseApplication:
    async def test_earliest_pending_is_chosen_and_others_refunded(self, store, choose, publisher):
        p1 = store.add_proposal(ORDER, A)
        store.add_proposal(ORDER, B)
        with_a = store.add_conversation([CLIENT, A], order_id=ORDER)
        with_b = store.add_conversation([CLIENT, B], order_id=ORDER)

        result = await choose.execute(ChooseApplicationCommand(OrderId(ORDER), UserId(CLIENT)))

        assert result.chosen_proposal_id == p1.id
        assert result.refunded_credits == 3
        assert statuses(store) == [ProposalStatus.ACCEPTED, ProposalStatus.REJECTED]
        assert store.balance(A) == 0
        assert store.balance(B) == 3
        [refund] = store.transactions_for(B)
        assert refund.reason == CreditReason.SELECTION_REFUND
        assert refund.reference == CreditReference.for_proposal(ProposalId(2))
        assert store.orders[ORDER].status == OrderStatus.IN_PROGRESS

        [notice] = store.messages_in(with_a.id.value)
        assert notice.message_type == MessageType.SYSTEM
        assert notice.content == CONTACT_UNLOCKED_MESSAGE
        assert notice.sender_id == UserId(CLIENT)
        assert store.messages_in(with_b.id.value) == []
        assert store.conversations[with_b.id.value].status == ConversationStatus.CLOSED

        [chosen] = publisher.of_type("application_chosen")
        assert chosen.recipient_ids == [UserId(A)]
        [rejected] = publisher.of_type("applications_rejected")
        assert rejected.recipient_ids == [UserId(B)]

    async def test_explicit_proposal(self, store, choose):
        store.add_proposal(ORDER, A)
        p2 = store.add_proposal(ORDER, B)

        result = await choose.execute(
            ChooseApplicationCommand(OrderId(ORDER), UserId(CLIENT), proposal_id=p2.id)
        )

        assert result.chosen_proposal_id == p2.id
        assert statuses(store) == [ProposalStatus.REJECTED, ProposalStatus.ACCEPTED]
        assert store.balance(A) == 3

    async def test_closed_conversation_with_chosen_bidder_is_reopened(self, store, choose):
        store.add_proposal(ORDER, A)
        conversation = store.add_conversation(
            [CLIENT, A], order_id=ORDER, status=ConversationStatus.CLOSED
        )

        await choose.execute(ChooseApplicationCommand(OrderId(ORDER), UserId(CLIENT)))

        assert store.conversations[conversation.id.value].status == ConversationStatus.ACTIVE
        assert len(store.messages_in(conversation.id.value)) == 1

    async def test_choosing_twice_fails(self, store, choose):
        store.add_proposal(ORDER, A)
        store.add_proposal(ORDER, B)
        await choose.execute(ChooseApplicationCommand(OrderId(ORDER), UserId(CLIENT)))

        with pytest.raises(InvalidStateError):
            await choose.execute(ChooseApplicationCommand(OrderId(ORDER), UserId(CLIENT)))
        assert statuses(store) == [ProposalStatus.ACCEPTED, ProposalStatus.REJECTED]
        assert store.balance(B) == 3

    async def test_proposal_from_another_order(self, store, choose):
        store.add_order(200, client_id=CLIENT)
        store.add_proposal(ORDER, A)
        foreign = store.add_proposal(200, B)

        with pytest.raises(EntityNotFoundError):
            await choose.execute(
                ChooseApplicationCommand(OrderId(ORDER), UserId(CLIENT), proposal_id=foreign.id)
            )

    async def test_proposal_not_pending(self, store, choose):
        store.add_proposal(ORDER, A)
        rejected = store.add_proposal(ORDER, B, status=ProposalStatus.REJECTED)

        with pytest.raises(InvalidStateError):
            await choose.execute(
                ChooseApplicationCommand(OrderId(ORDER), UserId(CLIENT), proposal_id=rejected.id)
            )

    async def test_failure_rolls_everything_back(self, store, uow, choose, registry, publisher):
        store.add_proposal(ORDER, A)
        store.add_proposal(ORDER, B)

        async def broken_refund(*args, **kwargs):
            raise RuntimeError("ledger unavailable")

        registry.refund = broken_refund

        with pytest.raises(RuntimeError):
            await choose.execute(ChooseApplicationCommand(OrderId(ORDER), UserId(CLIENT)))

        assert statuses(store) == [ProposalStatus.PENDING, ProposalStatus.PENDING]
        assert store.orders[ORDER].status == OrderStatus.OPEN
        assert store.transactions == []
        assert store.events == {}
        assert publisher.published == []
        assert uow.rollbacks == 1


class TestCancelApplication:
    async def test_cancel_refunds_and_closes(self, store, cancel, publisher):
        store.orders[ORDER].status = OrderStatus.IN_PROGRESS
        store.add_proposal(ORDER, A, status=ProposalStatus.ACCEPTED)
        conversation = store.add_conversation([CLIENT, A], order_id=ORDER)

        result = await cancel.execute(CancelApplicationCommand(OrderId(ORDER), UserId(CLIENT)))

        assert result.refunded_credits == 3
        assert statuses(store) == [ProposalStatus.CANCELED]
        assert store.balance(A) == 3
        assert store.transactions_for(A)[0].reason == CreditReason.CANCELLATION_REFUND
        assert store.orders[ORDER].status == OrderStatus.CLOSED
        assert store.conversations[conversation.id.value].status == ConversationStatus.CLOSED
        [event] = publisher.of_type("application_canceled")
        assert event.recipient_ids == [UserId(A)]

    async def test_cancel_without_refund(self, store, uow, registry, manager, publisher):
        handler = CancelApplicationHandler(
            uow, registry, manager, publisher, refund_on_cancel=False
        )
        store.orders[ORDER].status = OrderStatus.IN_PROGRESS
        store.add_proposal(ORDER, A, status=ProposalStatus.ACCEPTED)

        result = await handler.execute(CancelApplicationCommand(OrderId(ORDER), UserId(CLIENT)))

        assert result.refunded_credits == 0
        assert store.balance(A) == 0

    async def test_nothing_accepted(self, store, cancel):
        store.add_proposal(ORDER, A)
        with pytest.raises(InvalidStateError):
            await cancel.execute(CancelApplicationCommand(OrderId(ORDER), UserId(CLIENT)))
        assert statuses(store) == [ProposalStatus.PENDING]


class TestCompleteOrder:
    async def test_complete(self, store, complete, publisher):
        store.orders[ORDER].status = OrderStatus.IN_PROGRESS
        store.add_proposal(ORDER, A, status=ProposalStatus.ACCEPTED, peer_ids=[PEER])
        conversation = store.add_conversation([CLIENT, A, PEER], order_id=ORDER)

        result = await complete.execute(CompleteOrderCommand(OrderId(ORDER), UserId(CLIENT)))

        assert result.message == "Order completed"
        assert store.orders[ORDER].status == OrderStatus.COMPLETED
        assert store.conversations[conversation.id.value].status == ConversationStatus.COMPLETED
        [event] = publisher.of_type("order_completed")
        assert event.recipient_ids == [UserId(A), UserId(PEER)]

    async def test_open_order_cannot_complete(self, store, complete):
        with pytest.raises(InvalidStateError):
            await complete.execute(CompleteOrderCommand(OrderId(ORDER), UserId(CLIENT)))
        assert store.orders[ORDER].status == OrderStatus.OPEN

    async def test_only_owner(self, store, complete):
        store.orders[ORDER].status = OrderStatus.IN_PROGRESS
        with pytest.raises(NotOwnerError):
            await complete.execute(CompleteOrderCommand(OrderId(ORDER), UserId(A)))


async def test_full_hire_flow(store, choose, complete):
    store.add_proposal(ORDER, A)
    store.add_proposal(ORDER, B)
    await choose.execute(ChooseApplicationCommand(OrderId(ORDER), UserId(CLIENT)))
    await complete.execute(CompleteOrderCommand(OrderId(ORDER), UserId(CLIENT)))

    assert store.orders[ORDER].status == OrderStatus.COMPLETED
    assert statuses(store) == [ProposalStatus.ACCEPTED, ProposalStatus.REJECTED]
