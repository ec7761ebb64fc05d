from datetime import datetime, timezone

import pytest

from marketplace.domain.entities import Conversation, Message, Order, Proposal, User
from marketplace.domain.exceptions import (
    ConversationRemovedError,
    InvalidStateError,
    NotAParticipantError,
    NotOwnerError,
)
from marketplace.domain.value_objects import (
    ConversationId,
    ConversationStatus,
    CreditReference,
    OrderId,
    OrderStatus,
    ProposalId,
    ProposalStatus,
    UserId,
)


def make_order(status=OrderStatus.OPEN):
    return Order(
        id=OrderId(1),
        client_id=UserId(10),
        title="Paint the fence",
        status=status,
        budget=300,
        created_at=datetime.now(timezone.utc),
    )


class TestOrder:
    @pytest.mark.parametrize(
        "start, target",
        [
            (OrderStatus.OPEN, OrderStatus.IN_PROGRESS),
            (OrderStatus.OPEN, OrderStatus.CLOSED),
            (OrderStatus.IN_PROGRESS, OrderStatus.COMPLETED),
            (OrderStatus.IN_PROGRESS, OrderStatus.CLOSED),
        ],
    )
    def test_allowed_transitions(self, start, target):
        order = make_order(start)
        order.transition_to(target)
        assert order.status == target
        assert order.updated_at is not None

    @pytest.mark.parametrize(
        "start, target",
        [
            (OrderStatus.OPEN, OrderStatus.COMPLETED),
            (OrderStatus.CLOSED, OrderStatus.OPEN),
            (OrderStatus.COMPLETED, OrderStatus.CLOSED),
            (OrderStatus.IN_PROGRESS, OrderStatus.IN_PROGRESS),
        ],
    )
    def test_disallowed_transitions(self, start, target):
        order = make_order(start)
        with pytest.raises(InvalidStateError):
            order.transition_to(target)
        assert order.status == start

    def test_ensure_owner(self):
        order = make_order()
        order.ensure_owner(UserId(10))
        with pytest.raises(NotOwnerError):
            order.ensure_owner(UserId(11))


class TestProposal:
    def test_group_bid_sets_lead_and_peers(self):
        proposal = Proposal.submit(
            OrderId(1), UserId(2), "We are a crew", peer_ids=[UserId(3), UserId(4)]
        )
        assert proposal.is_group_application
        assert proposal.lead_user_id == UserId(2)
        assert proposal.refund_recipient == UserId(2)
        assert proposal.active_peer_ids == [UserId(3), UserId(4)]

    def test_status_change_cascades_to_non_rejected_peers(self):
        proposal = Proposal.submit(
            OrderId(1), UserId(2), "crew", peer_ids=[UserId(3), UserId(4)]
        )
        proposal.id = ProposalId(7)
        proposal.peers[1].status = ProposalStatus.REJECTED

        proposal.mark_accepted()
        assert proposal.status == ProposalStatus.ACCEPTED
        assert [p.status for p in proposal.peers] == [
            ProposalStatus.ACCEPTED,
            ProposalStatus.REJECTED,
        ]
        assert proposal.active_peer_ids == [UserId(3)]

    def test_only_pending_can_be_accepted_or_rejected(self):
        proposal = Proposal.submit(OrderId(1), UserId(2), "solo")
        proposal.mark_rejected()
        with pytest.raises(InvalidStateError):
            proposal.mark_accepted()
        with pytest.raises(InvalidStateError):
            proposal.mark_rejected()

    def test_only_accepted_can_be_canceled(self):
        proposal = Proposal.submit(OrderId(1), UserId(2), "solo")
        with pytest.raises(InvalidStateError):
            proposal.mark_canceled()
        proposal.mark_accepted()
        proposal.mark_canceled()
        assert proposal.status == ProposalStatus.CANCELED


class TestConversation:
    def make(self, status=ConversationStatus.ACTIVE):
        conversation = Conversation.start([UserId(1), UserId(2), UserId(2)], order_id=OrderId(5))
        conversation.id = ConversationId(3)
        conversation.status = status
        return conversation

    def test_participants_are_unique(self):
        assert self.make().active_participant_ids == frozenset({UserId(1), UserId(2)})

    def test_removed_checked_before_membership(self):
        conversation = self.make(ConversationStatus.REMOVED)
        with pytest.raises(ConversationRemovedError):
            conversation.ensure_writable_by(UserId(99))

    def test_inactive_participant_cannot_write(self):
        conversation = self.make()
        conversation.participants[1].is_active = False
        conversation.ensure_writable_by(UserId(1))
        with pytest.raises(NotAParticipantError):
            conversation.ensure_writable_by(UserId(2))
        assert conversation.has_participant(UserId(2))

    def test_reopen(self):
        conversation = self.make(ConversationStatus.CLOSED)
        assert conversation.reopen() is True
        assert conversation.status == ConversationStatus.ACTIVE
        assert conversation.reopen() is False
        with pytest.raises(ConversationRemovedError):
            self.make(ConversationStatus.REMOVED).reopen()


def test_message_rejects_blank_content():
    with pytest.raises(ValueError):
        Message.create(ConversationId(1), UserId(1), "   ")


def test_user_balance_cannot_be_negative():
    with pytest.raises(ValueError):
        User(id=UserId(1), role="specialist", credit_balance=-1)


@pytest.mark.parametrize("value", [0, -3, "7", True])
def test_entity_ids_must_be_positive_integers(value):
    with pytest.raises(ValueError):
        UserId(value)


def test_credit_references():
    assert CreditReference.for_order(OrderId(4)) == CreditReference("order", "4")
    assert CreditReference.for_proposal(ProposalId(9)) == CreditReference("proposal", "9")
