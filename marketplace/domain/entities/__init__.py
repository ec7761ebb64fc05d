"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier (assigned by the database on insert)
- Has behavior (methods)
- Can change state over time
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from marketplace.domain.entities.order import Order
from marketplace.domain.entities.proposal import Proposal, ProposalPeer
from marketplace.domain.entities.user import User
from marketplace.domain.entities.credit_transaction import CreditTransaction
from marketplace.domain.entities.pricing_tier import PricingTier
from marketplace.domain.entities.conversation import Conversation, Participant
from marketplace.domain.entities.message import Message, SenderSummary
from marketplace.domain.entities.outbox_event import OutboxEvent

__all__ = [
    "Order",
    "Proposal",
    "ProposalPeer",
    "User",
    "CreditTransaction",
    "PricingTier",
    "Conversation",
    "Participant",
    "Message",
    "SenderSummary",
    "OutboxEvent",
]
