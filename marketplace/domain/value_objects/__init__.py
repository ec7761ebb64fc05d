"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value)
- Is immutable (frozen dataclass or Enum)
- Validates itself on creation
"""

from marketplace.domain.value_objects.entity_id import (
    ConversationId,
    MessageId,
    OrderId,
    ProposalId,
    UserId,
)
from marketplace.domain.value_objects.statuses import (
    ConversationStatus,
    CreditReason,
    MessageType,
    OrderStatus,
    ProposalStatus,
)
from marketplace.domain.value_objects.credit_reference import CreditReference

__all__ = [
    "UserId",
    "OrderId",
    "ProposalId",
    "ConversationId",
    "MessageId",
    "OrderStatus",
    "ProposalStatus",
    "ConversationStatus",
    "MessageType",
    "CreditReason",
    "CreditReference",
]
