"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines methods the domain needs
- Does NOT specify implementation (Prisma, SQLAlchemy, etc.)

Infrastructure layer provides implementations.
"""

from marketplace.domain.ports.repositories.order_repository import OrderRepository
from marketplace.domain.ports.repositories.proposal_repository import ProposalRepository
from marketplace.domain.ports.repositories.user_repository import UserRepository
from marketplace.domain.ports.repositories.credit_transaction_repository import (
    CreditTransactionRepository,
)
from marketplace.domain.ports.repositories.pricing_repository import PricingRepository
from marketplace.domain.ports.repositories.conversation_repository import (
    ConversationRepository,
)
from marketplace.domain.ports.repositories.message_repository import MessageRepository
from marketplace.domain.ports.repositories.event_repository import EventRepository

__all__ = [
    "OrderRepository",
    "ProposalRepository",
    "UserRepository",
    "CreditTransactionRepository",
    "PricingRepository",
    "ConversationRepository",
    "MessageRepository",
    "EventRepository",
]
