"""
PERSISTENCE - Prisma implementations of the repository ports.
"""

from marketplace.infrastructure.persistence.prisma_order_repository import (
    PrismaOrderRepository,
)
from marketplace.infrastructure.persistence.prisma_proposal_repository import (
    PrismaProposalRepository,
)
from marketplace.infrastructure.persistence.prisma_user_repository import (
    PrismaUserRepository,
)
from marketplace.infrastructure.persistence.prisma_credit_transaction_repository import (
    PrismaCreditTransactionRepository,
)
from marketplace.infrastructure.persistence.prisma_pricing_repository import (
    PrismaPricingRepository,
)
from marketplace.infrastructure.persistence.prisma_conversation_repository import (
    PrismaConversationRepository,
)
from marketplace.infrastructure.persistence.prisma_message_repository import (
    PrismaMessageRepository,
)
from marketplace.infrastructure.persistence.prisma_event_repository import (
    PrismaEventRepository,
)
from marketplace.infrastructure.persistence.prisma_unit_of_work import (
    PrismaUnitOfWork,
    build_transaction_context,
)
from marketplace.infrastructure.persistence.prisma_client import (
    connect_prisma,
    disconnect_prisma,
)

__all__ = [
    "PrismaOrderRepository",
    "PrismaProposalRepository",
    "PrismaUserRepository",
    "PrismaCreditTransactionRepository",
    "PrismaPricingRepository",
    "PrismaConversationRepository",
    "PrismaMessageRepository",
    "PrismaEventRepository",
    "PrismaUnitOfWork",
    "build_transaction_context",
    "connect_prisma",
    "disconnect_prisma",
]
