"""
Prisma Unit of Work - interactive transaction over every repository.

prisma.tx() rolls back when the block raises and commits when it exits
normally. The timeout bounds the whole transaction; max_wait bounds how long
we wait for a connection to start it.
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncIterator

from prisma import Prisma

from marketplace.domain.ports import TransactionContext, UnitOfWork
from marketplace.infrastructure.persistence.prisma_conversation_repository import (
    PrismaConversationRepository,
)
from marketplace.infrastructure.persistence.prisma_credit_transaction_repository import (
    PrismaCreditTransactionRepository,
)
from marketplace.infrastructure.persistence.prisma_event_repository import (
    PrismaEventRepository,
)
from marketplace.infrastructure.persistence.prisma_message_repository import (
    PrismaMessageRepository,
)
from marketplace.infrastructure.persistence.prisma_order_repository import (
    PrismaOrderRepository,
)
from marketplace.infrastructure.persistence.prisma_pricing_repository import (
    PrismaPricingRepository,
)
from marketplace.infrastructure.persistence.prisma_proposal_repository import (
    PrismaProposalRepository,
)
from marketplace.infrastructure.persistence.prisma_user_repository import (
    PrismaUserRepository,
)

logger = logging.getLogger(__name__)


def build_transaction_context(client: Prisma) -> TransactionContext:
    return TransactionContext(
        orders=PrismaOrderRepository(client),
        proposals=PrismaProposalRepository(client),
        users=PrismaUserRepository(client),
        credit_transactions=PrismaCreditTransactionRepository(client),
        pricing=PrismaPricingRepository(client),
        conversations=PrismaConversationRepository(client),
        messages=PrismaMessageRepository(client),
        events=PrismaEventRepository(client),
    )


class PrismaUnitOfWork(UnitOfWork):
    _prisma: Prisma

    def __init__(self, prisma: Prisma, timeout_seconds: int, max_wait_seconds: int):
        self._prisma = prisma
        self._timeout = timedelta(seconds=timeout_seconds)
        self._max_wait = timedelta(seconds=max_wait_seconds)

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[TransactionContext]:
        async with self._prisma.tx(max_wait=self._max_wait, timeout=self._timeout) as client:
            yield build_transaction_context(client)
