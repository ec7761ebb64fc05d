"""
Dishka DI Container Setup.

- InfrastructureProvider: Prisma client, unit of work, repositories and the
  notification adapters (FCM push, SMTP email, Redis real-time)
- HandlerProvider (handlers.py): services and command/query handlers

Dishka concepts:
- Provider: Class that defines how to create dependencies
- @provide: Decorator to mark factory methods
- Scope: Lifecycle of dependency (APP = singleton, REQUEST = per-request)
- Async generator providers: code after `yield` runs when the container closes

Flow:
  Container → provides → PrismaUnitOfWork → to → ChooseApplicationHandler
                                 ↓
                        uses UnitOfWork interface
"""

import logging
from typing import AsyncIterable

import httpx
from dishka import AsyncContainer, Provider, Scope, make_async_container, provide
from prisma import Prisma

from marketplace.config.settings import Config
from marketplace.domain.ports import (
    EmailSender,
    PushSender,
    RealtimePublisher,
    UnitOfWork,
)
from marketplace.domain.ports.repositories import (
    ConversationRepository,
    CreditTransactionRepository,
    EventRepository,
    MessageRepository,
    OrderRepository,
    PricingRepository,
    ProposalRepository,
    UserRepository,
)
from marketplace.infrastructure.cache import close_redis_client, create_redis_client
from marketplace.infrastructure.notifications import (
    FcmPushSender,
    RedisRealtimePublisher,
    SmtpEmailSender,
)
from marketplace.infrastructure.persistence import (
    PrismaConversationRepository,
    PrismaCreditTransactionRepository,
    PrismaEventRepository,
    PrismaMessageRepository,
    PrismaOrderRepository,
    PrismaPricingRepository,
    PrismaProposalRepository,
    PrismaUnitOfWork,
    PrismaUserRepository,
    connect_prisma,
    disconnect_prisma,
)
from marketplace.setup.ioc.handlers import HandlerProvider

logger = logging.getLogger(__name__)


class InfrastructureProvider(Provider):
    """
    Binds every port to its production implementation.

    Repositories are app-scoped: they are stateless wrappers over the shared
    Prisma client, and the event dispatcher (a singleton) needs them too.
    Writes never go through these; they use the transaction-bound copies the
    unit of work hands out.
    """

    # ==================== DATABASE ====================

    @provide(scope=Scope.APP)
    async def get_prisma(self) -> AsyncIterable[Prisma]:
        prisma = await connect_prisma(Config.DB_CONNECT_ATTEMPTS)
        yield prisma
        await disconnect_prisma(prisma)

    @provide(scope=Scope.APP)
    def get_unit_of_work(self, prisma: Prisma) -> UnitOfWork:
        return PrismaUnitOfWork(
            prisma,
            timeout_seconds=Config.DB_TX_TIMEOUT_SECONDS,
            max_wait_seconds=Config.DB_TX_MAX_WAIT_SECONDS,
        )

    # ==================== REPOSITORIES ====================

    @provide(scope=Scope.APP)
    def get_order_repository(self, prisma: Prisma) -> OrderRepository:
        return PrismaOrderRepository(prisma)

    @provide(scope=Scope.APP)
    def get_proposal_repository(self, prisma: Prisma) -> ProposalRepository:
        return PrismaProposalRepository(prisma)

    @provide(scope=Scope.APP)
    def get_user_repository(self, prisma: Prisma) -> UserRepository:
        return PrismaUserRepository(prisma)

    @provide(scope=Scope.APP)
    def get_credit_transaction_repository(self, prisma: Prisma) -> CreditTransactionRepository:
        return PrismaCreditTransactionRepository(prisma)

    @provide(scope=Scope.APP)
    def get_pricing_repository(self, prisma: Prisma) -> PricingRepository:
        return PrismaPricingRepository(prisma)

    @provide(scope=Scope.APP)
    def get_conversation_repository(self, prisma: Prisma) -> ConversationRepository:
        return PrismaConversationRepository(prisma)

    @provide(scope=Scope.APP)
    def get_message_repository(self, prisma: Prisma) -> MessageRepository:
        return PrismaMessageRepository(prisma)

    @provide(scope=Scope.APP)
    def get_event_repository(self, prisma: Prisma) -> EventRepository:
        return PrismaEventRepository(prisma)

    # ==================== NOTIFICATIONS ====================

    @provide(scope=Scope.APP)
    async def get_http_client(self) -> AsyncIterable[httpx.AsyncClient]:
        client = httpx.AsyncClient(timeout=Config.PUSH_TIMEOUT_SECONDS)
        yield client
        await client.aclose()

    @provide(scope=Scope.APP)
    def get_push_sender(self, client: httpx.AsyncClient) -> PushSender:
        return FcmPushSender(client, Config.FCM_PROJECT_ID, Config.FCM_ACCESS_TOKEN)

    @provide(scope=Scope.APP)
    def get_email_sender(self) -> EmailSender:
        return SmtpEmailSender(Config.SMTP_USER, Config.SMTP_PASSWORD)

    @provide(scope=Scope.APP)
    async def get_realtime_publisher(self) -> AsyncIterable[RealtimePublisher]:
        """Real-time broadcast is optional; without REDIS_URL it is a no-op."""
        client = None
        if Config.REDIS_URL:
            client = await create_redis_client(Config.REDIS_URL)
        else:
            logger.info("[Redis] REDIS_URL not set, real-time broadcast disabled")
        yield RedisRealtimePublisher(client)
        if client is not None:
            await close_redis_client(client)


def create_container() -> AsyncContainer:
    """
    Create and configure the DI container.

    - make_async_container() creates the container with all providers
    - Call this ONCE at app startup
    """
    return make_async_container(InfrastructureProvider(), HandlerProvider())
