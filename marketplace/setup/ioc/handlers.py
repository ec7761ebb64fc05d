"""
Application-layer providers: domain services, command and query handlers.

Everything here depends only on ports (UnitOfWork, repositories, notification
senders). The concrete implementations come from InfrastructureProvider in
container.py, or from in-memory fakes in tests.

Flow:
  InfrastructureProvider → UnitOfWork / repositories → HandlerProvider → handlers
"""

from typing import AsyncIterable

from dishka import Provider, Scope, alias, provide

from marketplace.application.commands.chat import (
    CreateConversationHandler,
    GetOrCreateOrderConversationHandler,
    LeaveConversationHandler,
    MarkReadHandler,
    SendMessageHandler,
)
from marketplace.application.commands.orders import (
    CancelApplicationHandler,
    ChooseApplicationHandler,
    CompleteOrderHandler,
    RejectApplicationsHandler,
)
from marketplace.application.commands.pricing import (
    DeactivatePricingTierHandler,
    InitializeDefaultPricingHandler,
    UpsertPricingTierHandler,
)
from marketplace.application.commands.proposals import SubmitProposalHandler
from marketplace.application.queries.chat import (
    GetConversationHandler,
    GetParticipantsHandler,
    GetUnreadCountHandler,
    ListConversationsHandler,
    ListMessagesHandler,
)
from marketplace.application.queries.credits import (
    GetCreditBalanceHandler,
    ListCreditTransactionsHandler,
)
from marketplace.application.queries.pricing import (
    ListPricingTiersHandler,
    QuotePricingHandler,
)
from marketplace.application.queries.proposals import ListOrderProposalsHandler
from marketplace.application.services import (
    ConversationManager,
    CreditLedger,
    EventDispatcher,
    EventPublisher,
    PricingService,
    ProposalRegistry,
)
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
from marketplace.domain.services import ContentPolicy, PhoneNumberPolicy


class HandlerProvider(Provider):
    # ==================== SERVICES ====================

    @provide(scope=Scope.APP)
    def get_content_policy(self) -> ContentPolicy:
        return PhoneNumberPolicy(min_digits=Config.PHONE_MIN_DIGITS)

    @provide(scope=Scope.APP)
    def get_credit_ledger(self) -> CreditLedger:
        return CreditLedger()

    @provide(scope=Scope.APP)
    def get_pricing_service(self) -> PricingService:
        return PricingService(default_refund_percentage=Config.DEFAULT_REFUND_PERCENTAGE)

    @provide(scope=Scope.APP)
    def get_proposal_registry(
        self, ledger: CreditLedger, pricing: PricingService
    ) -> ProposalRegistry:
        return ProposalRegistry(
            ledger=ledger, pricing=pricing, max_peers=Config.MAX_PEERS_PER_APPLICATION
        )

    @provide(scope=Scope.APP)
    def get_conversation_manager(self, content_policy: ContentPolicy) -> ConversationManager:
        return ConversationManager(content_policy)

    @provide(scope=Scope.APP)
    async def get_event_dispatcher(
        self,
        events: EventRepository,
        users: UserRepository,
        push: PushSender,
        email: EmailSender,
        realtime: RealtimePublisher,
    ) -> AsyncIterable[EventDispatcher]:
        """
        Singleton dispatcher. On shutdown, waits for deliveries still in
        flight so committed events are not dropped mid-send.
        """
        dispatcher = EventDispatcher(
            events,
            users,
            push,
            email,
            realtime,
            claim_timeout_seconds=Config.OUTBOX_CLAIM_TIMEOUT_SECONDS,
            max_attempts=Config.OUTBOX_MAX_ATTEMPTS,
        )
        yield dispatcher
        await dispatcher.drain()

    event_publisher = alias(source=EventDispatcher, provides=EventPublisher)

    # ==================== ORDER LIFECYCLE ====================

    @provide(scope=Scope.REQUEST)
    def get_reject_applications_handler(
        self,
        uow: UnitOfWork,
        registry: ProposalRegistry,
        conversations: ConversationManager,
        publisher: EventPublisher,
    ) -> RejectApplicationsHandler:
        return RejectApplicationsHandler(uow, registry, conversations, publisher)

    @provide(scope=Scope.REQUEST)
    def get_choose_application_handler(
        self,
        uow: UnitOfWork,
        registry: ProposalRegistry,
        conversations: ConversationManager,
        publisher: EventPublisher,
    ) -> ChooseApplicationHandler:
        return ChooseApplicationHandler(uow, registry, conversations, publisher)

    @provide(scope=Scope.REQUEST)
    def get_cancel_application_handler(
        self,
        uow: UnitOfWork,
        registry: ProposalRegistry,
        conversations: ConversationManager,
        publisher: EventPublisher,
    ) -> CancelApplicationHandler:
        return CancelApplicationHandler(
            uow,
            registry,
            conversations,
            publisher,
            refund_on_cancel=Config.REFUND_ON_CANCEL,
        )

    @provide(scope=Scope.REQUEST)
    def get_complete_order_handler(
        self,
        uow: UnitOfWork,
        conversations: ConversationManager,
        publisher: EventPublisher,
    ) -> CompleteOrderHandler:
        return CompleteOrderHandler(uow, conversations, publisher)

    # ==================== PROPOSALS ====================

    @provide(scope=Scope.REQUEST)
    def get_submit_proposal_handler(
        self, uow: UnitOfWork, registry: ProposalRegistry, publisher: EventPublisher
    ) -> SubmitProposalHandler:
        return SubmitProposalHandler(uow, registry, publisher)

    @provide(scope=Scope.REQUEST)
    def get_list_order_proposals_handler(
        self, orders: OrderRepository, proposals: ProposalRepository
    ) -> ListOrderProposalsHandler:
        return ListOrderProposalsHandler(orders, proposals)

    # ==================== CHAT ====================

    @provide(scope=Scope.REQUEST)
    def get_create_conversation_handler(
        self, uow: UnitOfWork, manager: ConversationManager
    ) -> CreateConversationHandler:
        return CreateConversationHandler(uow, manager)

    @provide(scope=Scope.REQUEST)
    def get_order_conversation_handler(
        self,
        uow: UnitOfWork,
        manager: ConversationManager,
        publisher: EventPublisher,
    ) -> GetOrCreateOrderConversationHandler:
        return GetOrCreateOrderConversationHandler(
            uow,
            manager,
            publisher,
            max_attempts=Config.FIRST_MESSAGE_MAX_ATTEMPTS,
            retry_multiplier=Config.FIRST_MESSAGE_RETRY_MULTIPLIER,
        )

    @provide(scope=Scope.REQUEST)
    def get_send_message_handler(
        self,
        uow: UnitOfWork,
        manager: ConversationManager,
        publisher: EventPublisher,
    ) -> SendMessageHandler:
        return SendMessageHandler(uow, manager, publisher)

    @provide(scope=Scope.REQUEST)
    def get_mark_read_handler(self, uow: UnitOfWork) -> MarkReadHandler:
        return MarkReadHandler(uow)

    @provide(scope=Scope.REQUEST)
    def get_leave_conversation_handler(
        self, uow: UnitOfWork, publisher: EventPublisher
    ) -> LeaveConversationHandler:
        return LeaveConversationHandler(uow, publisher)

    @provide(scope=Scope.REQUEST)
    def get_list_conversations_handler(
        self, conversation_repository: ConversationRepository
    ) -> ListConversationsHandler:
        return ListConversationsHandler(conversation_repository)

    @provide(scope=Scope.REQUEST)
    def get_conversation_handler(
        self, conversation_repository: ConversationRepository
    ) -> GetConversationHandler:
        return GetConversationHandler(conversation_repository)

    @provide(scope=Scope.REQUEST)
    def get_participants_handler(
        self, conversation_repository: ConversationRepository
    ) -> GetParticipantsHandler:
        return GetParticipantsHandler(conversation_repository)

    @provide(scope=Scope.REQUEST)
    def get_list_messages_handler(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
    ) -> ListMessagesHandler:
        return ListMessagesHandler(conversation_repository, message_repository)

    @provide(scope=Scope.REQUEST)
    def get_unread_count_handler(
        self, message_repository: MessageRepository
    ) -> GetUnreadCountHandler:
        return GetUnreadCountHandler(message_repository)

    # ==================== CREDITS & PRICING ====================

    @provide(scope=Scope.REQUEST)
    def get_credit_balance_handler(self, users: UserRepository) -> GetCreditBalanceHandler:
        return GetCreditBalanceHandler(users)

    @provide(scope=Scope.REQUEST)
    def get_list_credit_transactions_handler(
        self, transactions: CreditTransactionRepository
    ) -> ListCreditTransactionsHandler:
        return ListCreditTransactionsHandler(
            transactions, max_limit=Config.CREDIT_HISTORY_MAX_LIMIT
        )

    @provide(scope=Scope.REQUEST)
    def get_list_pricing_tiers_handler(
        self, pricing: PricingRepository
    ) -> ListPricingTiersHandler:
        return ListPricingTiersHandler(pricing)

    @provide(scope=Scope.REQUEST)
    def get_quote_pricing_handler(
        self, pricing: PricingRepository, service: PricingService
    ) -> QuotePricingHandler:
        return QuotePricingHandler(pricing, service)

    @provide(scope=Scope.REQUEST)
    def get_upsert_pricing_tier_handler(
        self, pricing: PricingRepository
    ) -> UpsertPricingTierHandler:
        return UpsertPricingTierHandler(pricing)

    @provide(scope=Scope.REQUEST)
    def get_deactivate_pricing_tier_handler(
        self, pricing: PricingRepository
    ) -> DeactivatePricingTierHandler:
        return DeactivatePricingTierHandler(pricing)

    @provide(scope=Scope.REQUEST)
    def get_initialize_default_pricing_handler(
        self, pricing: PricingRepository
    ) -> InitializeDefaultPricingHandler:
        return InitializeDefaultPricingHandler(pricing)
