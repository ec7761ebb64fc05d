import time

import jwt
import pytest
from dishka import Provider, Scope, make_async_container, provide
from fastapi.testclient import TestClient

from marketplace.application.services import (
    ConversationManager,
    CreditLedger,
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
from marketplace.domain.services import PhoneNumberPolicy
from marketplace.fastapi_app import create_fastapi_app
from marketplace.setup.ioc import HandlerProvider
from tests.fakes import (
    FakeConversationRepository,
    FakeCreditTransactionRepository,
    FakeEventRepository,
    FakeMessageRepository,
    FakeOrderRepository,
    FakePricingRepository,
    FakeProposalRepository,
    FakeUnitOfWork,
    FakeUserRepository,
    InMemoryStore,
    RecordingEmailSender,
    RecordingPublisher,
    RecordingPushSender,
    RecordingRealtimePublisher,
)

SERVICE_AUTH_SECRET = "test-secret"
AUD = "marketplace-api"
ISS = "marketplace-auth"


def _service_token(user_id=1, role="client", ttl=300):
    now = int(time.time())
    return jwt.encode(
        {
            "sub": str(user_id),
            "role": role,
            "iat": now,
            "exp": now + ttl,
            "iss": ISS,
            "aud": AUD,
        },
        SERVICE_AUTH_SECRET,
        algorithm="HS256",
    )


# ==================== DOMAIN / APPLICATION ====================


@pytest.fixture()
def store():
    store = InMemoryStore()
    store.seed_default_tiers()
    return store


@pytest.fixture()
def uow(store):
    return FakeUnitOfWork(store)


@pytest.fixture()
def publisher():
    return RecordingPublisher()


@pytest.fixture()
def ledger():
    return CreditLedger()


@pytest.fixture()
def pricing_service():
    return PricingService(default_refund_percentage=0.5)


@pytest.fixture()
def registry(ledger, pricing_service):
    return ProposalRegistry(ledger=ledger, pricing=pricing_service, max_peers=5)


@pytest.fixture()
def manager():
    return ConversationManager(PhoneNumberPolicy())


# ==================== API ====================


class FakeInfrastructureProvider(Provider):
    """Same ports as InfrastructureProvider, backed by the in-memory store."""

    def __init__(self, store: InMemoryStore):
        super().__init__()
        self._store = store

    @provide(scope=Scope.APP)
    def get_unit_of_work(self) -> UnitOfWork:
        return FakeUnitOfWork(self._store)

    @provide(scope=Scope.APP)
    def get_order_repository(self) -> OrderRepository:
        return FakeOrderRepository(self._store)

    @provide(scope=Scope.APP)
    def get_proposal_repository(self) -> ProposalRepository:
        return FakeProposalRepository(self._store)

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        return FakeUserRepository(self._store)

    @provide(scope=Scope.APP)
    def get_credit_transaction_repository(self) -> CreditTransactionRepository:
        return FakeCreditTransactionRepository(self._store)

    @provide(scope=Scope.APP)
    def get_pricing_repository(self) -> PricingRepository:
        return FakePricingRepository(self._store)

    @provide(scope=Scope.APP)
    def get_conversation_repository(self) -> ConversationRepository:
        return FakeConversationRepository(self._store)

    @provide(scope=Scope.APP)
    def get_message_repository(self) -> MessageRepository:
        return FakeMessageRepository(self._store)

    @provide(scope=Scope.APP)
    def get_event_repository(self) -> EventRepository:
        return FakeEventRepository(self._store)

    @provide(scope=Scope.APP)
    def get_push_sender(self) -> PushSender:
        return RecordingPushSender(enabled=False)

    @provide(scope=Scope.APP)
    def get_email_sender(self) -> EmailSender:
        return RecordingEmailSender(enabled=False)

    @provide(scope=Scope.APP)
    def get_realtime_publisher(self) -> RealtimePublisher:
        return RecordingRealtimePublisher(enabled=False)


@pytest.fixture()
def app(store, monkeypatch):
    """FastAPI app wired to the in-memory store."""
    monkeypatch.setattr(Config, "SERVICE_AUTH_SECRET", SERVICE_AUTH_SECRET)
    monkeypatch.setattr(Config, "SERVICE_AUTH_AUDIENCE", AUD)
    monkeypatch.setattr(Config, "SERVICE_AUTH_ISSUER", ISS)
    container = make_async_container(FakeInfrastructureProvider(store), HandlerProvider())
    return create_fastapi_app(container)


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers():
    """Factory for Authorization headers: auth_headers(user_id, role)."""

    def _headers(user_id=1, role="client"):
        return {"Authorization": f"Bearer {_service_token(user_id, role)}"}

    return _headers
