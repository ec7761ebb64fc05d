import pytest

from marketplace.application.commands.pricing import (
    DeactivatePricingTierCommand,
    DeactivatePricingTierHandler,
    InitializeDefaultPricingCommand,
    InitializeDefaultPricingHandler,
    UpsertPricingTierCommand,
    UpsertPricingTierHandler,
)
from marketplace.application.common.pagination import PageRequest
from marketplace.application.queries.credits import (
    ListCreditTransactionsHandler,
    ListCreditTransactionsQuery,
)
from marketplace.application.queries.pricing import (
    ListPricingTiersHandler,
    ListPricingTiersQuery,
    QuotePricingHandler,
    QuotePricingQuery,
)
from marketplace.domain.exceptions import DomainValidationError, EntityNotFoundError
from marketplace.domain.value_objects import (
    CreditReason,
    CreditReference,
    ProposalId,
    UserId,
)
from tests.fakes import FakeCreditTransactionRepository, FakePricingRepository


@pytest.fixture()
def tiers(store):
    return FakePricingRepository(store)


async def test_initialize_is_idempotent(store, tiers):
    handler = InitializeDefaultPricingHandler(tiers)

    await handler.execute(InitializeDefaultPricingCommand())
    saved = await handler.execute(InitializeDefaultPricingCommand())

    assert len(saved) == 4
    assert len(store.tiers) == 4


async def test_upsert_updates_existing_range(store, tiers):
    handler = UpsertPricingTierHandler(tiers)

    tier = await handler.execute(
        UpsertPricingTierCommand(min_budget=500, max_budget=2000, credit_cost=6)
    )

    assert len(store.tiers) == 4
    assert store.tiers[tier.id].credit_cost == 6
    assert store.tiers[tier.id].team_credit_cost == 8


async def test_upsert_rejects_inverted_range(tiers):
    with pytest.raises(DomainValidationError):
        await UpsertPricingTierHandler(tiers).execute(
            UpsertPricingTierCommand(min_budget=900, max_budget=100, credit_cost=3)
        )


async def test_deactivated_tier_falls_back(store, tiers, pricing_service):
    medium = next(t for t in store.tiers.values() if t.min_budget == 500)

    await DeactivatePricingTierHandler(tiers).execute(DeactivatePricingTierCommand(medium.id))

    listed = await ListPricingTiersHandler(tiers).execute(ListPricingTiersQuery())
    assert medium.id not in [t.id for t in listed]
    quote = await QuotePricingHandler(tiers, pricing_service).execute(QuotePricingQuery(1000))
    assert quote.tier_id is None


async def test_deactivate_unknown_tier(tiers):
    with pytest.raises(EntityNotFoundError):
        await DeactivatePricingTierHandler(tiers).execute(DeactivatePricingTierCommand(999))


async def test_negative_budget_quote(tiers, pricing_service):
    with pytest.raises(DomainValidationError):
        await QuotePricingHandler(tiers, pricing_service).execute(QuotePricingQuery(-1))


async def test_history_page_size_is_capped(store, uow, ledger):
    store.add_user(2, balance=0)
    async with uow.begin() as tx:
        for n in range(5):
            await ledger.credit(
                tx,
                UserId(2),
                1,
                CreditReason.REJECTION_REFUND,
                reference=CreditReference.for_proposal(ProposalId(n + 1)),
            )

    handler = ListCreditTransactionsHandler(FakeCreditTransactionRepository(store), max_limit=3)
    page = await handler.execute(
        ListCreditTransactionsQuery(UserId(2), PageRequest(page=1, limit=50))
    )

    assert page.limit == 3
    assert page.total == 5
    assert [t.balance_after for t in page.items] == [5, 4, 3]
