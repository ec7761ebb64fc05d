import pytest

from marketplace.domain.exceptions import (
    DomainValidationError,
    EntityNotFoundError,
    InsufficientBalanceError,
)
from marketplace.domain.value_objects import CreditReason, CreditReference, UserId


@pytest.fixture()
def specialist(store):
    return store.add_user(2, balance=10)


async def test_debit_records_negative_entry_with_balance_after(store, uow, ledger, specialist):
    async with uow.begin() as tx:
        balance = await ledger.debit(
            tx, UserId(2), 4, CreditReason.ORDER_APPLICATION, CreditReference.for_order(1)
        )

    assert balance == 6
    assert store.balance(2) == 6
    [entry] = store.transactions_for(2)
    assert entry.amount == -4
    assert entry.balance_after == 6
    assert entry.reason == CreditReason.ORDER_APPLICATION


async def test_debit_never_goes_negative(store, uow, ledger, specialist):
    with pytest.raises(InsufficientBalanceError) as exc_info:
        async with uow.begin() as tx:
            await ledger.debit(tx, UserId(2), 11, CreditReason.ORDER_APPLICATION)

    assert exc_info.value.required == 11
    assert exc_info.value.available == 10
    assert store.balance(2) == 10
    assert store.transactions_for(2) == []


async def test_debit_exact_balance(store, uow, ledger, specialist):
    async with uow.begin() as tx:
        assert await ledger.debit(tx, UserId(2), 10, CreditReason.ORDER_APPLICATION) == 0


async def test_debit_unknown_user(uow, ledger):
    with pytest.raises(EntityNotFoundError):
        async with uow.begin() as tx:
            await ledger.debit(tx, UserId(404), 1, CreditReason.ORDER_APPLICATION)


@pytest.mark.parametrize("amount", [0, -5, 1.5, True])
async def test_amount_must_be_positive_integer(uow, ledger, specialist, amount):
    with pytest.raises(DomainValidationError):
        async with uow.begin() as tx:
            await ledger.debit(tx, UserId(2), amount, CreditReason.ORDER_APPLICATION)


async def test_credit_is_skipped_on_replay(store, uow, ledger, specialist):
    reference = CreditReference.for_proposal(7)
    async with uow.begin() as tx:
        first = await ledger.credit(tx, UserId(2), 3, CreditReason.REJECTION_REFUND, reference)
        second = await ledger.credit(tx, UserId(2), 3, CreditReason.REJECTION_REFUND, reference)

    assert first == second == 13
    assert store.balance(2) == 13
    assert len(store.transactions_for(2)) == 1


async def test_credit_with_other_reason_is_not_a_replay(store, uow, ledger, specialist):
    reference = CreditReference.for_proposal(7)
    async with uow.begin() as tx:
        await ledger.credit(tx, UserId(2), 3, CreditReason.REJECTION_REFUND, reference)
        await ledger.credit(tx, UserId(2), 2, CreditReason.CANCELLATION_REFUND, reference)

    assert store.balance(2) == 15
    assert [t.balance_after for t in store.transactions_for(2)] == [13, 15]


async def test_balance_matches_sum_of_entries(store, uow, ledger):
    store.add_user(3, balance=0)
    async with uow.begin() as tx:
        await ledger.credit(tx, UserId(3), 20, CreditReason.SELECTION_REFUND, CreditReference.for_proposal(1))
        await ledger.debit(tx, UserId(3), 5, CreditReason.ORDER_APPLICATION)
        await ledger.debit(tx, UserId(3), 7, CreditReason.ORDER_APPLICATION)

    assert store.balance(3) == sum(t.amount for t in store.transactions_for(3)) == 8
