"""
Credit Ledger - the only code path that changes a user's credit balance.

Debits are an atomic conditional decrement, so a concurrent debit can never
push a balance below zero. Every mutation appends a CreditTransaction with the
resulting balance. A credit whose (user, reason, reference) was already
recorded is a replay and is skipped.
"""

import logging
from typing import Any, Optional

from marketplace.domain.entities.credit_transaction import CreditTransaction
from marketplace.domain.exceptions import (
    DomainValidationError,
    EntityNotFoundError,
    InsufficientBalanceError,
)
from marketplace.domain.ports import TransactionContext
from marketplace.domain.value_objects import CreditReason, CreditReference, UserId

logger = logging.getLogger(__name__)


def _ensure_positive(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise DomainValidationError(f"Credit amount must be a positive integer: {amount!r}")


class CreditLedger:
    async def debit(
        self,
        tx: TransactionContext,
        user_id: UserId,
        amount: int,
        reason: CreditReason,
        reference: Optional[CreditReference] = None,
        description: str = "",
        metadata: Optional[dict[str, Any]] = None,
    ) -> int:
        """Take credits from a user. Returns the new balance."""
        _ensure_positive(amount)
        new_balance = await tx.users.decrement_balance(user_id, amount)
        if new_balance is None:
            user = await tx.users.get_by_id(user_id)
            if user is None:
                raise EntityNotFoundError("User not found")
            raise InsufficientBalanceError(required=amount, available=user.credit_balance)

        await tx.credit_transactions.add(
            CreditTransaction.record(
                user_id=user_id,
                amount=-amount,
                balance_after=new_balance,
                reason=reason,
                description=description,
                reference=reference,
                metadata=metadata,
            )
        )
        logger.info(
            f"[CreditLedger] Debited {amount} from user {user_id} ({reason.value}), balance {new_balance}"
        )
        return new_balance

    async def credit(
        self,
        tx: TransactionContext,
        user_id: UserId,
        amount: int,
        reason: CreditReason,
        reference: CreditReference,
        description: str = "",
        metadata: Optional[dict[str, Any]] = None,
    ) -> int:
        """Give credits to a user. Returns the new balance."""
        _ensure_positive(amount)
        if await tx.credit_transactions.exists(user_id, reason, reference):
            user = await tx.users.get_by_id(user_id)
            if user is None:
                raise EntityNotFoundError("User not found")
            logger.info(
                f"[CreditLedger] Skipping replayed {reason.value} for user {user_id} "
                f"({reference.reference_type} {reference.reference_id})"
            )
            return user.credit_balance

        new_balance = await tx.users.increment_balance(user_id, amount)
        await tx.credit_transactions.add(
            CreditTransaction.record(
                user_id=user_id,
                amount=amount,
                balance_after=new_balance,
                reason=reason,
                description=description,
                reference=reference,
                metadata=metadata,
            )
        )
        logger.info(
            f"[CreditLedger] Credited {amount} to user {user_id} ({reason.value}), balance {new_balance}"
        )
        return new_balance
