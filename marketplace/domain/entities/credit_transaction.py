"""
CreditTransaction Entity - Immutable ledger record of a balance change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from marketplace.domain.value_objects import CreditReason, CreditReference, UserId


@dataclass(frozen=True)
class CreditTransaction:
    id: Optional[int]
    user_id: UserId
    amount: int  # negative for debits
    balance_after: int
    reason: CreditReason
    description: str
    reference: Optional[CreditReference]
    created_at: datetime
    status: str = "completed"
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def record(
        cls,
        user_id: UserId,
        amount: int,
        balance_after: int,
        reason: CreditReason,
        description: str,
        reference: Optional[CreditReference] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> CreditTransaction:
        return cls(
            id=None,
            user_id=user_id,
            amount=amount,
            balance_after=balance_after,
            reason=reason,
            description=description,
            reference=reference,
            created_at=datetime.now(timezone.utc),
            metadata=metadata or {},
        )
