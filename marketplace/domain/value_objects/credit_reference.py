"""
CreditReference Value Object - what a ledger entry refers to.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CreditReference:
    reference_type: str  # "order" | "proposal"
    reference_id: str

    def __post_init__(self):
        if not self.reference_type or not self.reference_id:
            raise ValueError("CreditReference needs both a type and an id")

    @classmethod
    def for_order(cls, order_id) -> "CreditReference":
        return cls("order", str(order_id))

    @classmethod
    def for_proposal(cls, proposal_id) -> "CreditReference":
        return cls("proposal", str(proposal_id))
