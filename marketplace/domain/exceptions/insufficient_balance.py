"""
InsufficientBalanceError - A debit would make the credit balance negative.
Maps to: HTTP 400 Bad Request
"""

from marketplace.domain.exceptions.base import DomainError


class InsufficientBalanceError(DomainError):
    def __init__(self, required: int, available: int):
        super().__init__(
            f"Insufficient credit balance. Required: {required} credits, "
            f"Available: {available} credits"
        )
        self.required = required
        self.available = available
