"""
InvalidStateError - Operation attempted outside its allowed precondition.
Maps to: HTTP 409 Conflict
"""

from marketplace.domain.exceptions.base import DomainError


class InvalidStateError(DomainError):
    """Raised for disallowed status transitions and missing preconditions."""


class ConversationRemovedError(InvalidStateError):
    """Raised when writing to a conversation that has been removed."""

    def __init__(self, message: str = "Conversation has been removed"):
        super().__init__(message)
