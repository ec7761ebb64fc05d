"""
AccessDeniedError - Raised when user lacks permission to access a resource.
Maps to: HTTP 403 Forbidden
"""

from marketplace.domain.exceptions.base import DomainError


class AccessDeniedError(DomainError):
    """Raised when user lacks permission to access a resource"""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class NotOwnerError(AccessDeniedError):
    """Raised when the caller does not own the order it is acting on"""

    def __init__(self, message: str = "Order not found or you are not the owner"):
        super().__init__(message)


class NotAParticipantError(AccessDeniedError):
    """Raised when the caller is not an active participant of a conversation"""

    def __init__(
        self, message: str = "User is not a participant in this conversation"
    ):
        super().__init__(message)
