"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain logic and caught by presentation layer.
Presentation layer maps them to HTTP status codes.
"""

from marketplace.domain.exceptions.base import DomainError
from marketplace.domain.exceptions.entity_not_found import EntityNotFoundError
from marketplace.domain.exceptions.access_denied import (
    AccessDeniedError,
    NotAParticipantError,
    NotOwnerError,
)
from marketplace.domain.exceptions.validation_error import DomainValidationError
from marketplace.domain.exceptions.invalid_state import (
    ConversationRemovedError,
    InvalidStateError,
)
from marketplace.domain.exceptions.insufficient_balance import InsufficientBalanceError
from marketplace.domain.exceptions.contact_info_blocked import ContactInfoBlockedError

__all__ = [
    "DomainError",
    "EntityNotFoundError",
    "AccessDeniedError",
    "NotOwnerError",
    "NotAParticipantError",
    "DomainValidationError",
    "InvalidStateError",
    "ConversationRemovedError",
    "InsufficientBalanceError",
    "ContactInfoBlockedError",
]
