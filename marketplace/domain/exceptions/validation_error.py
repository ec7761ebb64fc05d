"""
DomainValidationError - Raised when input violates a business rule.
Maps to: HTTP 422 Unprocessable Content
"""

from marketplace.domain.exceptions.base import DomainError


class DomainValidationError(DomainError):
    """Exception raised for domain validation errors."""
