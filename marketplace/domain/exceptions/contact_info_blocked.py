"""
ContactInfoBlockedError - Message content looks like off-platform contact info.
Maps to: HTTP 422 Unprocessable Content
"""

from marketplace.domain.exceptions.base import DomainError


class ContactInfoBlockedError(DomainError):
    def __init__(
        self,
        message: str = "Sharing contact information is not allowed before a hire is confirmed",
    ):
        super().__init__(message)
