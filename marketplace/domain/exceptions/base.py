"""
DomainError - Common base for every business rule violation.
The presentation layer maps subclasses to HTTP status codes.
"""


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
