"""
PORTS - Interfaces the domain depends on

Infrastructure provides the implementations; handlers receive them via DI.
"""

from marketplace.domain.ports.unit_of_work import TransactionContext, UnitOfWork
from marketplace.domain.ports.notifications import (
    EmailSender,
    PushSender,
    RealtimePublisher,
)

__all__ = [
    "TransactionContext",
    "UnitOfWork",
    "PushSender",
    "EmailSender",
    "RealtimePublisher",
]
