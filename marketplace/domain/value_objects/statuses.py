"""
Status and type enumerations stored as plain strings in the database.
"""

from enum import Enum


class OrderStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"
    COMPLETED = "completed"


class ProposalStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CANCELED = "canceled"


class ConversationStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    COMPLETED = "completed"
    REMOVED = "removed"


class MessageType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    FILE = "file"
    SYSTEM = "system"


class CreditReason(str, Enum):
    ORDER_APPLICATION = "order_application"
    REJECTION_REFUND = "rejection_refund"
    SELECTION_REFUND = "selection_refund"
    CANCELLATION_REFUND = "cancellation_refund"
