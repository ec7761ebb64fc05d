"""
Integer identity value objects.

Ids come from SERIAL columns, so every id is a positive integer.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EntityId:
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"{type(self).__name__} must be an integer: {self.value!r}")
        if self.value <= 0:
            raise ValueError(f"{type(self).__name__} must be positive: {self.value}")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserId(EntityId):
    pass


@dataclass(frozen=True)
class OrderId(EntityId):
    pass


@dataclass(frozen=True)
class ProposalId(EntityId):
    pass


@dataclass(frozen=True)
class ConversationId(EntityId):
    pass


@dataclass(frozen=True)
class MessageId(EntityId):
    pass
