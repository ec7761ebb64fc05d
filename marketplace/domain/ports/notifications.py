"""
Notification Ports - Best-effort delivery channels.

Implementations live in marketplace/infrastructure/notifications/.
Each channel reports whether it is configured; unconfigured channels are
skipped by the dispatcher.
"""

from abc import ABC, abstractmethod
from typing import Any


class PushSender(ABC):
    @property
    @abstractmethod
    def enabled(self) -> bool: ...

    @abstractmethod
    async def send(
        self, token: str, title: str, body: str, data: dict[str, str]
    ) -> None: ...


class EmailSender(ABC):
    @property
    @abstractmethod
    def enabled(self) -> bool: ...

    @abstractmethod
    async def send(self, to: str, subject: str, body: str) -> None: ...


class RealtimePublisher(ABC):
    @property
    @abstractmethod
    def enabled(self) -> bool: ...

    @abstractmethod
    async def publish(self, channel: str, event: str, data: dict[str, Any]) -> None: ...
