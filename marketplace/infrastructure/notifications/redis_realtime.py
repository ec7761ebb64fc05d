"""
Real-time broadcast over Redis pub/sub.

Socket gateways subscribe to "conversation-{id}" and "user-{id}" channels and
forward each JSON envelope {"event": ..., "data": ...} to connected clients.
"""

import json
import logging
from typing import Any, Optional

from redis.asyncio import Redis

from marketplace.domain.ports import RealtimePublisher

logger = logging.getLogger(__name__)


class RedisRealtimePublisher(RealtimePublisher):
    def __init__(self, client: Optional[Redis]):
        self._client = client

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def publish(self, channel: str, event: str, data: dict[str, Any]) -> None:
        if self._client is None:
            return
        envelope = json.dumps({"event": event, "data": data}, default=str)
        receivers = await self._client.publish(channel, envelope)
        logger.debug(f"[Realtime] {event} -> {channel} ({receivers} subscribers)")
