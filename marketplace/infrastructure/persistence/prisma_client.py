"""
Prisma client bootstrap.

The database may still be starting when the API boots (compose, k8s), so
connect() is retried with exponential backoff before giving up.
"""

import logging

from prisma import Prisma
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    stop_after_attempt,
    wait_exponential,
)

from marketplace.config.settings import Config

logger = logging.getLogger(__name__)


async def connect_prisma(attempts: int = Config.DB_CONNECT_ATTEMPTS) -> Prisma:
    prisma = Prisma()
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=1, min=1, max=16),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    ):
        with attempt:
            await prisma.connect()
    logger.info("[Prisma] Connected")
    return prisma


async def disconnect_prisma(prisma: Prisma) -> None:
    if prisma.is_connected():
        await prisma.disconnect()
        logger.info("[Prisma] Disconnected")
