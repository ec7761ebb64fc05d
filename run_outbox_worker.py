"""
Outbox worker - re-delivers committed events the API process never got to
(crash or restart between commit and delivery).

Usage:
    python run_outbox_worker.py
"""

import asyncio
import logging

from dotenv import load_dotenv

load_dotenv()

from marketplace.application.services import EventDispatcher
from marketplace.config.logging_config import setup_logging
from marketplace.config.settings import Config
from marketplace.setup.ioc.container import create_container

logger = logging.getLogger("marketplace.outbox_worker")


async def run() -> None:
    container = create_container()
    try:
        dispatcher = await container.get(EventDispatcher)
        logger.info(
            f"[Outbox] Polling every {Config.OUTBOX_POLL_SECONDS}s, batch {Config.OUTBOX_BATCH_SIZE}"
        )
        while True:
            try:
                delivered = await dispatcher.dispatch_pending(Config.OUTBOX_BATCH_SIZE)
            except Exception as e:
                logger.error(f"[Outbox] Batch failed: {e}")
                delivered = 0
            if delivered:
                logger.info(f"[Outbox] Dispatched {delivered} event(s)")
            # Full batch means more may be waiting
            if delivered < Config.OUTBOX_BATCH_SIZE:
                await asyncio.sleep(Config.OUTBOX_POLL_SECONDS)
    finally:
        await container.close()


if __name__ == "__main__":
    setup_logging(Config.LOG_LEVEL, Config.LOG_PATH or None)
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("[Outbox] Stopped")
