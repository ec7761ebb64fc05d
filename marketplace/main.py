"""
Production ASGI entry point.

    uvicorn marketplace.main:app --host 0.0.0.0 --port 5001
"""

from marketplace.config.logging_config import setup_logging
from marketplace.config.settings import get_config
from marketplace.fastapi_app import create_fastapi_app
from marketplace.setup.ioc.container import create_container

config = get_config()
setup_logging("DEBUG" if config.DEBUG else config.LOG_LEVEL, config.LOG_PATH or None)

# Created at module level: Dishka adds middleware, which must happen before app starts
container = create_container()
app = create_fastapi_app(container)
