from marketplace.presentation.api.chat import router as chat_router
from marketplace.presentation.api.credits import router as credits_router
from marketplace.presentation.api.metrics import router as metrics_router
from marketplace.presentation.api.pricing import router as pricing_router
from marketplace.presentation.api.proposals import router as proposals_router

__all__ = [
    "chat_router",
    "credits_router",
    "metrics_router",
    "pricing_router",
    "proposals_router",
]
