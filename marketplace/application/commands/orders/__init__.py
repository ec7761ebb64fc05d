from marketplace.application.commands.orders.lifecycle import LifecycleResult
from marketplace.application.commands.orders.reject_applications import (
    RejectApplicationsCommand,
    RejectApplicationsHandler,
)
from marketplace.application.commands.orders.choose_application import (
    ChooseApplicationCommand,
    ChooseApplicationHandler,
    ChooseResult,
)
from marketplace.application.commands.orders.cancel_application import (
    CancelApplicationCommand,
    CancelApplicationHandler,
)
from marketplace.application.commands.orders.complete_order import (
    CompleteOrderCommand,
    CompleteOrderHandler,
)

__all__ = [
    "LifecycleResult",
    "RejectApplicationsCommand",
    "RejectApplicationsHandler",
    "ChooseApplicationCommand",
    "ChooseApplicationHandler",
    "ChooseResult",
    "CancelApplicationCommand",
    "CancelApplicationHandler",
    "CompleteOrderCommand",
    "CompleteOrderHandler",
]
