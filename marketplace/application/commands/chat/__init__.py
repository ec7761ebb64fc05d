from marketplace.application.commands.chat.create_conversation import (
    CreateConversationCommand,
    CreateConversationHandler,
)
from marketplace.application.commands.chat.get_or_create_order_conversation import (
    GetOrCreateOrderConversationCommand,
    GetOrCreateOrderConversationHandler,
    OrderConversation,
)
from marketplace.application.commands.chat.send_message import (
    SendMessageCommand,
    SendMessageHandler,
)
from marketplace.application.commands.chat.mark_read import (
    MarkReadCommand,
    MarkReadHandler,
)
from marketplace.application.commands.chat.leave_conversation import (
    LeaveConversationCommand,
    LeaveConversationHandler,
)

__all__ = [
    "CreateConversationCommand",
    "CreateConversationHandler",
    "GetOrCreateOrderConversationCommand",
    "GetOrCreateOrderConversationHandler",
    "OrderConversation",
    "SendMessageCommand",
    "SendMessageHandler",
    "MarkReadCommand",
    "MarkReadHandler",
    "LeaveConversationCommand",
    "LeaveConversationHandler",
]
