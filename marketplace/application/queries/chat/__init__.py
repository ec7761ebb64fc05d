from marketplace.application.queries.chat.list_conversations import (
    ListConversationsQuery,
    ListConversationsHandler,
)
from marketplace.application.queries.chat.get_conversation import (
    GetConversationQuery,
    GetConversationHandler,
    GetParticipantsQuery,
    GetParticipantsHandler,
)
from marketplace.application.queries.chat.list_messages import (
    ListMessagesQuery,
    ListMessagesHandler,
)
from marketplace.application.queries.chat.unread_count import (
    GetUnreadCountQuery,
    GetUnreadCountHandler,
)

__all__ = [
    "ListConversationsQuery",
    "ListConversationsHandler",
    "GetConversationQuery",
    "GetConversationHandler",
    "GetParticipantsQuery",
    "GetParticipantsHandler",
    "ListMessagesQuery",
    "ListMessagesHandler",
    "GetUnreadCountQuery",
    "GetUnreadCountHandler",
]
