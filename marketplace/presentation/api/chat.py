"""
Chat API Router - order lifecycle actions, conversations and messages.

Thin layer: builds a Command/Query from the request, runs the handler,
shapes the response. Domain errors are mapped to HTTP in errors.py.

Flow:
  HTTP Request → Router → Command → Handler → UnitOfWork → Database
                                 ↓
  HTTP Response ← Router ← Result ←
"""

from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Path, Query, status
from pydantic import Field, field_validator

from marketplace.application.commands.chat import (
    CreateConversationCommand,
    CreateConversationHandler,
    GetOrCreateOrderConversationCommand,
    GetOrCreateOrderConversationHandler,
    LeaveConversationCommand,
    LeaveConversationHandler,
    MarkReadCommand,
    MarkReadHandler,
    SendMessageCommand,
    SendMessageHandler,
)
from marketplace.application.commands.orders import (
    CancelApplicationCommand,
    CancelApplicationHandler,
    ChooseApplicationCommand,
    ChooseApplicationHandler,
    CompleteOrderCommand,
    CompleteOrderHandler,
    RejectApplicationsCommand,
    RejectApplicationsHandler,
)
from marketplace.application.common.pagination import PageRequest
from marketplace.application.dto import (
    CamelModel,
    ConversationDTO,
    ConversationListDTO,
    MessageDTO,
    MessageListDTO,
    PaginationDTO,
    ParticipantDTO,
)
from marketplace.application.queries.chat import (
    GetConversationHandler,
    GetConversationQuery,
    GetParticipantsHandler,
    GetParticipantsQuery,
    GetUnreadCountHandler,
    GetUnreadCountQuery,
    ListConversationsHandler,
    ListConversationsQuery,
    ListMessagesHandler,
    ListMessagesQuery,
)
from marketplace.config.settings import Config
from marketplace.domain.value_objects import (
    ConversationId,
    MessageType,
    OrderId,
    ProposalId,
    UserId,
)
from marketplace.presentation.dependencies.auth import AuthUser, get_current_user

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class LifecycleResponse(CamelModel):
    message: str
    refunded_credits: int = 0


class CompleteResponse(CamelModel):
    message: str


class ChooseRequest(CamelModel):
    proposal_id: Optional[int] = Field(default=None, gt=0)


class ChooseResponse(CamelModel):
    message: str
    chosen_proposal_id: int
    refunded_credits: int


class OrderConversationRequest(CamelModel):
    specialist_id: Optional[int] = Field(default=None, gt=0)


class OrderConversationResponse(CamelModel):
    conversation: ConversationDTO
    created: bool
    opening_message: Optional[MessageDTO] = None


class SendMessageRequest(CamelModel):
    conversation_id: int = Field(gt=0)
    content: str = Field(min_length=1, max_length=Config.MESSAGE_MAX_LENGTH)
    message_type: MessageType = MessageType.TEXT

    @field_validator("message_type")
    @classmethod
    def user_message_type(cls, value: MessageType) -> MessageType:
        if value == MessageType.SYSTEM:
            raise ValueError("system messages are created by the server")
        return value


class CreateConversationRequest(CamelModel):
    participant_ids: list[int] = Field(min_length=1)
    order_id: Optional[int] = Field(default=None, gt=0)
    title: Optional[str] = Field(default=None, max_length=200)


class MarkReadResponse(CamelModel):
    success: bool = True


class UnreadCountResponse(CamelModel):
    count: int


class LeaveConversationResponse(CamelModel):
    success: bool = True
    conversation_removed: bool


# ==================== ROUTER ====================

router = APIRouter(prefix="/chat", tags=["chat"])


# ==================== ORDER LIFECYCLE ====================


@router.post("/orders/{order_id}/reject", response_model=LifecycleResponse)
@inject
async def reject_applications(
    handler: FromDishka[RejectApplicationsHandler],
    order_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
):
    """Reject every pending application and close the order."""
    result = await handler.execute(
        RejectApplicationsCommand(order_id=OrderId(order_id), client_id=current_user.id)
    )
    return LifecycleResponse(message=result.message, refunded_credits=result.refunded_credits)


@router.post("/orders/{order_id}/choose", response_model=ChooseResponse)
@inject
async def choose_application(
    handler: FromDishka[ChooseApplicationHandler],
    request: Optional[ChooseRequest] = None,
    order_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
):
    """Hire one applicant; the rest are rejected and refunded."""
    proposal_id = request.proposal_id if request else None
    result = await handler.execute(
        ChooseApplicationCommand(
            order_id=OrderId(order_id),
            client_id=current_user.id,
            proposal_id=ProposalId(proposal_id) if proposal_id else None,
        )
    )
    return ChooseResponse(
        message=result.message,
        chosen_proposal_id=result.chosen_proposal_id.value,
        refunded_credits=result.refunded_credits,
    )


@router.post("/orders/{order_id}/cancel", response_model=LifecycleResponse)
@inject
async def cancel_application(
    handler: FromDishka[CancelApplicationHandler],
    order_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
):
    result = await handler.execute(
        CancelApplicationCommand(order_id=OrderId(order_id), client_id=current_user.id)
    )
    return LifecycleResponse(message=result.message, refunded_credits=result.refunded_credits)


@router.post("/orders/{order_id}/complete", response_model=CompleteResponse)
@inject
async def complete_order(
    handler: FromDishka[CompleteOrderHandler],
    order_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
):
    result = await handler.execute(
        CompleteOrderCommand(order_id=OrderId(order_id), client_id=current_user.id)
    )
    return CompleteResponse(message=result.message)


@router.post("/orders/{order_id}/conversation", response_model=OrderConversationResponse)
@inject
async def get_or_create_order_conversation(
    handler: FromDishka[GetOrCreateOrderConversationHandler],
    request: Optional[OrderConversationRequest] = None,
    order_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
):
    """Open (or reuse) the conversation between the client and one applicant."""
    specialist_id = request.specialist_id if request else None
    result = await handler.execute(
        GetOrCreateOrderConversationCommand(
            order_id=OrderId(order_id),
            caller_id=current_user.id,
            specialist_id=UserId(specialist_id) if specialist_id else None,
        )
    )
    return OrderConversationResponse(
        conversation=ConversationDTO.from_entity(result.conversation),
        created=result.created,
        opening_message=(
            MessageDTO.from_entity(result.opening_message) if result.opening_message else None
        ),
    )


# ==================== MESSAGES ====================


@router.post("/messages", response_model=MessageDTO, status_code=status.HTTP_201_CREATED)
@inject
async def send_message(
    request: SendMessageRequest,
    handler: FromDishka[SendMessageHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    message = await handler.execute(
        SendMessageCommand(
            conversation_id=ConversationId(request.conversation_id),
            sender_id=current_user.id,
            content=request.content,
            message_type=request.message_type,
        )
    )
    return MessageDTO.from_entity(message)


# ==================== CONVERSATIONS ====================


@router.post(
    "/conversations",
    response_model=ConversationDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_conversation(
    request: CreateConversationRequest,
    handler: FromDishka[CreateConversationHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    conversation = await handler.execute(
        CreateConversationCommand(
            creator_id=current_user.id,
            participant_ids=tuple(UserId(uid) for uid in request.participant_ids),
            order_id=OrderId(request.order_id) if request.order_id else None,
            title=request.title,
        )
    )
    return ConversationDTO.from_entity(conversation)


@router.get("/conversations", response_model=ConversationListDTO)
@inject
async def list_conversations(
    handler: FromDishka[ListConversationsHandler],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=Config.CONVERSATION_PAGE_LIMIT, ge=1, le=100),
    current_user: AuthUser = Depends(get_current_user),
):
    result = await handler.execute(
        ListConversationsQuery(user_id=current_user.id, page=PageRequest(page, limit))
    )
    return ConversationListDTO(
        conversations=[ConversationDTO.from_entity(c) for c in result.items],
        pagination=PaginationDTO.from_page(result),
    )


@router.get("/conversations/{conversation_id}", response_model=ConversationDTO)
@inject
async def get_conversation(
    handler: FromDishka[GetConversationHandler],
    conversation_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
):
    conversation = await handler.execute(
        GetConversationQuery(
            conversation_id=ConversationId(conversation_id), user_id=current_user.id
        )
    )
    return ConversationDTO.from_entity(conversation)


@router.get("/conversations/{conversation_id}/messages", response_model=MessageListDTO)
@inject
async def list_messages(
    handler: FromDishka[ListMessagesHandler],
    conversation_id: int = Path(gt=0),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=Config.MESSAGE_PAGE_LIMIT, ge=1, le=100),
    current_user: AuthUser = Depends(get_current_user),
):
    result = await handler.execute(
        ListMessagesQuery(
            conversation_id=ConversationId(conversation_id),
            user_id=current_user.id,
            page=PageRequest(page, limit),
        )
    )
    return MessageListDTO(
        messages=[MessageDTO.from_entity(m) for m in result.items],
        pagination=PaginationDTO.from_page(result),
    )


@router.post("/conversations/{conversation_id}/read", response_model=MarkReadResponse)
@inject
async def mark_read(
    handler: FromDishka[MarkReadHandler],
    conversation_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
):
    await handler.execute(
        MarkReadCommand(conversation_id=ConversationId(conversation_id), user_id=current_user.id)
    )
    return MarkReadResponse()


@router.get("/unread-count", response_model=UnreadCountResponse)
@inject
async def unread_count(
    handler: FromDishka[GetUnreadCountHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    count = await handler.execute(GetUnreadCountQuery(user_id=current_user.id))
    return UnreadCountResponse(count=count)


@router.get(
    "/conversations/{conversation_id}/participants",
    response_model=list[ParticipantDTO],
)
@inject
async def list_participants(
    handler: FromDishka[GetParticipantsHandler],
    conversation_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
):
    participants = await handler.execute(
        GetParticipantsQuery(
            conversation_id=ConversationId(conversation_id), user_id=current_user.id
        )
    )
    return [ParticipantDTO.from_entity(p) for p in participants]


@router.post(
    "/conversations/{conversation_id}/leave",
    response_model=LeaveConversationResponse,
)
@inject
async def leave_conversation(
    handler: FromDishka[LeaveConversationHandler],
    conversation_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
):
    removed = await handler.execute(
        LeaveConversationCommand(
            conversation_id=ConversationId(conversation_id), user_id=current_user.id
        )
    )
    logger.info(f"User {current_user.id} left conversation {conversation_id}")
    return LeaveConversationResponse(conversation_removed=removed)
