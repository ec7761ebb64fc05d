from marketplace.application.dto.base import CamelModel
from marketplace.application.dto.pagination import PaginationDTO
from marketplace.application.dto.chat import (
    ConversationDTO,
    ConversationListDTO,
    MessageDTO,
    MessageListDTO,
    ParticipantDTO,
    SenderDTO,
)
from marketplace.application.dto.proposal import ProposalDTO, ProposalPeerDTO
from marketplace.application.dto.credit import (
    CreditTransactionDTO,
    PricingQuoteDTO,
    PricingTierDTO,
)

__all__ = [
    "CamelModel",
    "PaginationDTO",
    "ConversationDTO",
    "ConversationListDTO",
    "MessageDTO",
    "MessageListDTO",
    "ParticipantDTO",
    "SenderDTO",
    "ProposalDTO",
    "ProposalPeerDTO",
    "CreditTransactionDTO",
    "PricingQuoteDTO",
    "PricingTierDTO",
]
