from marketplace.application.services.credit_ledger import CreditLedger
from marketplace.application.services.pricing_service import PricingService
from marketplace.application.services.proposal_registry import (
    ProposalRegistry,
    SubmittedProposal,
)
from marketplace.application.services.conversation_manager import ConversationManager
from marketplace.application.services.event_dispatcher import (
    EventDispatcher,
    EventPublisher,
)

__all__ = [
    "CreditLedger",
    "PricingService",
    "ProposalRegistry",
    "SubmittedProposal",
    "ConversationManager",
    "EventDispatcher",
    "EventPublisher",
]
