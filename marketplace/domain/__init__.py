"""
DOMAIN LAYER - Orders, proposals, credits and conversations

This layer contains:
- Entities: Order, Proposal, User, CreditTransaction, PricingTier,
  Conversation, Participant, Message, OutboxEvent
- Value Objects: typed ids, statuses, credit references
- Ports: repository and notification interfaces infrastructure implements
- Services: pure domain logic (pricing, content policy)
- Exceptions: domain errors mapped to HTTP codes by the presentation layer

RULES:
1. NO framework imports (no FastAPI, Prisma, Pydantic, etc.)
2. NO I/O operations
3. Only depends on Python stdlib
"""
