from marketplace.application.queries.proposals.list_order_proposals import (
    ListOrderProposalsQuery,
    ListOrderProposalsHandler,
)

__all__ = ["ListOrderProposalsQuery", "ListOrderProposalsHandler"]
