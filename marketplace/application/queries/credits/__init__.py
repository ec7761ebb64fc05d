from marketplace.application.queries.credits.credit_queries import (
    GetCreditBalanceQuery,
    GetCreditBalanceHandler,
    ListCreditTransactionsQuery,
    ListCreditTransactionsHandler,
)

__all__ = [
    "GetCreditBalanceQuery",
    "GetCreditBalanceHandler",
    "ListCreditTransactionsQuery",
    "ListCreditTransactionsHandler",
]
