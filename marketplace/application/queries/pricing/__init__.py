from marketplace.application.queries.pricing.pricing_queries import (
    ListPricingTiersQuery,
    ListPricingTiersHandler,
    QuotePricingQuery,
    QuotePricingHandler,
)

__all__ = [
    "ListPricingTiersQuery",
    "ListPricingTiersHandler",
    "QuotePricingQuery",
    "QuotePricingHandler",
]
