from marketplace.application.commands.pricing.upsert_pricing_tier import (
    UpsertPricingTierCommand,
    UpsertPricingTierHandler,
)
from marketplace.application.commands.pricing.deactivate_pricing_tier import (
    DeactivatePricingTierCommand,
    DeactivatePricingTierHandler,
)
from marketplace.application.commands.pricing.initialize_default_pricing import (
    InitializeDefaultPricingCommand,
    InitializeDefaultPricingHandler,
)

__all__ = [
    "UpsertPricingTierCommand",
    "UpsertPricingTierHandler",
    "DeactivatePricingTierCommand",
    "DeactivatePricingTierHandler",
    "InitializeDefaultPricingCommand",
    "InitializeDefaultPricingHandler",
]
