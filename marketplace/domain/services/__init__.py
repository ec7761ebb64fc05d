"""Pure domain rules with no I/O."""

from marketplace.domain.services.content_policy import (
    AllowAllPolicy,
    ContentPolicy,
    PhoneNumberPolicy,
)
from marketplace.domain.services.pricing import PricingQuote

__all__ = ["ContentPolicy", "PhoneNumberPolicy", "AllowAllPolicy", "PricingQuote"]
