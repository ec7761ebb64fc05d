"""
PricingTier Entity - Credit cost and refund share for a budget range.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class PricingTier:
    id: Optional[int]
    min_budget: int
    credit_cost: int
    refund_percentage: float
    max_budget: Optional[int] = None
    team_credit_cost: Optional[int] = None
    team_refund_percentage: Optional[float] = None
    description: Optional[str] = None
    is_active: bool = True

    def __post_init__(self):
        if self.min_budget < 0:
            raise ValueError("min_budget cannot be negative")
        if self.max_budget is not None and self.max_budget < self.min_budget:
            raise ValueError("max_budget must be greater than or equal to min_budget")
        if self.credit_cost < 1:
            raise ValueError("credit_cost must be at least 1")
        for pct in (self.refund_percentage, self.team_refund_percentage):
            if pct is not None and not 0 <= pct <= 1:
                raise ValueError("refund percentages must be between 0 and 1")

    def covers(self, budget: int) -> bool:
        if budget < self.min_budget:
            return False
        return self.max_budget is None or budget <= self.max_budget

    def cost_for(self, is_team: bool) -> int:
        if is_team and self.team_credit_cost is not None:
            return self.team_credit_cost
        return self.credit_cost

    def refund_percentage_for(self, is_team: bool) -> float:
        if is_team and self.team_refund_percentage is not None:
            return self.team_refund_percentage
        return self.refund_percentage
