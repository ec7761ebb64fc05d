import pytest

from marketplace.domain.entities import PricingTier
from marketplace.domain.services.pricing import (
    default_tiers,
    fallback_credit_cost,
    quote,
    refund_amount,
    round_half_up,
    select_tier,
)


@pytest.fixture()
def tiers():
    tiers = default_tiers()
    for index, tier in enumerate(tiers, start=1):
        tier.id = index
    return tiers


@pytest.mark.parametrize(
    "budget, expected_cost",
    [(0, 1), (499, 1), (500, 5), (1000, 5), (2000, 10), (4999, 10), (5000, 20), (250000, 20)],
)
def test_select_tier_prefers_highest_min_budget(tiers, budget, expected_cost):
    assert select_tier(tiers, budget).credit_cost == expected_cost


def test_select_tier_ignores_inactive(tiers):
    tiers[1].is_active = False
    assert select_tier(tiers, 1000) is None
    assert select_tier(tiers, 500).credit_cost == 1


def test_team_quote_uses_team_columns(tiers):
    tier = select_tier(tiers, 1000)
    individual = quote(tier, 1000, is_team=False, default_refund_percentage=0.5)
    team = quote(tier, 1000, is_team=True, default_refund_percentage=0.5)
    assert (individual.credit_cost, individual.refund_amount) == (5, 3)
    assert (team.credit_cost, team.refund_amount) == (8, 5)
    assert team.tier_id == tier.id


def test_team_quote_falls_back_to_individual_cost_when_tier_has_none():
    tier = PricingTier(id=9, min_budget=0, credit_cost=4, refund_percentage=0.25)
    result = quote(tier, 100, is_team=True, default_refund_percentage=0.5)
    assert result.credit_cost == 4
    assert result.refund_percentage == 0.25
    assert result.refund_amount == 1


@pytest.mark.parametrize(
    "budget, is_team, expected",
    [(1000, False, 50), (1000, True, 70), (10, False, 1), (0, False, 1), (100000, False, 100)],
)
def test_fallback_cost_is_clamped_share_of_budget(budget, is_team, expected):
    assert fallback_credit_cost(budget, is_team) == expected


def test_quote_without_tier_uses_fallback_and_default_refund():
    result = quote(None, 1000, is_team=False, default_refund_percentage=0.5)
    assert result.credit_cost == 50
    assert result.refund_amount == 25
    assert result.tier_id is None


@pytest.mark.parametrize(
    "cost, percentage, expected",
    [(1, 0.5, 1), (5, 0.6, 3), (15, 0.7, 11), (20, 0.8, 16), (3, 0.0, 0), (7, 1.0, 7)],
)
def test_refund_rounds_half_up(cost, percentage, expected):
    assert refund_amount(cost, percentage) == expected


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
    assert round_half_up(0.5) == 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_budget": -1, "credit_cost": 1, "refund_percentage": 0.5},
        {"min_budget": 100, "max_budget": 50, "credit_cost": 1, "refund_percentage": 0.5},
        {"min_budget": 0, "credit_cost": 0, "refund_percentage": 0.5},
        {"min_budget": 0, "credit_cost": 1, "refund_percentage": 1.5},
    ],
)
def test_invalid_tiers_rejected(kwargs):
    with pytest.raises(ValueError):
        PricingTier(id=None, **kwargs)
