"""
Card Scoring for the card recommendation engine.

This module combines a card's expected reward with its annual fee into a
bounded 0-100 ranking score, and renders the justification shown to the
user next to each recommendation.
"""

from src.domain.entities import BenefitRule, Card

from .models import RewardUnit
from .reward import credited_unit
from .settings import RewardSettings, reward_settings


def annual_reward(
    monthly_reward: float,
    settings: RewardSettings = reward_settings,
) -> float:
    """Project a monthly reward onto a full year."""
    return monthly_reward * settings.months_per_year


def net_annual_benefit(
    monthly_reward: float,
    annual_fee: float,
    settings: RewardSettings = reward_settings,
) -> float:
    """Annual reward minus the card's annual fee (may be negative)."""
    return annual_reward(monthly_reward, settings) - annual_fee


def calculate_score(
    card: Card,
    rule: BenefitRule,
    monthly_reward: float,
    settings: RewardSettings = reward_settings,
) -> float:
    """
    Calculate the composite ranking score of a card for one category.

    The score starts at the net annual benefit, adds an incentive bonus for
    every rate the rule sets, and subtracts a fee-aversion penalty. The bonus
    is added for cashback, points and miles alike, even though only one of
    them is credited as reward; these are ranking weights, not rewards.

    Args:
        card: The card being scored
        rule: The card's benefit rule for the category
        monthly_reward: Reward from calculate_reward for this rule
        settings: Reward settings (uses defaults if not provided)

    Returns:
        Score clamped to [score_floor, score_ceiling], rounded to 2 decimals
    """
    score = net_annual_benefit(monthly_reward, card.annual_fee, settings)

    # Incentive weights
    score += rule.cashback_rate * settings.cashback_weight
    score += rule.points_rate * settings.points_weight
    score += rule.miles_rate * settings.miles_weight

    # Fee aversion
    score -= card.annual_fee * settings.fee_penalty_ratio

    score = max(settings.score_floor, min(settings.score_ceiling, score))
    return round(score, 2)


def explain_recommendation(
    rule: BenefitRule,
    monthly_reward: float,
    annual_fee: float,
    settings: RewardSettings = reward_settings,
) -> str:
    """
    Render the justification for recommending a card in a category.

    Names the credited unit and rate, the expected monthly reward, the
    annual fee (only when non-zero) and the net annual benefit. The output
    is part of the API response and must be identical for identical inputs.

    Example:
        "Earn 6.00% on this category. Expected monthly reward: $30.00,
        Annual fee: $120, Net annual benefit: $240.00"
    """
    unit = credited_unit(rule)
    if unit is RewardUnit.POINTS:
        reason = f"Earn {rule.points_rate:.1f}x points "
    elif unit is RewardUnit.MILES:
        reason = f"Earn {rule.miles_rate:.1f}x miles "
    else:
        reason = f"Earn {rule.cashback_rate:.2f}% "

    reason += f"on this category. Expected monthly reward: ${monthly_reward:.2f}"

    if annual_fee > 0:
        reason += f", Annual fee: ${annual_fee:.0f}"

    net_benefit = net_annual_benefit(monthly_reward, annual_fee, settings)
    reason += f", Net annual benefit: ${net_benefit:.2f}"

    return reason
