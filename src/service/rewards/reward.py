"""
Reward Calculation for the card recommendation engine.

This module turns a monthly spend amount and a single benefit rule into
the monetary reward the rule pays, applying the minimum-spend floor, the
spend cap and unit conversion.
"""

from typing import Optional

from src.domain.entities import BenefitRule

from .models import RewardUnit
from .settings import RewardSettings, reward_settings


def credited_unit(rule: BenefitRule) -> Optional[RewardUnit]:
    """
    Select the unit a rule is credited in.

    Cashback takes precedence over points, points over miles. Rates are
    never accumulated across units.

    Args:
        rule: The benefit rule

    Returns:
        The credited unit, or None if every rate is zero
    """
    if rule.cashback_rate > 0:
        return RewardUnit.CASHBACK
    if rule.points_rate > 0:
        return RewardUnit.POINTS
    if rule.miles_rate > 0:
        return RewardUnit.MILES
    return None


def effective_spend(monthly_spend: float, rule: BenefitRule) -> float:
    """
    Spend eligible for reward credit, after applying the cap.

    Args:
        monthly_spend: Amount spent in the rule's category
        rule: The benefit rule

    Returns:
        min(monthly_spend, cap) for capped rules, else monthly_spend
    """
    if rule.is_capped:
        return min(monthly_spend, rule.cap)
    return monthly_spend


def calculate_reward(
    monthly_spend: float,
    rule: BenefitRule,
    settings: RewardSettings = reward_settings,
) -> float:
    """
    Calculate the monetary reward a benefit rule pays for a month.

    Policy, in order:
        1. Spend below min_spend earns nothing (no partial credit).
        2. Spend above cap is not credited.
        3. The credited unit is converted to currency:
           cashback at face value, points at point_value, miles at mile_value.

    Args:
        monthly_spend: Amount spent in the rule's category
        rule: The benefit rule
        settings: Reward settings (uses defaults if not provided)

    Returns:
        Reward in currency units
    """
    if monthly_spend < rule.min_spend:
        return 0.0

    spend = effective_spend(monthly_spend, rule)
    unit = credited_unit(rule)

    if unit is RewardUnit.CASHBACK:
        return spend * (rule.cashback_rate / 100)
    if unit is RewardUnit.POINTS:
        return spend * (rule.points_rate / 100) * settings.point_value
    if unit is RewardUnit.MILES:
        return spend * (rule.miles_rate / 100) * settings.mile_value
    return 0.0
