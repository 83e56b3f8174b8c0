"""
Reward and Ranking Module for the card recommendation engine
"""

from .models import CatalogSnapshot, RewardUnit
from .settings import RewardSettings, reward_settings
from .aggregator import aggregate_spending
from .reward import calculate_reward, credited_unit, effective_spend
from .card_score import (
    annual_reward,
    calculate_score,
    explain_recommendation,
    net_annual_benefit,
)
from .engine import generate_candidates, rank_candidates, ranking_key, recommend

__all__ = [
    # Settings
    "RewardSettings",
    "reward_settings",
    # Models
    "CatalogSnapshot",
    "RewardUnit",
    # Aggregation
    "aggregate_spending",
    # Rewards
    "calculate_reward",
    "credited_unit",
    "effective_spend",
    # Scoring
    "annual_reward",
    "calculate_score",
    "explain_recommendation",
    "net_annual_benefit",
    # Engine
    "generate_candidates",
    "rank_candidates",
    "ranking_key",
    "recommend",
]
