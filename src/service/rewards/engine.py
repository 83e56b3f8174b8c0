"""
Recommendation Engine for card recommendations.

This module evaluates every (category, active card) pair for a user:
1. Aggregate spending per category
2. For each category with spend, compute the reward of every card that
   has a benefit rule for it
3. Score and explain each pair
4. Rank all candidates and keep the top K

It is a pure function of its inputs; persistence lives in the
application layer.
"""

from typing import Dict, Iterable, List

import structlog

from src.domain.entities import RecommendationCandidate, SpendingRecord

from .aggregator import aggregate_spending
from .card_score import calculate_score, explain_recommendation
from .models import CatalogSnapshot
from .reward import calculate_reward
from .settings import RewardSettings, reward_settings

logger = structlog.get_logger(__name__)


def generate_candidates(
    spend_by_category: Dict[int, float],
    catalog: CatalogSnapshot,
    settings: RewardSettings = reward_settings,
) -> List[RecommendationCandidate]:
    """
    Evaluate every active card against every category the user spends in.

    Categories with zero spend produce nothing. Cards without a benefit rule
    for a category are skipped rather than scored as zero. A card with rules
    for several categories yields one candidate per category.

    Args:
        spend_by_category: Output of aggregate_spending
        catalog: Cards and categories for this run
        settings: Reward settings (uses defaults if not provided)

    Returns:
        Unranked candidates, in category then catalog order
    """
    candidates: List[RecommendationCandidate] = []

    for category_id, total_spent in spend_by_category.items():
        if total_spent <= 0:
            continue

        category = catalog.category(category_id)
        if category is None:
            logger.warning("category_missing_from_catalog", category_id=category_id)
            continue

        for card in catalog.cards:
            rule = card.benefit_for(category_id)
            if rule is None:
                continue

            reward = calculate_reward(total_spent, rule, settings)
            candidates.append(
                RecommendationCandidate(
                    card=card,
                    category=category,
                    score=calculate_score(card, rule, reward, settings),
                    estimated_reward=round(reward, 2),
                    reason=explain_recommendation(rule, reward, card.annual_fee, settings),
                )
            )

    return candidates


def ranking_key(candidate: RecommendationCandidate) -> tuple:
    """
    Sort key: score descending, then lower annual fee, then card id,
    then category id. Total over distinct (card, category) pairs.
    """
    return (
        -candidate.score,
        candidate.card.annual_fee,
        candidate.card.id,
        candidate.category.id,
    )


def rank_candidates(
    candidates: Iterable[RecommendationCandidate],
    limit: int,
) -> List[RecommendationCandidate]:
    """
    Order candidates best-first and truncate.

    Args:
        candidates: Candidates from generate_candidates
        limit: Maximum number of candidates to keep

    Returns:
        At most `limit` candidates
    """
    return sorted(candidates, key=ranking_key)[:limit]


def recommend(
    records: Iterable[SpendingRecord],
    catalog: CatalogSnapshot,
    settings: RewardSettings = reward_settings,
) -> List[RecommendationCandidate]:
    """
    Compute the ranked recommendations for one user.

    This is the main entry point for the rewards module.

    Args:
        records: All spending records of the user
        catalog: Cards and categories for this run
        settings: Reward settings (uses defaults if not provided)

    Returns:
        Up to settings.max_recommendations candidates, best first
    """
    spend_by_category = aggregate_spending(records)
    candidates = generate_candidates(spend_by_category, catalog, settings)
    return rank_candidates(candidates, settings.max_recommendations)
