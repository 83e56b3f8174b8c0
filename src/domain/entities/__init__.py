"""Domain Entities - Core business objects."""

from .card import BenefitRule, Card, CardType, Category
from .recommendation import Recommendation, RecommendationCandidate
from .spending import SpendingRecord

__all__ = [
    "BenefitRule",
    "Card",
    "CardType",
    "Category",
    "Recommendation",
    "RecommendationCandidate",
    "SpendingRecord",
]
