"""Repository implementations."""

from .card_repository import PostgresCardCatalogRepository
from .recommendation_repository import PostgresRecommendationRepository
from .spending_repository import PostgresSpendingRepository

__all__ = [
    "PostgresCardCatalogRepository",
    "PostgresRecommendationRepository",
    "PostgresSpendingRepository",
]
