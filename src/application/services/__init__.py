"""Application services (use cases)."""

from .recommendation_service import RecommendationService
from .recommendation_query_service import RecommendationQueryService

__all__ = [
    "RecommendationService",
    "RecommendationQueryService",
]
