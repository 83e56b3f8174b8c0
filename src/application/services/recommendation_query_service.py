"""Recommendation query service - handles recommendation retrieval use cases."""

import structlog

from src.domain.exceptions import InvalidRecommendationRequestException
from src.domain.interfaces import RecommendationRepository
from src.application.dto import RecommendationListResponse

logger = structlog.get_logger(__name__)


class RecommendationQueryService:
    """
    Application service for reading stored recommendations.

    Pure mapping from persisted rows to the response shape; never
    triggers a generation run.
    """

    def __init__(self, recommendation_repository: RecommendationRepository):
        self._recommendation_repo = recommendation_repository

    async def get_existing(self, user_id: int) -> RecommendationListResponse:
        """
        Retrieve the stored recommendations of a user.

        Args:
            user_id: The user's identifier

        Returns:
            RecommendationListResponse, empty if nothing was generated yet
        """
        self._validate_user_id(user_id)

        recommendations = await self._recommendation_repo.list_by_user(user_id)

        logger.info(
            "user_recommendations_retrieved",
            user_id=user_id,
            count=len(recommendations),
        )

        return RecommendationListResponse.from_entities(user_id, recommendations)

    async def get_existing_for_category(
        self,
        user_id: int,
        category_id: int,
    ) -> RecommendationListResponse:
        """
        Retrieve the stored recommendations of a user for one category.

        Args:
            user_id: The user's identifier
            category_id: The category to filter on

        Returns:
            RecommendationListResponse, possibly empty
        """
        self._validate_user_id(user_id)

        recommendations = await self._recommendation_repo.list_by_user_and_category(
            user_id,
            category_id,
        )

        logger.info(
            "user_category_recommendations_retrieved",
            user_id=user_id,
            category_id=category_id,
            count=len(recommendations),
        )

        return RecommendationListResponse.from_entities(user_id, recommendations)

    def _validate_user_id(self, user_id: int) -> None:
        if user_id <= 0:
            raise InvalidRecommendationRequestException("user_id must be positive")
