"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.locks import UserLockRegistry, user_locks
from src.infrastructure.database import get_db_session
from src.infrastructure.repositories import (
    PostgresCardCatalogRepository,
    PostgresRecommendationRepository,
    PostgresSpendingRepository,
)
from src.application.services import RecommendationQueryService, RecommendationService
from src.service.rewards import RewardSettings, reward_settings


# Repository dependencies
async def get_spending_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresSpendingRepository:
    """Get a SpendingRepository instance."""
    return PostgresSpendingRepository(session)


async def get_card_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresCardCatalogRepository:
    """Get a CardCatalogRepository instance."""
    return PostgresCardCatalogRepository(session)


async def get_recommendation_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresRecommendationRepository:
    """Get a RecommendationRepository instance."""
    return PostgresRecommendationRepository(session)


# Process-wide collaborators
def get_user_locks() -> UserLockRegistry:
    """Get the shared per-user lock registry."""
    return user_locks


def get_reward_settings() -> RewardSettings:
    """Get the reward settings."""
    return reward_settings


# Service dependencies
async def get_recommendation_service(
    spending_repo: Annotated[PostgresSpendingRepository, Depends(get_spending_repository)],
    card_repo: Annotated[PostgresCardCatalogRepository, Depends(get_card_repository)],
    recommendation_repo: Annotated[
        PostgresRecommendationRepository,
        Depends(get_recommendation_repository),
    ],
    locks: Annotated[UserLockRegistry, Depends(get_user_locks)],
    settings: Annotated[RewardSettings, Depends(get_reward_settings)],
) -> RecommendationService:
    """Get a RecommendationService instance with all dependencies."""
    return RecommendationService(
        spending_repository=spending_repo,
        card_repository=card_repo,
        recommendation_repository=recommendation_repo,
        user_locks=locks,
        settings=settings,
    )


async def get_recommendation_query_service(
    recommendation_repo: Annotated[
        PostgresRecommendationRepository,
        Depends(get_recommendation_repository),
    ],
) -> RecommendationQueryService:
    """Get a RecommendationQueryService instance."""
    return RecommendationQueryService(recommendation_repository=recommendation_repo)
