"""PostgreSQL implementation of RecommendationRepository."""

from contextlib import asynccontextmanager
from dataclasses import replace
from typing import AsyncGenerator, List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domain.entities import Recommendation
from src.domain.exceptions import DependencyException, PersistenceException
from src.domain.interfaces import RecommendationRepository
from src.infrastructure.database.models import RecommendationModel

from .card_repository import card_to_entity, category_to_entity


class PostgresRecommendationRepository(RecommendationRepository):
    """
    PostgreSQL implementation of the Recommendation repository.

    Uses SQLAlchemy async session for database operations. Write errors
    surface as PersistenceException, read errors as DependencyException.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[None, None]:
        """Commit the session on success, roll it back on any failure."""
        try:
            yield
            await self._session.commit()
        except Exception as e:
            await self._session.rollback()
            if isinstance(e, SQLAlchemyError):
                raise PersistenceException(str(e)) from e
            raise

    async def delete_all_for_user(self, user_id: int) -> int:
        """Delete every recommendation row of a user."""
        stmt = delete(RecommendationModel).where(RecommendationModel.user_id == user_id)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceException(str(e), user_id=user_id) from e

        return result.rowcount or 0

    async def insert(self, recommendation: Recommendation) -> Recommendation:
        """Persist a recommendation and return it with its id."""
        model = RecommendationModel(
            user_id=recommendation.user_id,
            category_id=recommendation.category_id,
            card_id=recommendation.card_id,
            score=recommendation.score,
            estimated_reward=recommendation.estimated_reward,
            reason=recommendation.reason,
            created_at=recommendation.created_at,
            updated_at=recommendation.updated_at,
        )

        self._session.add(model)
        try:
            await self._session.flush()
        except SQLAlchemyError as e:
            raise PersistenceException(str(e), user_id=recommendation.user_id) from e

        return replace(recommendation, id=model.id)

    async def list_by_user(self, user_id: int) -> List[Recommendation]:
        """Retrieve a user's recommendations, best first."""
        stmt = (
            self._base_query()
            .where(RecommendationModel.user_id == user_id)
        )
        return await self._fetch(stmt)

    async def list_by_user_and_category(
        self,
        user_id: int,
        category_id: int,
    ) -> List[Recommendation]:
        """Retrieve a user's recommendations for one category, best first."""
        stmt = (
            self._base_query()
            .where(RecommendationModel.user_id == user_id)
            .where(RecommendationModel.category_id == category_id)
        )
        return await self._fetch(stmt)

    def _base_query(self):
        return (
            select(RecommendationModel)
            .options(
                selectinload(RecommendationModel.card),
                selectinload(RecommendationModel.category),
            )
            .order_by(RecommendationModel.score.desc(), RecommendationModel.id)
        )

    async def _fetch(self, stmt) -> List[Recommendation]:
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise DependencyException("recommendation", str(e)) from e

        return [self._to_entity(model) for model in result.scalars().all()]

    def _to_entity(self, model: RecommendationModel) -> Recommendation:
        """Convert database model to domain entity."""
        return Recommendation(
            id=model.id,
            user_id=model.user_id,
            card=card_to_entity(model.card, include_benefits=False),
            category=category_to_entity(model.category),
            score=model.score,
            estimated_reward=model.estimated_reward,
            reason=model.reason,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
