"""PostgreSQL implementation of SpendingRepository."""

from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import SpendingRecord
from src.domain.exceptions import DependencyException
from src.domain.interfaces import SpendingRepository
from src.infrastructure.database.models import UserSpendingModel


class PostgresSpendingRepository(SpendingRepository):
    """PostgreSQL-backed spending repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_by_user(self, user_id: int) -> List[SpendingRecord]:
        stmt = (
            select(UserSpendingModel)
            .where(UserSpendingModel.user_id == user_id)
            .order_by(
                UserSpendingModel.year,
                UserSpendingModel.month,
                UserSpendingModel.id,
            )
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise DependencyException("spending", str(e)) from e

        return [self._to_entity(model) for model in result.scalars().all()]

    def _to_entity(self, model: UserSpendingModel) -> SpendingRecord:
        return SpendingRecord(
            id=model.id,
            user_id=model.user_id,
            category_id=model.category_id,
            amount=model.amount,
            month=model.month,
            year=model.year,
        )
