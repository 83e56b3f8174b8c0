"""PostgreSQL implementation of CardCatalogRepository."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domain.entities import BenefitRule, Card, CardType, Category
from src.domain.exceptions import DependencyException
from src.domain.interfaces import CardCatalogRepository
from src.infrastructure.database.models import (
    CardBenefitModel,
    CategoryModel,
    CreditCardModel,
)


def category_to_entity(model: CategoryModel) -> Category:
    """Convert a category row to a domain entity."""
    return Category(
        id=model.id,
        name=model.name,
        description=model.description or "",
        icon=model.icon or "",
    )


def benefit_to_entity(model: CardBenefitModel) -> BenefitRule:
    """Convert a benefit row to a domain entity."""
    return BenefitRule(
        id=model.id,
        card_id=model.card_id,
        category_id=model.category_id,
        cashback_rate=model.cashback_rate,
        points_rate=model.points_rate,
        miles_rate=model.miles_rate,
        cap=model.cap,
        min_spend=model.min_spend,
        description=model.description or "",
    )


def card_to_entity(model: CreditCardModel, include_benefits: bool = True) -> Card:
    """
    Convert a card row to a domain entity.

    Benefits must have been eager-loaded when include_benefits is True.
    An unknown card_type is a catalog integrity error.
    """
    try:
        card_type = CardType(model.card_type)
    except ValueError as e:
        raise DependencyException(
            "card catalog",
            f"unknown card_type {model.card_type!r} for card {model.id}",
        ) from e

    return Card(
        id=model.id,
        name=model.name,
        bank=model.bank,
        annual_fee=model.annual_fee,
        is_active=model.is_active,
        card_type=card_type,
        description=model.description or "",
        image_url=model.image_url or "",
        welcome_bonus=model.welcome_bonus or "",
        benefits=[benefit_to_entity(b) for b in model.benefits] if include_benefits else [],
    )


class PostgresCardCatalogRepository(CardCatalogRepository):
    """
    PostgreSQL implementation of the card catalog.

    Uses SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_active_cards(self) -> List[Card]:
        """Retrieve active cards with benefits, ordered by id."""
        stmt = (
            select(CreditCardModel)
            .options(selectinload(CreditCardModel.benefits))
            .where(CreditCardModel.is_active.is_(True))
            .order_by(CreditCardModel.id)
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise DependencyException("card catalog", str(e)) from e

        return [card_to_entity(model) for model in result.scalars().all()]

    async def get_category(self, category_id: int) -> Optional[Category]:
        """Retrieve a category by ID."""
        stmt = select(CategoryModel).where(CategoryModel.id == category_id)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise DependencyException("category", str(e)) from e

        model = result.scalar_one_or_none()
        if model is None:
            return None

        return category_to_entity(model)
