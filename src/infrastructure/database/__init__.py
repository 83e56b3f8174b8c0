"""Database infrastructure."""

from .connection import (
    DatabaseSessionManager,
    db_manager,
    get_db_session,
    normalize_database_url,
)
from .models import (
    Base,
    CardBenefitModel,
    CategoryModel,
    CreditCardModel,
    RecommendationModel,
    UserSpendingModel,
)

__all__ = [
    "get_db_session",
    "DatabaseSessionManager",
    "db_manager",
    "normalize_database_url",
    "Base",
    "CardBenefitModel",
    "CategoryModel",
    "CreditCardModel",
    "RecommendationModel",
    "UserSpendingModel",
]
