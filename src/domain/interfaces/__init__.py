"""
Domain Interfaces (Ports)
"""

from .repositories import (
    CardCatalogRepository,
    RecommendationRepository,
    SpendingRepository,
)

__all__ = [
    "CardCatalogRepository",
    "RecommendationRepository",
    "SpendingRepository",
]
