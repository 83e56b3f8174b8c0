"""Data Transfer Objects for application layer."""

from .recommendation import (
    CardDTO,
    CategoryDTO,
    RecommendationDTO,
    RecommendationListResponse,
)

__all__ = [
    "CardDTO",
    "CategoryDTO",
    "RecommendationDTO",
    "RecommendationListResponse",
]
