"""Pydantic schemas for API request/response validation."""

from .recommendation import (
    CardSchema,
    CategorySchema,
    GenerateRecommendationsResponseSchema,
    RecommendationListResponseSchema,
    RecommendationSchema,
)
from .error import ErrorResponseSchema

__all__ = [
    "CardSchema",
    "CategorySchema",
    "GenerateRecommendationsResponseSchema",
    "RecommendationListResponseSchema",
    "RecommendationSchema",
    "ErrorResponseSchema",
]
