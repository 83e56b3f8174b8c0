"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .recommendation import (
    DependencyException,
    InvalidRecommendationRequestException,
    PersistenceException,
)

__all__ = [
    "DomainException",
    "DependencyException",
    "InvalidRecommendationRequestException",
    "PersistenceException",
]
