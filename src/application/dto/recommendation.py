"""Data transfer objects for recommendation operations."""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class CardDTO:
    """Card details embedded in a recommendation."""

    id: int
    name: str
    bank: str
    card_type: str
    annual_fee: float
    description: str
    image_url: str
    welcome_bonus: str
    is_active: bool

    @classmethod
    def from_entity(cls, card) -> "CardDTO":
        return cls(
            id=card.id,
            name=card.name,
            bank=card.bank,
            card_type=card.card_type.value,
            annual_fee=card.annual_fee,
            description=card.description,
            image_url=card.image_url,
            welcome_bonus=card.welcome_bonus,
            is_active=card.is_active,
        )


@dataclass(frozen=True)
class CategoryDTO:
    """Category details embedded in a recommendation."""

    id: int
    name: str
    description: str
    icon: str

    @classmethod
    def from_entity(cls, category) -> "CategoryDTO":
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
            icon=category.icon,
        )


@dataclass(frozen=True)
class RecommendationDTO:
    """A single recommendation in the response shape."""

    id: Optional[int]
    card: CardDTO
    category: CategoryDTO
    score: float
    estimated_reward: float
    reason: str

    @classmethod
    def from_candidate(cls, candidate) -> "RecommendationDTO":
        """Build from a freshly generated candidate (no storage id)."""
        return cls(
            id=None,
            card=CardDTO.from_entity(candidate.card),
            category=CategoryDTO.from_entity(candidate.category),
            score=candidate.score,
            estimated_reward=candidate.estimated_reward,
            reason=candidate.reason,
        )

    @classmethod
    def from_entity(cls, recommendation) -> "RecommendationDTO":
        """Build from a persisted recommendation."""
        return cls(
            id=recommendation.id,
            card=CardDTO.from_entity(recommendation.card),
            category=CategoryDTO.from_entity(recommendation.category),
            score=recommendation.score,
            estimated_reward=recommendation.estimated_reward,
            reason=recommendation.reason,
        )


@dataclass(frozen=True)
class RecommendationListResponse:
    """Ordered recommendations of a user, best first."""

    user_id: int
    recommendations: List[RecommendationDTO]

    @classmethod
    def from_candidates(cls, user_id: int, candidates: list) -> "RecommendationListResponse":
        return cls(
            user_id=user_id,
            recommendations=[RecommendationDTO.from_candidate(c) for c in candidates],
        )

    @classmethod
    def from_entities(cls, user_id: int, recommendations: list) -> "RecommendationListResponse":
        return cls(
            user_id=user_id,
            recommendations=[RecommendationDTO.from_entity(r) for r in recommendations],
        )
