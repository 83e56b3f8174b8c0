"""Recommendation entities: in-flight candidates and persisted rows."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .card import Card, Category


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RecommendationCandidate:
    """
    One (category, card) evaluation produced by a generation run.

    Attributes:
        card: The recommended card
        category: The category the card is recommended for
        score: Bounded 0-100 ranking value (not a currency amount)
        estimated_reward: Expected monthly reward in currency units
        reason: Human-readable justification, deterministic for given inputs
    """

    card: Card
    category: Category
    score: float
    estimated_reward: float
    reason: str


@dataclass
class Recommendation:
    """
    A persisted recommendation for a user.

    The full set for a user is replaced on every generation run.
    """

    user_id: int
    card: Card
    category: Category
    score: float
    estimated_reward: float
    reason: str
    id: Optional[int] = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_candidate(cls, user_id: int, candidate: RecommendationCandidate) -> "Recommendation":
        """Build the row to persist for a ranked candidate."""
        return cls(
            user_id=user_id,
            card=candidate.card,
            category=candidate.category,
            score=candidate.score,
            estimated_reward=candidate.estimated_reward,
            reason=candidate.reason,
        )

    @property
    def card_id(self) -> int:
        return self.card.id

    @property
    def category_id(self) -> int:
        return self.category.id
