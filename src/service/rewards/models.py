"""
Data models for reward computation.

These models describe what the engine reads during a run: the unit a
benefit rule credits and the read-only catalog snapshot the generator
evaluates against.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from src.domain.entities import Card, Category


class RewardUnit(str, Enum):
    """Unit a benefit rule pays out in, in crediting priority order."""
    CASHBACK = "cashback"
    POINTS = "points"
    MILES = "miles"


@dataclass(frozen=True)
class CatalogSnapshot:
    """
    Read-only view of the card catalog for a single generation run.

    Attributes:
        cards: Active cards with their benefit rules, in catalog order
        categories: Categories the run may reference, keyed by id.
            Spend in a category missing from this mapping is ignored.
    """
    cards: Tuple[Card, ...] = ()
    categories: Dict[int, Category] = field(default_factory=dict)

    def category(self, category_id: int) -> Optional[Category]:
        return self.categories.get(category_id)
