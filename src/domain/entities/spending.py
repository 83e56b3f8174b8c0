"""Spending record entity."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SpendingRecord:
    """
    Immutable record of how much a user spent in a category for a month.

    Attributes:
        user_id: Owner of the record
        category_id: Spending category
        amount: Amount spent (>= 0)
        month: Calendar month, 1-12
        year: Calendar year, 2020 or later
    """

    user_id: int
    category_id: int
    amount: float
    month: int
    year: int
    id: Optional[int] = None
