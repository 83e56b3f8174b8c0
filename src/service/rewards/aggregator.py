"""
Spending aggregation.

Collapses a user's raw spending records into one total per category.
"""

from typing import Dict, Iterable

from src.domain.entities import SpendingRecord


def aggregate_spending(records: Iterable[SpendingRecord]) -> Dict[int, float]:
    """
    Sum spending amounts per category.

    Every record contributes; no date window is applied. Categories appear
    in the order they are first seen.

    Args:
        records: Spending records of a single user

    Returns:
        Mapping of category_id to total amount spent (empty for no records)
    """
    totals: Dict[int, float] = {}
    for record in records:
        totals[record.category_id] = totals.get(record.category_id, 0.0) + record.amount
    return totals
