"""
Fixtures for unit tests.

Provides in-memory implementations of the repository ports so the
recommendation service can be exercised without a database.
"""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import Dict, List, Optional

import pytest

from src.core.locks import UserLockRegistry
from src.domain.entities import (
    BenefitRule,
    Card,
    Category,
    Recommendation,
    SpendingRecord,
)
from src.domain.exceptions import DependencyException, PersistenceException
from src.domain.interfaces import (
    CardCatalogRepository,
    RecommendationRepository,
    SpendingRepository,
)


DINING = Category(id=1, name="Dining")
GROCERIES = Category(id=2, name="Groceries")
TRAVEL = Category(id=3, name="Travel")


def make_card(
    card_id: int,
    annual_fee: float = 0.0,
    benefits: Optional[List[BenefitRule]] = None,
    name: str = "",
) -> Card:
    """Helper to create a card with the given benefit rules."""
    return Card(
        id=card_id,
        name=name or f"Card {card_id}",
        bank="Test Bank",
        annual_fee=annual_fee,
        benefits=benefits or [],
    )


def make_rule(card_id: int, category_id: int, **rates) -> BenefitRule:
    """Helper to create a benefit rule; rates/cap/min_spend as keywords."""
    return BenefitRule(card_id=card_id, category_id=category_id, **rates)


def make_spending(user_id: int, category_id: int, amount: float, month: int = 1) -> SpendingRecord:
    return SpendingRecord(
        user_id=user_id,
        category_id=category_id,
        amount=amount,
        month=month,
        year=2024,
    )


# =============================================================================
# In-memory repositories
# =============================================================================

class InMemorySpendingRepository(SpendingRepository):
    """Spending store backed by a list; can be told to fail."""

    def __init__(self, records: Optional[List[SpendingRecord]] = None, fail: bool = False):
        self.records = list(records or [])
        self.fail = fail
        self.call_count = 0

    async def list_by_user(self, user_id: int) -> List[SpendingRecord]:
        self.call_count += 1
        if self.fail:
            raise DependencyException("spending", "connection refused")
        return [r for r in self.records if r.user_id == user_id]


class InMemoryCardCatalogRepository(CardCatalogRepository):
    """Card catalog backed by lists; inactive cards are filtered out."""

    def __init__(
        self,
        cards: Optional[List[Card]] = None,
        categories: Optional[List[Category]] = None,
        fail: bool = False,
    ):
        self.cards = list(cards or [])
        self.categories = {c.id: c for c in (categories or [DINING, GROCERIES, TRAVEL])}
        self.fail = fail

    async def list_active_cards(self) -> List[Card]:
        if self.fail:
            raise DependencyException("card catalog", "connection refused")
        return [c for c in self.cards if c.is_active]

    async def get_category(self, category_id: int) -> Optional[Category]:
        if self.fail:
            raise DependencyException("category", "connection refused")
        return self.categories.get(category_id)


class InMemoryRecommendationRepository(RecommendationRepository):
    """
    Recommendation store with snapshot/restore transactions.

    Set `fail_on_insert` to the 1-based insert call that should fail, and
    `yield_on_write` to hand control back to the event loop on every write
    (used to provoke interleaving between concurrent runs).
    """

    def __init__(
        self,
        fail_on_insert: Optional[int] = None,
        yield_on_write: bool = False,
    ):
        self.stored: Dict[int, List[Recommendation]] = {}
        self.fail_on_insert = fail_on_insert
        self.yield_on_write = yield_on_write
        self.insert_calls = 0
        self.transactions_opened = 0
        self.commits = 0
        self.rollbacks = 0
        self._next_id = 1

    @asynccontextmanager
    async def transaction(self):
        self.transactions_opened += 1
        backup = {user_id: list(rows) for user_id, rows in self.stored.items()}
        try:
            yield
        except Exception:
            self.stored = backup
            self.rollbacks += 1
            raise
        self.commits += 1

    async def delete_all_for_user(self, user_id: int) -> int:
        if self.yield_on_write:
            await asyncio.sleep(0)
        deleted = len(self.stored.get(user_id, []))
        self.stored[user_id] = []
        return deleted

    async def insert(self, recommendation: Recommendation) -> Recommendation:
        self.insert_calls += 1
        if self.yield_on_write:
            await asyncio.sleep(0)
        if self.fail_on_insert is not None and self.insert_calls == self.fail_on_insert:
            raise PersistenceException("simulated insert failure", user_id=recommendation.user_id)

        saved = replace(recommendation, id=self._next_id)
        self._next_id += 1
        self.stored.setdefault(recommendation.user_id, []).append(saved)
        return saved

    async def list_by_user(self, user_id: int) -> List[Recommendation]:
        rows = self.stored.get(user_id, [])
        return sorted(rows, key=lambda r: (-r.score, r.id))

    async def list_by_user_and_category(self, user_id: int, category_id: int) -> List[Recommendation]:
        rows = await self.list_by_user(user_id)
        return [r for r in rows if r.category_id == category_id]


def persisted_tuples(repo: InMemoryRecommendationRepository, user_id: int) -> list:
    """(card_id, category_id, score, estimated_reward) of a user's stored rows."""
    return sorted(
        (r.card_id, r.category_id, r.score, r.estimated_reward)
        for r in repo.stored.get(user_id, [])
    )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def user_locks() -> UserLockRegistry:
    """A fresh lock registry per test."""
    return UserLockRegistry()


@pytest.fixture
def dining_card() -> Card:
    """Cashback card paying 6% on Dining up to $500 spend, 2% on Groceries."""
    return make_card(
        1,
        benefits=[
            make_rule(1, DINING.id, cashback_rate=6.0, cap=500.0),
            make_rule(1, GROCERIES.id, cashback_rate=2.0),
        ],
    )


@pytest.fixture
def travel_card() -> Card:
    """Fee card earning miles on Travel and points on Dining."""
    return make_card(
        2,
        annual_fee=95.0,
        benefits=[
            make_rule(2, TRAVEL.id, miles_rate=3.0),
            make_rule(2, DINING.id, points_rate=2.0),
        ],
    )
