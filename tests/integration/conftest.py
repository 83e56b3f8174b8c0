"""
Fixtures for integration tests.

Provides:
- In-memory database seeded with a small card catalog
- Test client for FastAPI app wired to the in-memory database
- Repository variants that fail on demand
"""

from typing import AsyncGenerator, List, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.main import app
from src.core.dependencies import (
    get_card_repository,
    get_recommendation_repository,
    get_spending_repository,
)
from src.domain.entities import Recommendation, SpendingRecord
from src.domain.interfaces import SpendingRepository
from src.infrastructure.database import (
    Base,
    CardBenefitModel,
    CategoryModel,
    CreditCardModel,
    UserSpendingModel,
)
from src.infrastructure.repositories import (
    PostgresCardCatalogRepository,
    PostgresRecommendationRepository,
    PostgresSpendingRepository,
)


# =============================================================================
# Test Data
# =============================================================================

DINING_ID = 1
GROCERIES_ID = 2
TRAVEL_ID = 3

CASHBACK_CARD_ID = 1
TRAVEL_CARD_ID = 2
RETIRED_CARD_ID = 3

USER_WITH_SPENDING = 1
USER_WITHOUT_SPENDING = 2

DINING_REASON = (
    "Earn 6.00% on this category. Expected monthly reward: $30.00, "
    "Net annual benefit: $360.00"
)


async def seed_catalog(session: AsyncSession) -> None:
    """
    Seed categories, cards and spending.

    User 1 spends $600 on Dining (over two months), $400 on Groceries and
    nothing on Travel. The retired card would win Dining if it were active.
    """
    session.add_all([
        CategoryModel(id=DINING_ID, name="Dining", icon="utensils"),
        CategoryModel(id=GROCERIES_ID, name="Groceries", icon="cart"),
        CategoryModel(id=TRAVEL_ID, name="Travel", icon="plane"),
    ])
    session.add_all([
        CreditCardModel(
            id=CASHBACK_CARD_ID,
            name="Everyday Cashback",
            bank="First Bank",
            card_type="visa",
            annual_fee=0.0,
        ),
        CreditCardModel(
            id=TRAVEL_CARD_ID,
            name="Sky Miles Premier",
            bank="Second Bank",
            card_type="amex",
            annual_fee=95.0,
        ),
        CreditCardModel(
            id=RETIRED_CARD_ID,
            name="Legacy Dining",
            bank="First Bank",
            card_type="mastercard",
            annual_fee=0.0,
            is_active=False,
        ),
    ])
    await session.flush()

    session.add_all([
        CardBenefitModel(
            card_id=CASHBACK_CARD_ID,
            category_id=DINING_ID,
            cashback_rate=6.0,
            cap=500.0,
        ),
        CardBenefitModel(card_id=CASHBACK_CARD_ID, category_id=GROCERIES_ID, cashback_rate=2.0),
        CardBenefitModel(card_id=TRAVEL_CARD_ID, category_id=TRAVEL_ID, miles_rate=3.0),
        CardBenefitModel(card_id=TRAVEL_CARD_ID, category_id=DINING_ID, points_rate=2.0),
        CardBenefitModel(card_id=RETIRED_CARD_ID, category_id=DINING_ID, cashback_rate=10.0),
    ])
    session.add_all([
        UserSpendingModel(
            user_id=USER_WITH_SPENDING, category_id=DINING_ID, amount=250.0, month=1, year=2024
        ),
        UserSpendingModel(
            user_id=USER_WITH_SPENDING, category_id=DINING_ID, amount=350.0, month=2, year=2024
        ),
        UserSpendingModel(
            user_id=USER_WITH_SPENDING, category_id=GROCERIES_ID, amount=400.0, month=1, year=2024
        ),
        UserSpendingModel(
            user_id=USER_WITH_SPENDING, category_id=TRAVEL_ID, amount=0.0, month=1, year=2024
        ),
    ])
    await session.commit()
    session.expunge_all()


async def add_spending(
    session: AsyncSession,
    user_id: int,
    category_id: int,
    amount: float,
    month: int = 3,
) -> None:
    """Record additional spending for a user."""
    session.add(
        UserSpendingModel(
            user_id=user_id,
            category_id=category_id,
            amount=amount,
            month=month,
            year=2024,
        )
    )
    await session.commit()


# =============================================================================
# Repository Variants
# =============================================================================

class FlakyRecommendationRepository(PostgresRecommendationRepository):
    """
    Recommendation repository whose Nth insert raises a database error.

    Disarmed (fail_on_insert=None) it behaves like the real repository.
    """

    def __init__(self, session: AsyncSession, fail_on_insert: Optional[int] = None):
        super().__init__(session)
        self.fail_on_insert = fail_on_insert
        self.insert_calls = 0

    def arm(self, fail_on_insert: int) -> None:
        """Fail the `fail_on_insert`-th insert from now on (1-based)."""
        self.insert_calls = 0
        self.fail_on_insert = fail_on_insert

    async def insert(self, recommendation: Recommendation) -> Recommendation:
        self.insert_calls += 1
        if self.fail_on_insert is not None and self.insert_calls == self.fail_on_insert:
            raise OperationalError(
                "INSERT INTO recommendations",
                {},
                Exception("database is locked"),
            )
        return await super().insert(recommendation)


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a seeded test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        await seed_catalog(session)
        yield session


@pytest_asyncio.fixture
async def broken_session() -> AsyncGenerator[AsyncSession, None]:
    """A session on a database without any tables; every query fails."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async_session = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def flaky_recommendation_repository(test_session: AsyncSession) -> FlakyRecommendationRepository:
    """Recommendation repository shared across requests of one test."""
    return FlakyRecommendationRepository(test_session)


# =============================================================================
# App Client Fixtures
# =============================================================================

def override_repositories(spending_repo, card_repo, recommendation_repo) -> None:
    """Point the app's repository dependencies at the given instances."""

    async def override_get_spending_repository():
        return spending_repo

    async def override_get_card_repository():
        return card_repo

    async def override_get_recommendation_repository():
        return recommendation_repo

    app.dependency_overrides[get_spending_repository] = override_get_spending_repository
    app.dependency_overrides[get_card_repository] = override_get_card_repository
    app.dependency_overrides[get_recommendation_repository] = (
        override_get_recommendation_repository
    )


@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    flaky_recommendation_repository: FlakyRecommendationRepository,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client backed by the seeded in-memory database.

    The recommendation repository is the disarmed flaky variant, so tests
    can make a later request fail by arming it.
    """
    override_repositories(
        PostgresSpendingRepository(test_session),
        PostgresCardCatalogRepository(test_session),
        flaky_recommendation_repository,
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client_with_failing_spending(
    test_session: AsyncSession,
    broken_session: AsyncSession,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client whose spending store always fails."""
    override_repositories(
        PostgresSpendingRepository(broken_session),
        PostgresCardCatalogRepository(test_session),
        PostgresRecommendationRepository(test_session),
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client_with_failing_catalog(
    test_session: AsyncSession,
    broken_session: AsyncSession,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client whose card catalog always fails."""
    override_repositories(
        PostgresSpendingRepository(test_session),
        PostgresCardCatalogRepository(broken_session),
        PostgresRecommendationRepository(test_session),
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


class CrashingSpendingRepository(SpendingRepository):
    """Spending store that fails with an error outside the domain taxonomy."""

    async def list_by_user(self, user_id: int) -> List[SpendingRecord]:
        raise RuntimeError("spending store crashed")


@pytest_asyncio.fixture
async def client_with_crashing_spending(
    test_session: AsyncSession,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client whose spending store raises an unexpected error.

    The transport returns the 500 response instead of re-raising it.
    """
    override_repositories(
        CrashingSpendingRepository(),
        PostgresCardCatalogRepository(test_session),
        PostgresRecommendationRepository(test_session),
    )

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
