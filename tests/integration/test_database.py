"""
Integration tests for the database session manager.

These tests verify:
1. Plain database URLs are rewritten to async drivers
2. Tables can be created on a fresh database
3. Request sessions commit on success and roll back on error
4. Recommendation ids are never reused after rows are deleted
"""

import pytest
from sqlalchemy import func, select

from src.infrastructure.database import (
    CategoryModel,
    CreditCardModel,
    DatabaseSessionManager,
    RecommendationModel,
    normalize_database_url,
)


class TestNormalizeDatabaseUrl:
    """Tests for normalize_database_url."""

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("postgres://u:p@db/cards", "postgresql+asyncpg://u:p@db/cards"),
            ("postgresql://u:p@db/cards", "postgresql+asyncpg://u:p@db/cards"),
            ("sqlite:///./advisor.db", "sqlite+aiosqlite:///./advisor.db"),
            ("postgresql+asyncpg://u:p@db/cards", "postgresql+asyncpg://u:p@db/cards"),
            ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
        ],
    )
    def test_rewrites_to_async_driver(self, url, expected):
        assert normalize_database_url(url) == expected


class TestDatabaseSessionManager:
    """Tests for DatabaseSessionManager against a file-backed SQLite database."""

    @pytest.fixture
    def database_url(self, tmp_path) -> str:
        return f"sqlite:///{tmp_path / 'advisor.db'}"

    @pytest.mark.asyncio
    async def test_session_requires_init(self):
        manager = DatabaseSessionManager()

        assert not manager.is_initialized
        with pytest.raises(RuntimeError):
            async with manager.session():
                pass

    @pytest.mark.asyncio
    async def test_session_commits_on_success(self, database_url: str):
        manager = DatabaseSessionManager()
        manager.init(database_url)
        await manager.create_tables()

        async with manager.session() as session:
            session.add(CategoryModel(name="Dining"))

        async with manager.session() as session:
            count = await session.scalar(select(func.count()).select_from(CategoryModel))

        assert count == 1
        await manager.close()
        assert not manager.is_initialized

    @pytest.mark.asyncio
    async def test_session_rolls_back_on_error(self, database_url: str):
        manager = DatabaseSessionManager()
        manager.init(database_url)
        await manager.create_tables()

        with pytest.raises(ValueError):
            async with manager.session() as session:
                session.add(CategoryModel(name="Travel"))
                await session.flush()
                raise ValueError("request failed")

        async with manager.session() as session:
            count = await session.scalar(select(func.count()).select_from(CategoryModel))

        assert count == 0
        await manager.close()

    @pytest.mark.asyncio
    async def test_recommendation_ids_are_not_reused(self, database_url: str):
        manager = DatabaseSessionManager()
        manager.init(database_url)
        await manager.create_tables()

        async with manager.session() as session:
            session.add(CategoryModel(name="Dining"))
            session.add(CreditCardModel(name="Everyday Cashback", bank="Acme"))
            await session.flush()
            first = RecommendationModel(user_id=1, category_id=1, card_id=1, score=90.0)
            session.add(first)
            await session.flush()
            first_id = first.id
            await session.delete(first)
            await session.flush()

            second = RecommendationModel(user_id=1, category_id=1, card_id=1, score=80.0)
            session.add(second)
            await session.flush()
            second_id = second.id

        assert second_id > first_id
        await manager.close()
