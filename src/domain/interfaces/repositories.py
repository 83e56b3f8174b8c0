"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from typing import AsyncContextManager, List, Optional

from src.domain.entities import Card, Category, Recommendation, SpendingRecord


class SpendingRepository(ABC):
    """
    Abstract read access to users' spending records.

    Implementations may use PostgreSQL, in-memory storage, etc.
    """

    @abstractmethod
    async def list_by_user(self, user_id: int) -> List[SpendingRecord]:
        """
        Retrieve every spending record of a user.

        Args:
            user_id: The user's identifier

        Returns:
            All records for the user, empty if the user has none or
            does not exist

        Raises:
            DependencyException: If the store is unavailable
        """
        ...


class CardCatalogRepository(ABC):
    """Abstract read access to the card catalog."""

    @abstractmethod
    async def list_active_cards(self) -> List[Card]:
        """
        Retrieve all active cards with their benefit rules embedded.

        Raises:
            DependencyException: If the store is unavailable
        """
        ...

    @abstractmethod
    async def get_category(self, category_id: int) -> Optional[Category]:
        """
        Retrieve a category by ID.

        Returns:
            The category if found, None otherwise

        Raises:
            DependencyException: If the store is unavailable
        """
        ...


class RecommendationRepository(ABC):
    """
    Abstract repository for persisted recommendations.

    Writes are meant to run inside ``transaction()`` so that a user's
    set is replaced as a whole or not at all.
    """

    @abstractmethod
    def transaction(self) -> AsyncContextManager[None]:
        """
        Open a transactional scope.

        Commits when the block exits normally and rolls back when it
        raises; the exception is propagated.
        """
        ...

    @abstractmethod
    async def delete_all_for_user(self, user_id: int) -> int:
        """
        Delete every recommendation of a user.

        Returns:
            Number of rows deleted
        """
        ...

    @abstractmethod
    async def insert(self, recommendation: Recommendation) -> Recommendation:
        """
        Persist one recommendation.

        Returns:
            The saved recommendation with its generated id populated
        """
        ...

    @abstractmethod
    async def list_by_user(self, user_id: int) -> List[Recommendation]:
        """
        Retrieve a user's recommendations with card and category loaded.

        Returns:
            Recommendations ordered by score descending, then id
        """
        ...

    @abstractmethod
    async def list_by_user_and_category(
        self,
        user_id: int,
        category_id: int,
    ) -> List[Recommendation]:
        """
        Retrieve a user's recommendations for a single category.

        Returns:
            Recommendations ordered by score descending, then id
        """
        ...
