"""Recommendation service - orchestrates the recommendation generation use case."""

from typing import Dict, List

import structlog

from src.core.locks import UserLockRegistry
from src.core.metrics import (
    record_generation_failure,
    record_generation_success,
    track_generation_latency,
)
from src.domain.entities import Card, Recommendation, RecommendationCandidate
from src.domain.exceptions import (
    DependencyException,
    InvalidRecommendationRequestException,
    PersistenceException,
)
from src.domain.interfaces import (
    CardCatalogRepository,
    RecommendationRepository,
    SpendingRepository,
)
from src.service.rewards import (
    CatalogSnapshot,
    RewardSettings,
    aggregate_spending,
    generate_candidates,
    rank_candidates,
    reward_settings,
)

logger = structlog.get_logger(__name__)


class RecommendationService:
    """
    Application service for generating card recommendations.

    Loads a user's spending and the active card catalog, runs the rewards
    engine, and replaces the user's stored recommendation set atomically.
    """

    def __init__(
        self,
        spending_repository: SpendingRepository,
        card_repository: CardCatalogRepository,
        recommendation_repository: RecommendationRepository,
        user_locks: UserLockRegistry,
        settings: RewardSettings = reward_settings,
    ):
        self._spending_repo = spending_repository
        self._card_repo = card_repository
        self._recommendation_repo = recommendation_repository
        self._user_locks = user_locks
        self._settings = settings

    async def generate(self, user_id: int) -> List[RecommendationCandidate]:
        """
        Generate, persist and return a user's top recommendations.

        Args:
            user_id: The user's identifier

        Returns:
            Up to max_recommendations candidates, best first. An unknown
            user or a user without spending gets an empty list.

        Raises:
            InvalidRecommendationRequestException: If user_id is not positive
            DependencyException: If spending or catalog data cannot be loaded;
                nothing was written
            PersistenceException: If the replace transaction failed; the
                previously stored set is unchanged
        """
        if user_id <= 0:
            raise InvalidRecommendationRequestException("user_id must be positive")

        log = logger.bind(user_id=user_id)
        log.info("recommendations_requested")

        with track_generation_latency():
            try:
                records = await self._spending_repo.list_by_user(user_id)
                cards = await self._card_repo.list_active_cards()
                spend_by_category = aggregate_spending(records)
                catalog = await self._build_catalog(cards, spend_by_category)
            except DependencyException as e:
                log.error("recommendation_inputs_unavailable", store=e.store, error=e.message)
                record_generation_failure("dependency_error")
                raise

            candidates = generate_candidates(spend_by_category, catalog, self._settings)
            top = rank_candidates(candidates, self._settings.max_recommendations)

            log.info(
                "recommendations_generated",
                spending_records=len(records),
                categories=len(spend_by_category),
                active_cards=len(cards),
                candidates=len(candidates),
                kept=len(top),
            )

            await self._replace(user_id, top)

        record_generation_success(
            candidate_count=len(candidates),
            persisted_count=len(top),
            top_score=top[0].score if top else None,
        )

        return top

    async def refresh(self, user_id: int) -> None:
        """Regenerate a user's stored recommendations, discarding the result."""
        await self.generate(user_id)

    async def _build_catalog(
        self,
        cards: List[Card],
        spend_by_category: Dict[int, float],
    ) -> CatalogSnapshot:
        """
        Freeze the catalog the engine evaluates against for this run.

        Only categories the user actually spends in are looked up.
        """
        categories = {}
        for category_id, total_spent in spend_by_category.items():
            if total_spent <= 0:
                continue
            category = await self._card_repo.get_category(category_id)
            if category is not None:
                categories[category_id] = category

        return CatalogSnapshot(cards=tuple(cards), categories=categories)

    async def _replace(
        self,
        user_id: int,
        candidates: List[RecommendationCandidate],
    ) -> None:
        """
        Replace the stored set of a user with `candidates`.

        Delete and inserts share one transaction and run under the user's
        lock, so concurrent runs for the same user cannot interleave.
        """
        log = logger.bind(user_id=user_id)

        async with self._user_locks.hold(user_id):
            try:
                async with self._recommendation_repo.transaction():
                    deleted = await self._recommendation_repo.delete_all_for_user(user_id)
                    for candidate in candidates:
                        await self._recommendation_repo.insert(
                            Recommendation.from_candidate(user_id, candidate)
                        )
            except PersistenceException as e:
                log.error("recommendation_replace_failed", error=e.message)
                record_generation_failure("persistence_error")
                raise

        log.info("recommendations_persisted", deleted=deleted, inserted=len(candidates))
