"""
Reward Settings for the card recommendation engine.

Every constant used by the reward calculator and the card scorer lives
here, so the valuation of points/miles and the ranking weights can be
tuned per environment without code changes.

Environment variables use the REWARDS_ prefix:
    REWARDS_POINT_VALUE=0.01
    REWARDS_MILES_WEIGHT=12
    REWARDS_MAX_RECOMMENDATIONS=10

Usage:
    from src.service.rewards.settings import reward_settings

    # Use default settings (loaded from env)
    value = reward_settings.point_value

    # Or create custom settings for testing
    custom = RewardSettings(max_recommendations=3)
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RewardSettings(BaseSettings):
    """
    Configurable parameters for reward valuation and card scoring.

    All settings can be overridden via environment variables with REWARDS_ prefix.
    Monetary values are in currency units (dollars).
    """

    model_config = SettingsConfigDict(
        env_prefix="REWARDS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Unit Valuation ===
    point_value: float = Field(
        default=0.01,
        ge=0.0,
        description="Currency value of one reward point",
    )
    mile_value: float = Field(
        default=0.015,
        ge=0.0,
        description="Currency value of one airline mile",
    )
    months_per_year: int = Field(
        default=12,
        gt=0,
        description="Multiplier turning a monthly reward into an annual one",
    )

    # === Incentive Weights ===
    cashback_weight: float = Field(
        default=10.0,
        ge=0.0,
        description="Score bonus per cashback percentage point",
    )
    points_weight: float = Field(
        default=8.0,
        ge=0.0,
        description="Score bonus per points-rate unit",
    )
    miles_weight: float = Field(
        default=12.0,
        ge=0.0,
        description="Score bonus per miles-rate unit",
    )
    fee_penalty_ratio: float = Field(
        default=0.5,
        ge=0.0,
        description="Fraction of the annual fee subtracted from the score",
    )

    # === Score Bounds ===
    score_floor: float = Field(
        default=0.0,
        description="Lowest score a card can receive",
    )
    score_ceiling: float = Field(
        default=100.0,
        description="Highest score a card can receive",
    )

    # === Result Size ===
    max_recommendations: int = Field(
        default=10,
        ge=1,
        description="Number of top-ranked candidates returned and persisted per run",
    )

    @model_validator(mode="after")
    def validate_score_bounds(self) -> "RewardSettings":
        """Ensure the score range is not empty."""
        if self.score_floor > self.score_ceiling:
            raise ValueError(
                f"score_floor ({self.score_floor}) > score_ceiling ({self.score_ceiling})"
            )
        return self


@lru_cache
def get_reward_settings() -> RewardSettings:
    """Get cached reward settings instance."""
    return RewardSettings()


reward_settings = get_reward_settings()
