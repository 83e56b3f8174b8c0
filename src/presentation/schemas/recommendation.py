"""Recommendation-related Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CardSchema(BaseModel):
    """Schema for the card embedded in a recommendation."""

    id: int = Field(..., description="Card identifier", examples=[3])
    name: str = Field(..., description="Card name", examples=["Dining Rewards Platinum"])
    bank: str = Field(..., description="Issuing bank", examples=["Example Bank"])
    card_type: str = Field(..., description="Payment network", examples=["visa"])
    annual_fee: float = Field(
        ...,
        ge=0,
        description="Annual fee in dollars",
        examples=[120.0],
    )
    description: str = Field("", description="Marketing description")
    image_url: str = Field("", description="Card artwork URL")
    welcome_bonus: str = Field("", description="Welcome bonus terms")
    is_active: bool = Field(True, description="Whether the card is offered")


class CategorySchema(BaseModel):
    """Schema for the category embedded in a recommendation."""

    id: int = Field(..., description="Category identifier", examples=[1])
    name: str = Field(..., description="Category name", examples=["Dining"])
    description: str = Field("", description="Category description")
    icon: str = Field("", description="Category icon")


class RecommendationSchema(BaseModel):
    """Schema for a single recommendation."""

    id: Optional[int] = Field(
        None,
        description="Stored recommendation id (null in a generate response)",
    )
    card: CardSchema
    category: CategorySchema
    score: float = Field(
        ...,
        ge=0,
        le=100,
        description="Ranking score (0-100, higher is better); not a currency amount",
        examples=[100.0],
    )
    estimated_reward: float = Field(
        ...,
        ge=0,
        description="Expected monthly reward in dollars",
        examples=[30.0],
    )
    reason: str = Field(
        ...,
        description="Why this card is recommended for this category",
        examples=[
            "Earn 6.00% on this category. Expected monthly reward: $30.00, "
            "Net annual benefit: $360.00"
        ],
    )


class RecommendationListResponseSchema(BaseModel):
    """Schema for GET /api/v1/recommendations/users/{user_id} response."""

    recommendations: list[RecommendationSchema] = Field(
        ...,
        description="Recommendations, best first",
    )


class GenerateRecommendationsResponseSchema(BaseModel):
    """Schema for POST /api/v1/recommendations/users/{user_id}/generate response."""

    message: str = Field(
        "Recommendations generated successfully",
        description="Outcome message",
    )
    recommendations: list[RecommendationSchema] = Field(
        ...,
        description="Top recommendations of this run, best first",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "message": "Recommendations generated successfully",
                    "recommendations": [
                        {
                            "id": None,
                            "card": {
                                "id": 3,
                                "name": "Dining Rewards Platinum",
                                "bank": "Example Bank",
                                "card_type": "visa",
                                "annual_fee": 0.0,
                                "description": "",
                                "image_url": "",
                                "welcome_bonus": "",
                                "is_active": True,
                            },
                            "category": {
                                "id": 1,
                                "name": "Dining",
                                "description": "",
                                "icon": "",
                            },
                            "score": 100.0,
                            "estimated_reward": 30.0,
                            "reason": (
                                "Earn 6.00% on this category. Expected monthly reward: "
                                "$30.00, Net annual benefit: $360.00"
                            ),
                        }
                    ],
                }
            ]
        }
    )
