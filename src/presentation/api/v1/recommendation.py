"""Recommendation API endpoints."""

from dataclasses import asdict
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query

from src.application.dto import RecommendationDTO, RecommendationListResponse
from src.application.services import RecommendationQueryService, RecommendationService
from src.core.dependencies import (
    get_recommendation_query_service,
    get_recommendation_service,
)
from src.presentation.schemas import (
    ErrorResponseSchema,
    GenerateRecommendationsResponseSchema,
    RecommendationListResponseSchema,
    RecommendationSchema,
)

recommendation_router = APIRouter(
    prefix="/recommendations",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        503: {"model": ErrorResponseSchema, "description": "Catalog or spending store unavailable"},
    },
)

UserIdPath = Annotated[
    int,
    Path(ge=1, description="Identifier of the user"),
]


def _to_schema(dto: RecommendationDTO) -> RecommendationSchema:
    return RecommendationSchema(**asdict(dto))


@recommendation_router.post(
    "/users/{user_id}/generate",
    response_model=GenerateRecommendationsResponseSchema,
    status_code=200,
    summary="Generate Recommendations",
    description="""
    Recompute the user's card recommendations from their spending history
    and replace the stored set.

    Returns the top recommendations of this run, best first.
    """,
    responses={
        200: {"description": "Recommendations generated and saved"},
        500: {"model": ErrorResponseSchema, "description": "Recommendations could not be saved"},
    },
)
async def generate_recommendations(
    user_id: UserIdPath,
    recommendation_service: Annotated[
        RecommendationService,
        Depends(get_recommendation_service),
    ],
) -> GenerateRecommendationsResponseSchema:
    candidates = await recommendation_service.generate(user_id)
    response = RecommendationListResponse.from_candidates(user_id, candidates)

    return GenerateRecommendationsResponseSchema(
        message="Recommendations generated successfully",
        recommendations=[_to_schema(r) for r in response.recommendations],
    )


@recommendation_router.get(
    "/users/{user_id}",
    response_model=RecommendationListResponseSchema,
    summary="Get Recommendations",
    description="""
    Retrieve the user's stored recommendations, best first.

    Returns an empty list if none were generated yet. Pass `category_id`
    to restrict the result to one spending category.
    """,
    responses={
        200: {"description": "Recommendations retrieved successfully"},
    },
)
async def get_recommendations(
    user_id: UserIdPath,
    query_service: Annotated[
        RecommendationQueryService,
        Depends(get_recommendation_query_service),
    ],
    category_id: Annotated[
        Optional[int],
        Query(ge=1, description="Only return recommendations for this category"),
    ] = None,
) -> RecommendationListResponseSchema:
    if category_id is None:
        response = await query_service.get_existing(user_id)
    else:
        response = await query_service.get_existing_for_category(user_id, category_id)

    return RecommendationListResponseSchema(
        recommendations=[_to_schema(r) for r in response.recommendations],
    )
