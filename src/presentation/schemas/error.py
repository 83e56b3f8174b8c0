"""Error body returned by every exception handler."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponseSchema(BaseModel):
    """Body of 4xx/5xx responses raised from domain exceptions."""

    error: str = Field(
        ...,
        description=(
            "Stable error code: INVALID_RECOMMENDATION_REQUEST, "
            "DEPENDENCY_UNAVAILABLE, RECOMMENDATION_PERSISTENCE_FAILED "
            "or INTERNAL_ERROR"
        ),
        examples=["DEPENDENCY_UNAVAILABLE"],
    )
    message: str = Field(
        ...,
        description="Message safe to show to the user",
        examples=["Recommendations could not be generated. Please try again later."],
    )
    request_id: str | None = Field(
        None,
        description="Request id of the failed request, from X-Request-ID or generated",
        examples=["5f0c6a52-1c1e-4d7b-9f55-0f3e7a2f8f11"],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error": "RECOMMENDATION_PERSISTENCE_FAILED",
                    "message": (
                        "Recommendations were computed but could not be saved. "
                        "Previously saved recommendations are unchanged."
                    ),
                    "request_id": "5f0c6a52-1c1e-4d7b-9f55-0f3e7a2f8f11",
                },
                {
                    "error": "INVALID_RECOMMENDATION_REQUEST",
                    "message": "user_id must be positive",
                    "request_id": None,
                },
            ]
        }
    )
