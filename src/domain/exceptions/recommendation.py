"""Recommendation-related domain exceptions."""

from .base import DomainException


class InvalidRecommendationRequestException(DomainException):
    """Raised when a recommendation request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_RECOMMENDATION_REQUEST",
        )


class DependencyException(DomainException):
    """
    Raised when a store the engine reads from is unavailable or
    returns an integrity error.

    Raised before any persistence mutation; nothing was written.
    """

    def __init__(self, store: str, message: str):
        super().__init__(
            message=f"{store} store unavailable: {message}",
            code="DEPENDENCY_UNAVAILABLE",
        )
        self.store = store


class PersistenceException(DomainException):
    """
    Raised when replacing a user's recommendation set fails.

    The replace transaction was rolled back, so the previously stored
    set is still the authoritative one.
    """

    def __init__(self, message: str, user_id: int | None = None):
        super().__init__(
            message=f"Failed to save recommendations: {message}",
            code="RECOMMENDATION_PERSISTENCE_FAILED",
        )
        self.user_id = user_id
