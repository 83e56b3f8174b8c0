from fastapi import APIRouter

from .recommendation import recommendation_router
from .health import health_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(recommendation_router, tags=["Recommendations"])
