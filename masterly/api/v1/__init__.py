"""
API v1 routes.
"""

from fastapi import APIRouter

from masterly.api.v1 import concepts, progress, recommendation
from masterly.schemas.common import ErrorResponse, InternalErrorResponse

# Bodies written by the exception handlers in masterly.main
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    404: {"model": ErrorResponse, "description": "Unknown concept or no path"},
    500: {"model": InternalErrorResponse, "description": "Unexpected server error"},
}

router = APIRouter(responses=ERROR_RESPONSES)

router.include_router(recommendation.router, prefix="/recommendation", tags=["Recommendation"])
router.include_router(
    progress.router,
    prefix="/progress",
    tags=["Progress"],
    responses={409: {"model": ErrorResponse, "description": "Concurrent update conflict"}},
)
router.include_router(concepts.router, prefix="/concepts", tags=["Concepts"])
