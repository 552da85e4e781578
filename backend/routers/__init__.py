"""API router initializers."""

from fastapi import APIRouter


def get_api_router() -> APIRouter:
    """Construct and return the API router."""

    from backend.routers.dispatch import router as dispatch_router

    api_router = APIRouter()
    api_router.include_router(dispatch_router, tags=["agent"])
    return api_router
