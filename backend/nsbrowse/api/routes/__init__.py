"""API route registration."""

from fastapi import APIRouter

from nsbrowse.api.routes import browse, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(browse.router, prefix="/browse", tags=["browse"])
