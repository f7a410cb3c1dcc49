"""API router configuration."""

from fastapi import APIRouter

from src.modules.youtube.interfaces.router import router as youtube_router

api_router = APIRouter()

# Guild YouTube feed configuration
api_router.include_router(youtube_router)
