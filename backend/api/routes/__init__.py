"""API Routes."""

from fastapi import APIRouter

from .articles import router as articles_router
from .auth import router as auth_router
from .blog import router as blog_router
from .health import router as health_router
from .images import router as images_router
from .topics import router as topics_router

# Create main API router
api_router = APIRouter()

# Include route modules
api_router.include_router(health_router, tags=["Health"])
api_router.include_router(auth_router)
api_router.include_router(topics_router)
api_router.include_router(articles_router)
api_router.include_router(images_router)
api_router.include_router(blog_router)
