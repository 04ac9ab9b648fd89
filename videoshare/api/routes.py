"""
Main API router that includes all endpoint routers
"""

from fastapi import APIRouter

from videoshare.api.endpoints import admin, auth, categories, stream, theme, users, videos

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(videos.router, prefix="/videos", tags=["Videos"])
api_router.include_router(stream.router, prefix="/stream", tags=["Streaming"])
api_router.include_router(categories.router, prefix="/categories", tags=["Categories"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
api_router.include_router(theme.router, prefix="/theme", tags=["Theme"])
