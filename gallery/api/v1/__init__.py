"""API routes."""

from fastapi import APIRouter

from gallery.api.v1 import auth, health, items, upload

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(items.router, prefix="/items", tags=["items"])
router.include_router(upload.router, prefix="/upload", tags=["upload"])
