"""API routes."""

from fastapi import APIRouter

from incident_desk.api import auth, boards, health, incidents

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(boards.router, prefix="/test", tags=["boards"])
router.include_router(incidents.router, prefix="/incidents", tags=["incidents"])
