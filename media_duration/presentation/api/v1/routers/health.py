"""
Health check API endpoints
"""

from fastapi import APIRouter, Request

from media_duration.core.monitoring import SystemHealth

router = APIRouter(tags=["health"])


@router.get("/health", response_model=SystemHealth)
async def health_check(request: Request):
    """
    Health check endpoint that returns system status, metrics and ffprobe availability
    """
    return request.app.state.health_checker.get_system_health()


@router.get("/")
async def root():
    """
    Root endpoint
    """
    return {"message": "Media Duration API is running", "status": "healthy"}
