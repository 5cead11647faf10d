"""
Health check endpoint
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from config.settings import settings

router = APIRouter()

SERVICE_NAME = "first-interaction"
SERVICE_VERSION = "1.0.0"


@router.get("")
async def health_check() -> JSONResponse:
    """Liveness check for monitoring"""
    return JSONResponse(
        content={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": SERVICE_VERSION,
            "service": SERVICE_NAME,
            "webhook_secret_configured": bool(settings.GITHUB_WEBHOOK_SECRET),
        },
        status_code=200,
    )
