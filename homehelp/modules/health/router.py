import os
import time

import psutil
from fastapi import APIRouter

from homehelp.core.config import settings

router = APIRouter(
    tags=["Health"],
    responses={404: {"description": "Not found"}},
)

# mounted at the application root, outside /api
status_router = APIRouter(tags=["Default"])


@router.get("/test")
async def test_endpoint():
    """Simple liveness check"""
    return {"message": "API is working!"}


@status_router.get("/status", summary="Service status")
async def read_status():
    """
    Service name, environment and resident memory of this worker
    """
    process = psutil.Process(os.getpid())
    return {
        "service": settings.PROJECT_NAME,
        "status": "running",
        "environment": settings.ENVIRONMENT,
        "timestamp": time.time(),
        "memory_mb": round(process.memory_info().rss / 1024 / 1024, 2),
    }
