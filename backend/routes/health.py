"""Health check route."""

from datetime import datetime, timezone

from fastapi import APIRouter

from config import settings

router = APIRouter()


@router.get("/health")
async def health() -> dict:
    """Lightweight liveness check — no cache or generator calls."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "forex-news-api",
        "commit": settings.git_sha,
    }
