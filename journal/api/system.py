"""System API: health check and service info."""

from fastapi import APIRouter

from journal.utils.constants import CURRENT_STREAK_WINDOW, STREAK_TYPES, VALID_TIMEFRAMES

router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/health")
def health_check():
    return {"status": "ok"}


@router.get("/info")
def service_info():
    """Constants that affect how statistics are computed."""
    return {
        "currentStreakWindow": CURRENT_STREAK_WINDOW,
        "streakTypes": STREAK_TYPES,
        "timeframes": VALID_TIMEFRAMES,
    }
