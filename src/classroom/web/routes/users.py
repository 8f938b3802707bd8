"""User endpoints."""

from fastapi import APIRouter, Depends

from classroom.config.app_config import AppConfig
from classroom.core.stats import compute_user_stats
from classroom.core.store import EntityStore
from classroom.web.deps import get_config, get_current_user_id, get_store
from classroom.web.schemas import UserStatsResponse

router = APIRouter(prefix="/api/user", tags=["users"])


@router.get("/stats", response_model=UserStatsResponse)
async def user_stats(
    user_id: int = Depends(get_current_user_id),
    store: EntityStore = Depends(get_store),
    config: AppConfig = Depends(get_config),
) -> UserStatsResponse:
    """Aggregate stats of the current user."""
    stats = compute_user_stats(
        store,
        user_id,
        total_lesson_time=config.stats.total_lesson_time,
        longest_streak=config.stats.longest_streak,
        current_streak=config.stats.current_streak,
    )
    return UserStatsResponse(**stats.to_dict())
