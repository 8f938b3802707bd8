"""Achievement endpoints."""

from fastapi import APIRouter, Depends, Query, status

from classroom.core.achievements import AchievementService
from classroom.web.deps import get_achievements, get_current_user_id
from classroom.web.schemas import (
    AchievementGrant,
    AchievementResponse,
    UserAchievementResponse,
)

router = APIRouter(prefix="/api/achievements", tags=["achievements"])


@router.get("", response_model=list[AchievementResponse])
async def list_achievements(
    service: AchievementService = Depends(get_achievements),
) -> list[AchievementResponse]:
    """List the achievement catalog."""
    return [AchievementResponse(**a.to_dict()) for a in service.all_achievements()]


@router.get("/recent", response_model=list[UserAchievementResponse])
async def recent_achievements(
    limit: int | None = Query(default=None, ge=1),
    user_id: int = Depends(get_current_user_id),
    service: AchievementService = Depends(get_achievements),
) -> list[UserAchievementResponse]:
    """List achievements earned by the current user, newest first."""
    earned = service.recent_for_user(user_id, limit=limit)
    return [UserAchievementResponse(**ua.to_dict()) for ua in earned]


@router.post("/grant", response_model=UserAchievementResponse, status_code=status.HTTP_201_CREATED)
async def grant_achievement(
    grant: AchievementGrant,
    service: AchievementService = Depends(get_achievements),
) -> UserAchievementResponse:
    """Award an achievement to a user."""
    award = service.grant(grant.user_id, grant.achievement_id)
    return UserAchievementResponse(**award.to_dict())
