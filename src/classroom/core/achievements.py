"""Achievement catalog and awards.

Achievements are granted explicitly (seed data or ``grant``). The
``criteria`` stored on each achievement describe the goal for display only;
nothing here evaluates them against user activity.
"""

from __future__ import annotations

import structlog

from classroom.core.errors import NotFoundError
from classroom.core.models import Achievement, UserAchievement
from classroom.core.store import EntityStore, Table

logger = structlog.get_logger(__name__)


class AchievementService:
    """Catalog lookups and per-user awards."""

    def __init__(self, store: EntityStore, allow_duplicates: bool = False):
        self.store = store
        self.allow_duplicates = allow_duplicates

    def all_achievements(self) -> list[Achievement]:
        return self.store.list(Table.ACHIEVEMENTS)

    def get_achievement(self, achievement_id: int) -> Achievement | None:
        return self.store.get(Table.ACHIEVEMENTS, achievement_id)

    def earned_by_user(self, user_id: int) -> list[UserAchievement]:
        """Awards of a user in the order they were granted."""
        return self.store.list(Table.USER_ACHIEVEMENTS, lambda ua: ua.user_id == user_id)

    def recent_for_user(self, user_id: int, limit: int | None = None) -> list[UserAchievement]:
        """Awards of a user, newest first."""
        earned = list(reversed(self.earned_by_user(user_id)))
        # ISO timestamps sort chronologically; reversal keeps newest-first for equal stamps
        earned.sort(key=lambda ua: ua.earned_at, reverse=True)
        if limit is not None:
            return earned[:limit]
        return earned

    def grant(self, user_id: int, achievement_id: int) -> UserAchievement:
        """Award an achievement to a user.

        When duplicates are not allowed, granting an achievement the user
        already holds returns the existing award.

        Raises:
            NotFoundError: If the user or the achievement does not exist
        """
        if self.store.get(Table.USERS, user_id) is None:
            raise NotFoundError("User", user_id)
        if self.get_achievement(achievement_id) is None:
            raise NotFoundError("Achievement", achievement_id)

        if not self.allow_duplicates:
            existing = self.store.find(
                Table.USER_ACHIEVEMENTS,
                lambda ua: ua.user_id == user_id and ua.achievement_id == achievement_id,
            )
            if existing is not None:
                logger.debug(
                    "achievement_already_granted",
                    user_id=user_id,
                    achievement_id=achievement_id,
                )
                return existing

        award = self.store.create(
            Table.USER_ACHIEVEMENTS,
            UserAchievement(user_id=user_id, achievement_id=achievement_id),
        )
        logger.info(
            "achievement_granted",
            user_id=user_id,
            achievement_id=achievement_id,
            award_id=award.id,
        )
        return award
