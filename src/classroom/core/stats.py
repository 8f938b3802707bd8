"""Aggregate learner statistics for the profile page."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from classroom.core.progress import ProgressTracker
from classroom.core.queries import QueryService
from classroom.core.store import EntityStore


@dataclass
class UserStats:
    """Counts derived from progress and quiz history.

    Study time and streaks are not tracked yet; they are filled from
    configured placeholder values.
    """

    quizzes_completed: int
    courses_completed: int
    courses_in_progress: int
    total_lesson_time: int
    longest_streak: int
    current_streak: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "quizzes_completed": self.quizzes_completed,
            "courses_completed": self.courses_completed,
            "courses_in_progress": self.courses_in_progress,
            "total_lesson_time": self.total_lesson_time,
            "longest_streak": self.longest_streak,
            "current_streak": self.current_streak,
        }


def compute_user_stats(
    store: EntityStore,
    user_id: int,
    total_lesson_time: int = 0,
    longest_streak: int = 0,
    current_streak: int = 0,
) -> UserStats:
    """Compute stats for a user.

    A course counts as in progress when it is not completed and has a
    non-zero percentage. Every stored quiz result counts as one completed
    quiz, including retakes.
    """
    progress = ProgressTracker(store).progress_for_user(user_id)
    results = QueryService(store).results_by_user(user_id)

    return UserStats(
        quizzes_completed=len(results),
        courses_completed=sum(1 for p in progress if p.completed),
        courses_in_progress=sum(1 for p in progress if not p.completed and p.percent_complete > 0),
        total_lesson_time=total_lesson_time,
        longest_streak=longest_streak,
        current_streak=current_streak,
    )
