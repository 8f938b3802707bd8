"""Course progress tracking.

Keeps at most one UserProgress record per (user_id, course_id). Writes go
through ``upsert_progress``: an existing record is merged in place (same id,
refreshed ``last_accessed``), otherwise a new record is created.
"""

from __future__ import annotations

import dataclasses
from typing import Any

import structlog

from classroom.core.errors import ValidationError
from classroom.core.models import UserProgress, utc_now
from classroom.core.store import EntityStore, Table

logger = structlog.get_logger(__name__)

# Fields a caller may set through an upsert
UPDATABLE_FIELDS = frozenset(
    {"lessons_completed", "last_lesson_id", "completed", "percent_complete"}
)


class ProgressTracker:
    """Upsert and lookup of per-course progress."""

    def __init__(self, store: EntityStore):
        self.store = store

    def progress_for_course(self, user_id: int, course_id: int) -> UserProgress | None:
        """Get the progress record for a (user, course) pair, or None."""
        return self.store.find(
            Table.USER_PROGRESS,
            lambda p: p.user_id == user_id and p.course_id == course_id,
        )

    def progress_for_user(self, user_id: int) -> list[UserProgress]:
        """All progress records of a user, in creation order."""
        return self.store.list(Table.USER_PROGRESS, lambda p: p.user_id == user_id)

    def upsert_progress(self, user_id: int, course_id: int, **fields: Any) -> UserProgress:
        """Create or update the progress record for a (user, course) pair.

        Args:
            user_id: Learner id
            course_id: Course id
            **fields: Any of lessons_completed, last_lesson_id, completed,
                percent_complete. Fields left out (or None for numeric
                fields) keep their current value, or their default on insert.

        Returns:
            The stored record. Its id is stable across updates.

        Raises:
            ValidationError: On unknown fields or out-of-range values.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown progress fields: {sorted(unknown)}")

        changes = {k: v for k, v in fields.items() if v is not None or k == "last_lesson_id"}

        existing = self.progress_for_course(user_id, course_id)
        if existing is not None:
            # replace() re-runs __post_init__, so merged values are validated
            updated = dataclasses.replace(existing, last_accessed=utc_now(), **changes)
            self.store.replace(Table.USER_PROGRESS, updated)
            logger.info(
                "progress_updated",
                progress_id=updated.id,
                user_id=user_id,
                course_id=course_id,
                percent_complete=updated.percent_complete,
            )
            return updated

        progress = self.store.create(
            Table.USER_PROGRESS,
            UserProgress(user_id=user_id, course_id=course_id, **changes),
        )
        logger.info(
            "progress_created",
            progress_id=progress.id,
            user_id=user_id,
            course_id=course_id,
            percent_complete=progress.percent_complete,
        )
        return progress
