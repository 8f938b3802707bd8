"""In-memory entity store.

Holds every table of the application as an insertion-ordered dict keyed by
integer id. Ids are assigned per table, starting at 1, and never reused.

The store does no validation of its own beyond what the entity dataclasses
perform on construction; lookups return None for absence and callers decide
whether that is an error.

Usage:
    store = EntityStore()
    course = store.create(Table.COURSES, Course(title="Fractions", subject_id=1, grade_level=5))
    store.get(Table.COURSES, course.id)
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

import structlog

from classroom.core.models import (
    Achievement,
    Course,
    Lesson,
    Quiz,
    QuizQuestion,
    QuizResult,
    Subject,
    User,
    UserAchievement,
    UserProgress,
    utc_now,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class Table(str, Enum):
    """Tables held by the store."""

    USERS = "users"
    SUBJECTS = "subjects"
    COURSES = "courses"
    LESSONS = "lessons"
    USER_PROGRESS = "user_progress"
    QUIZZES = "quizzes"
    QUIZ_QUESTIONS = "quiz_questions"
    QUIZ_RESULTS = "quiz_results"
    ACHIEVEMENTS = "achievements"
    USER_ACHIEVEMENTS = "user_achievements"


ENTITY_TYPES: dict[Table, type] = {
    Table.USERS: User,
    Table.SUBJECTS: Subject,
    Table.COURSES: Course,
    Table.LESSONS: Lesson,
    Table.USER_PROGRESS: UserProgress,
    Table.QUIZZES: Quiz,
    Table.QUIZ_QUESTIONS: QuizQuestion,
    Table.QUIZ_RESULTS: QuizResult,
    Table.ACHIEVEMENTS: Achievement,
    Table.USER_ACHIEVEMENTS: UserAchievement,
}


class EntityStore:
    """Process-local storage for all domain records."""

    def __init__(self):
        self._tables: dict[Table, dict[int, Any]] = {t: {} for t in Table}
        self._next_ids: dict[Table, int] = {t: 1 for t in Table}

    def _check_type(self, table: Table, record: Any) -> None:
        expected = ENTITY_TYPES[table]
        if not isinstance(record, expected):
            raise TypeError(
                f"Table '{table.value}' holds {expected.__name__}, got {type(record).__name__}"
            )

    def create(self, table: Table, record: T) -> T:
        """Assign the next id, stamp the entity timestamp and store the record.

        Args:
            table: Target table
            record: Entity instance (its ``id`` is overwritten)

        Returns:
            The stored record
        """
        self._check_type(table, record)

        record.id = self._next_ids[table]
        self._next_ids[table] += 1

        stamp_field = type(record).TIMESTAMP_FIELD
        if stamp_field and not getattr(record, stamp_field):
            setattr(record, stamp_field, utc_now())

        self._tables[table][record.id] = record
        logger.debug("record_created", table=table.value, record_id=record.id)
        return record

    def get(self, table: Table, record_id: int) -> Any | None:
        """Get a record by id, or None if absent."""
        return self._tables[table].get(record_id)

    def list(self, table: Table, predicate: Callable[[Any], bool] | None = None) -> list[Any]:
        """List records in insertion order, optionally filtered."""
        records = self._tables[table].values()
        if predicate is None:
            return list(records)
        return [r for r in records if predicate(r)]

    def find(self, table: Table, predicate: Callable[[Any], bool]) -> Any | None:
        """Return the first record matching the predicate, or None."""
        for record in self._tables[table].values():
            if predicate(record):
                return record
        return None

    def replace(self, table: Table, record: T) -> T:
        """Overwrite an existing record in place, keeping its id and position.

        Raises:
            KeyError: If no record with that id is stored.
        """
        self._check_type(table, record)
        if record.id not in self._tables[table]:
            raise KeyError(f"No record {record.id} in table '{table.value}'")
        self._tables[table][record.id] = record
        return record

    def count(self, table: Table) -> int:
        """Number of records in a table."""
        return len(self._tables[table])
