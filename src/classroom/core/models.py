"""Domain entities held by the entity store.

Each entity is a dataclass with an integer ``id`` assigned by the store
(0 until stored) and a ``to_dict`` for JSON serialization. Range-limited
values (grade levels, completion percentages) are checked when the record
is built so that no caller can store an out-of-range value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, ClassVar

from classroom.core.errors import ValidationError

MIN_GRADE_LEVEL = 1
MAX_GRADE_LEVEL = 12


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# CONSTRAINED VALUES
# =============================================================================


def validate_grade_level(value: int | None, allow_none: bool = False) -> int | None:
    """Check a grade level lies in 1..12.

    Raises:
        ValidationError: If the value is missing (and not allowed) or out of range.
    """
    if value is None:
        if allow_none:
            return None
        raise ValidationError("Grade level is required")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Grade level must be an integer, got {value!r}")
    if not MIN_GRADE_LEVEL <= value <= MAX_GRADE_LEVEL:
        raise ValidationError(
            f"Grade level must be between {MIN_GRADE_LEVEL} and {MAX_GRADE_LEVEL}, got {value}"
        )
    return value


def validate_percent(value: int) -> int:
    """Check a completion percentage lies in 0..100."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Percent complete must be an integer, got {value!r}")
    if not 0 <= value <= 100:
        raise ValidationError(f"Percent complete must be between 0 and 100, got {value}")
    return value


def _validate_non_negative(name: str, value: int | None) -> None:
    if value is not None and value < 0:
        raise ValidationError(f"{name} must not be negative, got {value}")


# =============================================================================
# CATALOG
# =============================================================================


@dataclass
class User:
    """A registered learner."""

    TIMESTAMP_FIELD: ClassVar[str | None] = "created_at"

    username: str
    password: str
    email: str
    full_name: str | None = None
    avatar_url: str | None = None
    grade_level: int | None = None
    preferred_language: str = "en"
    created_at: str = ""
    id: int = 0

    def __post_init__(self):
        if not self.username:
            raise ValidationError("Username is required")
        if not self.email:
            raise ValidationError("Email is required")
        validate_grade_level(self.grade_level, allow_none=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary. The password is never included."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "full_name": self.full_name,
            "avatar_url": self.avatar_url,
            "grade_level": self.grade_level,
            "preferred_language": self.preferred_language,
            "created_at": self.created_at,
        }


@dataclass
class Subject:
    """A static catalog subject (Mathematics, Science, ...)."""

    TIMESTAMP_FIELD: ClassVar[str | None] = None

    name: str
    code: str
    icon_name: str | None = None
    color_class: str | None = None
    id: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "code": self.code,
            "icon_name": self.icon_name,
            "color_class": self.color_class,
        }


@dataclass
class Course:
    """A course within one subject, targeted at one grade level."""

    TIMESTAMP_FIELD: ClassVar[str | None] = "created_at"

    title: str
    subject_id: int
    grade_level: int
    description: str | None = None
    image_url: str | None = None
    total_lessons: int = 0
    duration_minutes: int | None = None
    featured: bool = False
    created_at: str = ""
    id: int = 0

    def __post_init__(self):
        validate_grade_level(self.grade_level)
        _validate_non_negative("Total lessons", self.total_lessons)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "subject_id": self.subject_id,
            "grade_level": self.grade_level,
            "image_url": self.image_url,
            "total_lessons": self.total_lessons,
            "duration_minutes": self.duration_minutes,
            "featured": self.featured,
            "created_at": self.created_at,
        }


@dataclass
class Lesson:
    """A lesson of a course. Media URLs are opaque strings."""

    TIMESTAMP_FIELD: ClassVar[str | None] = None

    title: str
    course_id: int
    order: int
    description: str | None = None
    video_url: str | None = None
    pdf_url: str | None = None
    duration_minutes: int | None = None
    id: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "course_id": self.course_id,
            "video_url": self.video_url,
            "pdf_url": self.pdf_url,
            "order": self.order,
            "duration_minutes": self.duration_minutes,
        }


# =============================================================================
# PROGRESS
# =============================================================================


@dataclass
class UserProgress:
    """Current progress of one user in one course."""

    TIMESTAMP_FIELD: ClassVar[str | None] = "last_accessed"

    user_id: int
    course_id: int
    lessons_completed: int = 0
    last_lesson_id: int | None = None
    completed: bool = False
    percent_complete: int = 0
    last_accessed: str = ""
    id: int = 0

    def __post_init__(self):
        validate_percent(self.percent_complete)
        _validate_non_negative("Lessons completed", self.lessons_completed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "course_id": self.course_id,
            "lessons_completed": self.lessons_completed,
            "last_lesson_id": self.last_lesson_id,
            "completed": self.completed,
            "percent_complete": self.percent_complete,
            "last_accessed": self.last_accessed,
        }


# =============================================================================
# QUIZZES
# =============================================================================


@dataclass
class Quiz:
    """A quiz for one subject and grade level.

    ``question_count`` is the declared size shown to learners; it is not
    checked against the questions actually stored.
    """

    TIMESTAMP_FIELD: ClassVar[str | None] = "created_at"

    title: str
    subject_id: int
    grade_level: int
    description: str | None = None
    duration_minutes: int = 15
    question_count: int = 0
    created_at: str = ""
    id: int = 0

    def __post_init__(self):
        validate_grade_level(self.grade_level)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "subject_id": self.subject_id,
            "grade_level": self.grade_level,
            "duration_minutes": self.duration_minutes,
            "question_count": self.question_count,
            "created_at": self.created_at,
        }


@dataclass
class QuizOption:
    """One answer option of a question, e.g. ``QuizOption("b", "3/4")``."""

    id: str
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text}


def _coerce_option(value: Any) -> QuizOption:
    """Accept a QuizOption or an ``{"id": ..., "text": ...}`` mapping."""
    if isinstance(value, QuizOption):
        return value
    try:
        return QuizOption(id=str(value["id"]), text=value["text"])
    except (KeyError, TypeError) as e:
        raise ValidationError(f"Quiz option needs an id and a text: {value!r}") from e


@dataclass
class QuizQuestion:
    """A multiple-choice question.

    ``correct_option_id`` holds the id of the correct option (a string such
    as ``"b"``), not a positional index.
    """

    TIMESTAMP_FIELD: ClassVar[str | None] = None

    quiz_id: int
    question_text: str
    options: list[QuizOption]
    correct_option_id: str
    order: int
    explanation: str | None = None
    id: int = 0

    def __post_init__(self):
        self.options = [_coerce_option(o) for o in self.options]
        option_ids = [o.id for o in self.options]
        if len(set(option_ids)) != len(option_ids):
            raise ValidationError(f"Duplicate option ids in question: {option_ids}")
        if self.correct_option_id not in option_ids:
            raise ValidationError(
                f"Correct option '{self.correct_option_id}' is not one of {option_ids}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "quiz_id": self.quiz_id,
            "question_text": self.question_text,
            "options": [o.to_dict() for o in self.options],
            "correct_option_id": self.correct_option_id,
            "explanation": self.explanation,
            "order": self.order,
        }


@dataclass
class QuizResult:
    """One graded submission. Results are history: never updated."""

    TIMESTAMP_FIELD: ClassVar[str | None] = "completed_at"

    user_id: int
    quiz_id: int
    score: int
    incorrect_questions: list[int] = field(default_factory=list)
    time_taken_seconds: int = 0
    completed_at: str = ""
    id: int = 0

    def __post_init__(self):
        validate_percent(self.score)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "quiz_id": self.quiz_id,
            "score": self.score,
            "incorrect_questions": list(self.incorrect_questions),
            "time_taken_seconds": self.time_taken_seconds,
            "completed_at": self.completed_at,
        }


# =============================================================================
# ACHIEVEMENTS
# =============================================================================


@dataclass
class Achievement:
    """A catalog achievement. ``criteria`` is descriptive only."""

    TIMESTAMP_FIELD: ClassVar[str | None] = None

    title: str
    description: str
    icon_name: str
    color_class: str | None = None
    criteria: dict[str, Any] = field(default_factory=dict)
    id: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "icon_name": self.icon_name,
            "color_class": self.color_class,
            "criteria": dict(self.criteria),
        }


@dataclass
class UserAchievement:
    """Record that a user earned an achievement."""

    TIMESTAMP_FIELD: ClassVar[str | None] = "earned_at"

    user_id: int
    achievement_id: int
    earned_at: str = ""
    id: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "achievement_id": self.achievement_id,
            "earned_at": self.earned_at,
        }
