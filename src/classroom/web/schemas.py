"""Pydantic schemas for the Web API.

Fields are snake_case in Python and camelCase on the wire (``gradeLevel``,
``subjectId``) to match existing clients. Requests accept either form.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from classroom.core.models import MAX_GRADE_LEVEL, MIN_GRADE_LEVEL


class ApiModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(ApiModel):
    """Plain message body, also used for errors."""

    message: str


# =============================================================================
# USER SCHEMAS
# =============================================================================


class UserCreate(ApiModel):
    """Request body for registration."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=200)
    full_name: str | None = Field(default=None, max_length=200)
    avatar_url: str | None = None
    grade_level: int | None = Field(default=None, ge=MIN_GRADE_LEVEL, le=MAX_GRADE_LEVEL)
    preferred_language: str = Field(default="en", max_length=10)


class LoginRequest(ApiModel):
    """Request body for login."""

    # Missing credentials fall through to the 401 path
    username: str = ""
    password: str = ""


class UserResponse(ApiModel):
    """A user, without the password."""

    id: int
    username: str
    email: str
    full_name: str | None = None
    avatar_url: str | None = None
    grade_level: int | None = None
    preferred_language: str = "en"
    created_at: str


# =============================================================================
# CATALOG SCHEMAS
# =============================================================================


class SubjectResponse(ApiModel):
    """A subject."""

    id: int
    name: str
    code: str
    icon_name: str | None = None
    color_class: str | None = None


class CourseResponse(ApiModel):
    """A course."""

    id: int
    title: str
    description: str | None = None
    subject_id: int
    grade_level: int
    image_url: str | None = None
    total_lessons: int = 0
    duration_minutes: int | None = None
    featured: bool = False
    created_at: str


class LessonResponse(ApiModel):
    """A lesson."""

    id: int
    title: str
    description: str | None = None
    course_id: int
    video_url: str | None = None
    pdf_url: str | None = None
    order: int
    duration_minutes: int | None = None


# =============================================================================
# PROGRESS SCHEMAS
# =============================================================================


class ProgressUpsert(ApiModel):
    """Request body for creating or updating course progress."""

    user_id: int = Field(..., gt=0)
    course_id: int = Field(..., gt=0)
    lessons_completed: int | None = Field(default=None, ge=0)
    last_lesson_id: int | None = None
    completed: bool | None = None
    percent_complete: int | None = Field(default=None, ge=0, le=100)


class ProgressResponse(ApiModel):
    """Progress of a user in a course."""

    id: int
    user_id: int
    course_id: int
    lessons_completed: int = 0
    last_lesson_id: int | None = None
    completed: bool = False
    percent_complete: int = 0
    last_accessed: str


# =============================================================================
# QUIZ SCHEMAS
# =============================================================================


class QuizResponse(ApiModel):
    """A quiz."""

    id: int
    title: str
    description: str | None = None
    subject_id: int
    grade_level: int
    duration_minutes: int = 15
    question_count: int = 0
    created_at: str


class QuizOptionSchema(ApiModel):
    """An answer option."""

    id: str
    text: str


class QuizQuestionResponse(ApiModel):
    """A question. The correct option id is sent as ``correctOptionIndex``."""

    id: int
    quiz_id: int
    question_text: str
    options: list[QuizOptionSchema]
    correct_option_id: str = Field(..., serialization_alias="correctOptionIndex")
    explanation: str | None = None
    order: int


class QuizDetailResponse(QuizResponse):
    """A quiz with its ordered questions."""

    questions: list[QuizQuestionResponse]


class AnswerSubmission(ApiModel):
    """One answer. ``questionId`` is optional for positional submissions."""

    option_id: str = Field(..., min_length=1)
    question_id: int | None = None


class QuizSubmission(ApiModel):
    """Request body for submitting a quiz."""

    user_id: int = Field(..., gt=0)
    answers: list[AnswerSubmission]
    time_taken: int | None = Field(default=None, ge=0)


class QuizResultResponse(ApiModel):
    """A stored quiz result."""

    id: int
    user_id: int
    quiz_id: int
    score: int
    incorrect_questions: list[int]
    time_taken_seconds: int = 0
    completed_at: str


class GradeResponse(ApiModel):
    """Outcome of a quiz submission."""

    score: int
    total_questions: int
    correct_answers: int
    incorrect_questions: list[int]
    result: QuizResultResponse


# =============================================================================
# ACHIEVEMENT SCHEMAS
# =============================================================================


class AchievementResponse(ApiModel):
    """A catalog achievement."""

    id: int
    title: str
    description: str
    icon_name: str
    color_class: str | None = None
    criteria: dict[str, Any] = Field(default_factory=dict)


class UserAchievementResponse(ApiModel):
    """An achievement earned by a user."""

    id: int
    user_id: int
    achievement_id: int
    earned_at: str


class AchievementGrant(ApiModel):
    """Request body for granting an achievement."""

    user_id: int = Field(..., gt=0)
    achievement_id: int = Field(..., gt=0)


# =============================================================================
# STATS SCHEMAS
# =============================================================================


class UserStatsResponse(ApiModel):
    """Aggregate stats of the current user."""

    quizzes_completed: int
    courses_completed: int
    courses_in_progress: int
    total_lesson_time: int
    longest_streak: int
    current_streak: int


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(ApiModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
