"""Startup catalog loader.

Loads the seed catalog from data/config/seed_v1.yaml, falling back to the
built-in default catalog, and writes it into an EntityStore.

Seed records reference each other by natural keys rather than ids:
courses and quizzes name their subject by ``subject`` code, lessons and
questions are nested under their course or quiz, and users list their
``progress`` by course title and their ``achievements`` by title.
Progress entries go through the same upsert as the API, so a course listed
twice for one user leaves a single merged record; repeated achievements
are granted once.

Usage:
    from classroom.config.seed import load_seed_data, seed_store

    seed_store(store, load_seed_data())
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml

from classroom.core.achievements import AchievementService
from classroom.core.errors import ConflictError, ValidationError
from classroom.core.models import (
    Achievement,
    Course,
    Lesson,
    Quiz,
    QuizQuestion,
    Subject,
    User,
)
from classroom.core.progress import ProgressTracker
from classroom.core.store import EntityStore, Table

logger = structlog.get_logger(__name__)

# Seed file path (relative to project root)
SEED_FILE = Path("data/config/seed_v1.yaml")


def _image(photo: str, height: int = 220) -> str:
    return (
        f"https://images.unsplash.com/photo-{photo}"
        f"?ixlib=rb-1.2.1&auto=format&fit=crop&w=500&h={height}&q=80"
    )


def get_default_seed() -> dict[str, Any]:
    """Built-in catalog used when no seed file exists."""
    return {
        "subjects": [
            {"name": "Mathematics", "code": "math", "icon_name": "calculate", "color_class": "blue"},
            {"name": "Science", "code": "science", "icon_name": "science", "color_class": "green"},
            {"name": "Hindi", "code": "hindi", "icon_name": "translate", "color_class": "red"},
            {"name": "Social Studies", "code": "social", "icon_name": "public", "color_class": "yellow"},
            {"name": "English", "code": "english", "icon_name": "auto_stories", "color_class": "purple"},
            {"name": "History", "code": "history", "icon_name": "history_edu", "color_class": "yellow"},
            {"name": "Geography", "code": "geography", "icon_name": "terrain", "color_class": "emerald"},
            {"name": "Civics", "code": "civics", "icon_name": "account_balance", "color_class": "teal"},
            {"name": "Economics", "code": "economics", "icon_name": "attach_money", "color_class": "amber"},
        ],
        "courses": [
            {
                "title": "Introduction to Fractions",
                "description": "Learn the basics of fractions and how to work with them.",
                "subject": "math",
                "grade_level": 5,
                "image_url": _image("1516979187457-637abb4f9353"),
                "total_lessons": 8,
                "duration_minutes": 240,
                "lessons": [
                    {
                        "title": "What are Fractions?",
                        "description": "An introduction to the concept of fractions.",
                        "video_url": "https://www.youtube.com/watch?v=kn-lpXCwUS8",
                        "pdf_url": "https://www.math.com/school/pdf/fractions.pdf",
                        "order": 1,
                        "duration_minutes": 30,
                    },
                    {
                        "title": "Equivalent Fractions",
                        "description": "Learn about fractions that represent the same amount.",
                        "video_url": "https://www.youtube.com/watch?v=qcHHhd6HizI",
                        "pdf_url": "https://www.math.com/school/pdf/equivalent_fractions.pdf",
                        "order": 2,
                        "duration_minutes": 30,
                    },
                ],
            },
            {
                "title": "Our Solar System",
                "description": "Explore the planets, moons, and other objects in our solar system.",
                "subject": "science",
                "grade_level": 5,
                "image_url": _image("1507413245164-6160d8298b31"),
                "total_lessons": 10,
                "duration_minutes": 300,
                "lessons": [
                    {
                        "title": "Introduction to Our Solar System",
                        "description": "An overview of our solar system and its components.",
                        "video_url": "https://www.youtube.com/watch?v=libKVRa01L8",
                        "pdf_url": "https://www.nasa.gov/pdf/solar_system_for_kids.pdf",
                        "order": 1,
                        "duration_minutes": 30,
                    },
                    {
                        "title": "The Sun: Our Star",
                        "description": "Learn about the Sun, the center of our solar system.",
                        "video_url": "https://www.youtube.com/watch?v=6FB0pDpUxyM",
                        "pdf_url": "https://www.nasa.gov/pdf/the_sun.pdf",
                        "order": 2,
                        "duration_minutes": 30,
                    },
                ],
            },
            {
                "title": "Hindi Grammar Essentials",
                "description": "Master the fundamentals of Hindi grammar rules and usage.",
                "subject": "hindi",
                "grade_level": 5,
                "image_url": _image("1582921221088-a57ced19c708"),
                "total_lessons": 12,
                "duration_minutes": 360,
            },
            {
                "title": "Algebra Fundamentals",
                "description": "Master the basics of algebra with interactive lessons and practice problems.",
                "subject": "math",
                "grade_level": 5,
                "image_url": _image("1635070041078-e363dbe005cb", height=350),
                "total_lessons": 10,
                "duration_minutes": 300,
                "featured": True,
            },
            {
                "title": "Human Body Systems",
                "description": "Explore the amazing systems of the human body through interactive 3D models.",
                "subject": "science",
                "grade_level": 6,
                "image_url": _image("1536094908688-b3d7ea7d064e", height=350),
                "total_lessons": 8,
                "duration_minutes": 240,
                "featured": True,
            },
            {
                "title": "Ancient Indian Civilizations",
                "description": "Journey through the rich history of ancient Indian civilizations with virtual tours.",
                "subject": "history",
                "grade_level": 7,
                "image_url": _image("1551029506-0807df4e2031", height=350),
                "total_lessons": 12,
                "duration_minutes": 360,
                "featured": True,
            },
            {
                "title": "Creative Hindi Writing",
                "description": "Enhance your Hindi writing skills through creative storytelling and poetry.",
                "subject": "hindi",
                "grade_level": 4,
                "image_url": _image("1546833998-877b37c2e5c6", height=350),
                "total_lessons": 6,
                "duration_minutes": 180,
                "featured": True,
            },
        ],
        "quizzes": [
            {
                "title": "Algebra Basics Quiz",
                "description": "Test your knowledge of basic algebra concepts.",
                "subject": "math",
                "grade_level": 6,
                "duration_minutes": 20,
                "question_count": 15,
                "questions": [
                    {
                        "question_text": "What is the result of adding 1/4 and 2/4?",
                        "options": [
                            {"id": "a", "text": "1/2"},
                            {"id": "b", "text": "3/4"},
                            {"id": "c", "text": "3/8"},
                            {"id": "d", "text": "2/8"},
                        ],
                        "correct_option_id": "b",
                        "explanation": (
                            "When adding fractions with the same denominator, you simply add "
                            "the numerators and keep the denominator the same. "
                            "So 1/4 + 2/4 = (1+2)/4 = 3/4."
                        ),
                        "order": 1,
                    },
                    {
                        "question_text": "Which fraction is equivalent to 0.5?",
                        "options": [
                            {"id": "a", "text": "1/5"},
                            {"id": "b", "text": "5/10"},
                            {"id": "c", "text": "1/2"},
                            {"id": "d", "text": "2/5"},
                        ],
                        "correct_option_id": "c",
                        "explanation": "0.5 is equal to 5/10, which simplifies to 1/2.",
                        "order": 2,
                    },
                ],
            },
            {
                "title": "Human Body Systems Quiz",
                "description": "Test your knowledge of human body systems.",
                "subject": "science",
                "grade_level": 6,
                "duration_minutes": 15,
                "question_count": 12,
            },
            {
                "title": "Ancient Indian Civilizations Quiz",
                "description": "Test your knowledge of ancient Indian civilizations.",
                "subject": "history",
                "grade_level": 7,
                "duration_minutes": 15,
                "question_count": 10,
            },
            {
                "title": "Hindi Grammar Quiz",
                "description": "Test your knowledge of Hindi grammar.",
                "subject": "hindi",
                "grade_level": 5,
                "duration_minutes": 25,
                "question_count": 15,
            },
            {
                "title": "English Comprehension Quiz",
                "description": "Test your English reading comprehension skills.",
                "subject": "english",
                "grade_level": 5,
                "duration_minutes": 20,
                "question_count": 8,
            },
        ],
        "achievements": [
            {
                "title": "First Quiz",
                "description": "Completed your first quiz",
                "icon_name": "emoji_events",
                "color_class": "yellow",
                "criteria": {"type": "quiz_completion", "count": 1},
            },
            {
                "title": "Knowledge Seeker",
                "description": "Completed 5 courses",
                "icon_name": "school",
                "color_class": "green",
                "criteria": {"type": "course_completion", "count": 5},
            },
            {
                "title": "Perfect Score",
                "description": "Got 100% on a quiz",
                "icon_name": "stars",
                "color_class": "blue",
                "criteria": {"type": "quiz_score", "score": 100},
            },
            {
                "title": "Week Warrior",
                "description": "Studied for 7 days in a row",
                "icon_name": "local_fire_department",
                "color_class": "red",
                "criteria": {"type": "streak", "days": 7},
            },
        ],
        "users": [
            {
                "username": "testuser",
                "password": "password123",
                "email": "test@example.com",
                "full_name": "Test User",
                "grade_level": 5,
                "preferred_language": "en",
                "progress": [
                    {
                        "course": "Introduction to Fractions",
                        "lessons_completed": 2,
                        "last_lesson_id": 2,
                        "completed": False,
                        "percent_complete": 25,
                    },
                    {
                        "course": "Our Solar System",
                        "lessons_completed": 6,
                        "last_lesson_id": 6,
                        "completed": False,
                        "percent_complete": 60,
                    },
                ],
            },
        ],
    }


def load_seed_data(path: Path | None = None) -> dict[str, Any]:
    """Load the seed catalog from file, or the default catalog.

    Args:
        path: Seed file. Defaults to data/config/seed_v1.yaml.

    Returns:
        Seed dictionary in the shape of ``get_default_seed()``.

    Raises:
        ValidationError: If the file is not valid YAML or not a mapping.
    """
    seed_path = path or SEED_FILE
    if not seed_path.exists():
        logger.debug("seed_file_not_found", path=str(seed_path))
        return get_default_seed()

    logger.info("loading_seed_file", path=str(seed_path))
    try:
        data = yaml.safe_load(seed_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValidationError(f"Seed file is not valid YAML: {seed_path}: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError(f"Seed file must contain a mapping: {seed_path}")
    return data


def _build(cls: type, fields: dict[str, Any]) -> Any:
    """Construct an entity from seed fields, reporting unknown keys as ValidationError."""
    try:
        return cls(**fields)
    except TypeError as e:
        raise ValidationError(f"Invalid {cls.__name__} seed entry: {e}") from e


def _as_mapping(data: Any) -> dict[str, Any]:
    """Copy of a seed entry, which must be a mapping."""
    if not isinstance(data, dict):
        raise ValidationError(f"Seed entry must be a mapping: {data!r}")
    return dict(data)


def _pop_nested(data: Any, key: str) -> tuple[dict[str, Any], list[dict[str, Any]]]:
    """Split a seed entry into its own fields and a nested list."""
    fields = _as_mapping(data)
    nested = fields.pop(key, None) or []
    return fields, nested


def seed_store(store: EntityStore, data: dict[str, Any] | None = None) -> dict[str, int]:
    """Populate a store from seed data.

    Args:
        store: Target store (normally empty)
        data: Seed dictionary. Defaults to ``get_default_seed()``.

    Returns:
        Record count per table name after seeding.

    Raises:
        ValidationError: If an entry references an unknown subject, course
            or achievement, or carries out-of-range values.
        ConflictError: If two subjects share a code.
    """
    data = data if data is not None else get_default_seed()

    subjects_by_code: dict[str, Subject] = {}
    for entry in data.get("subjects", []):
        subject = _build(Subject, entry)
        if subject.code in subjects_by_code:
            raise ConflictError(f"Duplicate subject code '{subject.code}' in seed")
        store.create(Table.SUBJECTS, subject)
        subjects_by_code[subject.code] = subject

    def subject_id(code: str) -> int:
        if code not in subjects_by_code:
            raise ValidationError(f"Seed references unknown subject '{code}'")
        return subjects_by_code[code].id

    courses_by_title: dict[str, Course] = {}
    for entry in data.get("courses", []):
        fields, lessons = _pop_nested(entry, "lessons")
        code = fields.pop("subject", None)
        course = store.create(Table.COURSES, _build(Course, {"subject_id": subject_id(code), **fields}))
        courses_by_title[course.title] = course
        for lesson in lessons:
            store.create(Table.LESSONS, _build(Lesson, {"course_id": course.id, **lesson}))

    for entry in data.get("quizzes", []):
        fields, questions = _pop_nested(entry, "questions")
        code = fields.pop("subject", None)
        quiz = store.create(Table.QUIZZES, _build(Quiz, {"subject_id": subject_id(code), **fields}))
        for question in questions:
            store.create(Table.QUIZ_QUESTIONS, _build(QuizQuestion, {"quiz_id": quiz.id, **question}))

    achievements_by_title: dict[str, Achievement] = {}
    for entry in data.get("achievements", []):
        achievement = store.create(Table.ACHIEVEMENTS, _build(Achievement, entry))
        achievements_by_title[achievement.title] = achievement

    progress_tracker = ProgressTracker(store)
    achievement_service = AchievementService(store)

    for entry in data.get("users", []):
        fields, progress_entries = _pop_nested(entry, "progress")
        earned = fields.pop("achievements", None) or []
        user = store.create(Table.USERS, _build(User, fields))

        for progress in progress_entries:
            progress = _as_mapping(progress)
            title = progress.pop("course", None)
            if title not in courses_by_title:
                raise ValidationError(f"Seed progress references unknown course '{title}'")
            progress_tracker.upsert_progress(user.id, courses_by_title[title].id, **progress)

        for title in earned:
            if title not in achievements_by_title:
                raise ValidationError(f"Seed references unknown achievement '{title}'")
            achievement_service.grant(user.id, achievements_by_title[title].id)

    counts = {table.value: store.count(table) for table in Table}
    logger.info("store_seeded", **counts)
    return counts
