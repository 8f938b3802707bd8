"""Shared fixtures.

Every test gets its own EntityStore; nothing is shared between tests.
"""

import pytest
from fastapi.testclient import TestClient

from classroom.config.app_config import AppConfig, clear_config_cache
from classroom.config.seed import seed_store
from classroom.core.models import Quiz, QuizQuestion, Subject
from classroom.core.store import EntityStore, Table
from classroom.web.api import create_app

OPTIONS = [
    {"id": "a", "text": "Option A"},
    {"id": "b", "text": "Option B"},
    {"id": "c", "text": "Option C"},
    {"id": "d", "text": "Option D"},
]


@pytest.fixture(autouse=True)
def _reset_config_cache():
    """Keep the module-level config cache from leaking between tests."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def store():
    """Empty store."""
    return EntityStore()


@pytest.fixture
def seeded_store():
    """Store populated with the default catalog."""
    store = EntityStore()
    seed_store(store)
    return store


@pytest.fixture
def subject(store):
    """A single subject in the empty store."""
    return store.create(Table.SUBJECTS, Subject(name="Mathematics", code="math"))


@pytest.fixture
def make_quiz(store, subject):
    """Factory for a quiz whose questions have the given correct option ids."""

    def _make(correct_options, title="Quiz", grade_level=5):
        quiz = store.create(
            Table.QUIZZES,
            Quiz(
                title=title,
                subject_id=subject.id,
                grade_level=grade_level,
                question_count=len(correct_options),
            ),
        )
        questions = [
            store.create(
                Table.QUIZ_QUESTIONS,
                QuizQuestion(
                    quiz_id=quiz.id,
                    question_text=f"Question {i}",
                    options=OPTIONS,
                    correct_option_id=correct,
                    explanation=f"Because {correct}",
                    order=i,
                ),
            )
            for i, correct in enumerate(correct_options, start=1)
        ]
        return quiz, questions

    return _make


@pytest.fixture
def client(seeded_store):
    """Test client over a freshly seeded store with default config."""
    app = create_app(store=seeded_store, config=AppConfig())
    return TestClient(app)


@pytest.fixture
def empty_client(store):
    """Test client over the empty store."""
    app = create_app(store=store, config=AppConfig())
    return TestClient(app)
