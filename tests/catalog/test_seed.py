"""Tests for the seed catalog."""

import pytest

from classroom.config.seed import get_default_seed, load_seed_data, seed_store
from classroom.core.errors import ConflictError, ValidationError
from classroom.core.progress import ProgressTracker
from classroom.core.queries import QueryService
from classroom.core.store import EntityStore, Table


class TestDefaultSeed:
    """The built-in catalog."""

    def test_counts(self, seeded_store):
        assert seeded_store.count(Table.SUBJECTS) == 9
        assert seeded_store.count(Table.COURSES) == 7
        assert seeded_store.count(Table.LESSONS) == 4
        assert seeded_store.count(Table.QUIZZES) == 5
        assert seeded_store.count(Table.QUIZ_QUESTIONS) == 2
        assert seeded_store.count(Table.ACHIEVEMENTS) == 4
        assert seeded_store.count(Table.USERS) == 1
        assert seeded_store.count(Table.USER_PROGRESS) == 2

    def test_featured_courses(self, seeded_store):
        titles = [c.title for c in QueryService(seeded_store).featured_courses()]
        assert titles == [
            "Algebra Fundamentals",
            "Human Body Systems",
            "Ancient Indian Civilizations",
            "Creative Hindi Writing",
        ]

    def test_demo_user_progress(self, seeded_store):
        progress = seeded_store.list(Table.USER_PROGRESS)
        assert [(p.user_id, p.course_id, p.percent_complete) for p in progress] == [
            (1, 1, 25),
            (1, 2, 60),
        ]

    def test_questions_linked_to_first_quiz(self, seeded_store):
        questions = QueryService(seeded_store).questions_for_quiz(1)
        assert [q.correct_option_id for q in questions] == ["b", "c"]

    def test_default_seed_is_fresh_copy(self):
        """Mutating one copy does not affect the next."""
        first = get_default_seed()
        first["subjects"].clear()
        assert get_default_seed()["subjects"]


class TestSeedStore:
    """Loading custom seed data."""

    def test_nested_references(self, store):
        data = {
            "subjects": [{"name": "Art", "code": "art"}],
            "courses": [
                {
                    "title": "Drawing",
                    "subject": "art",
                    "grade_level": 3,
                    "lessons": [{"title": "Lines", "order": 1}],
                }
            ],
            "achievements": [{"title": "Artist", "description": "d", "icon_name": "brush"}],
            "users": [
                {
                    "username": "kid",
                    "password": "pw",
                    "email": "kid@example.com",
                    "progress": [{"course": "Drawing", "percent_complete": 10}],
                    "achievements": ["Artist"],
                }
            ],
        }

        counts = seed_store(store, data)

        assert counts["lessons"] == 1
        assert counts["user_achievements"] == 1
        assert store.get(Table.LESSONS, 1).course_id == 1

    def test_unknown_subject(self, store):
        data = {"courses": [{"title": "X", "subject": "nope", "grade_level": 3}]}
        with pytest.raises(ValidationError, match="unknown subject"):
            seed_store(store, data)

    def test_unknown_field(self, store):
        data = {"subjects": [{"name": "Art", "code": "art", "colour": "red"}]}
        with pytest.raises(ValidationError, match="Invalid Subject"):
            seed_store(store, data)

    def test_duplicate_subject_code(self, store):
        data = {"subjects": [{"name": "Art", "code": "art"}, {"name": "Drawing", "code": "art"}]}
        with pytest.raises(ConflictError, match="Duplicate subject code"):
            seed_store(store, data)

    def test_repeated_course_progress_is_merged(self, store):
        """A course listed twice for one user leaves one record with the later values."""
        data = {
            "subjects": [{"name": "Art", "code": "art"}],
            "courses": [{"title": "Drawing", "subject": "art", "grade_level": 3}],
            "users": [
                {
                    "username": "kid",
                    "password": "pw",
                    "email": "kid@example.com",
                    "progress": [
                        {"course": "Drawing", "percent_complete": 10, "lessons_completed": 1},
                        {"course": "Drawing", "percent_complete": 50},
                    ],
                }
            ],
        }

        seed_store(store, data)

        rows = ProgressTracker(store).progress_for_user(1)
        assert len(rows) == 1
        assert rows[0].percent_complete == 50
        assert rows[0].lessons_completed == 1

    def test_repeated_achievement_granted_once(self, store):
        data = {
            "achievements": [{"title": "Artist", "description": "d", "icon_name": "brush"}],
            "users": [
                {
                    "username": "kid",
                    "password": "pw",
                    "email": "kid@example.com",
                    "achievements": ["Artist", "Artist"],
                }
            ],
        }

        counts = seed_store(store, data)

        assert counts["user_achievements"] == 1

    def test_unknown_progress_field(self, store):
        data = {
            "subjects": [{"name": "Art", "code": "art"}],
            "courses": [{"title": "Drawing", "subject": "art", "grade_level": 3}],
            "users": [
                {
                    "username": "kid",
                    "password": "pw",
                    "email": "kid@example.com",
                    "progress": [{"course": "Drawing", "stars": 3}],
                }
            ],
        }
        with pytest.raises(ValidationError):
            seed_store(store, data)

    def test_entry_not_a_mapping(self, store):
        with pytest.raises(ValidationError, match="mapping"):
            seed_store(store, {"courses": ["Drawing"]})

    def test_option_without_text(self, store):
        data = {
            "subjects": [{"name": "Art", "code": "art"}],
            "quizzes": [
                {
                    "title": "Colors",
                    "subject": "art",
                    "grade_level": 3,
                    "questions": [
                        {
                            "question_text": "Primary?",
                            "options": [{"id": "a"}],
                            "correct_option_id": "a",
                            "order": 1,
                        }
                    ],
                }
            ],
        }
        with pytest.raises(ValidationError, match="id and a text"):
            seed_store(store, data)

    def test_unknown_course_in_progress(self, store):
        data = {"users": [{"username": "u", "password": "p", "email": "u@example.com", "progress": [{"course": "Nope"}]}]}
        with pytest.raises(ValidationError, match="unknown course"):
            seed_store(store, data)


class TestLoadSeedData:
    """Seed file loading."""

    def test_missing_file_gives_default(self, tmp_path):
        assert load_seed_data(tmp_path / "missing.yaml") == get_default_seed()

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "seed.yaml"
        path.write_text(
            "subjects:\n  - name: Music\n    code: music\n",
            encoding="utf-8",
        )
        store = EntityStore()
        seed_store(store, load_seed_data(path))
        assert store.list(Table.SUBJECTS)[0].code == "music"

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "seed.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ValidationError, match="mapping"):
            load_seed_data(path)

    def test_broken_yaml_rejected(self, tmp_path):
        path = tmp_path / "seed.yaml"
        path.write_text("subjects: [\n  {name: x", encoding="utf-8")
        with pytest.raises(ValidationError, match="not valid YAML"):
            load_seed_data(path)
