"""Tests for user stats."""

from classroom.core.models import QuizResult
from classroom.core.progress import ProgressTracker
from classroom.core.stats import compute_user_stats
from classroom.core.store import Table


class TestComputeUserStats:
    """Counts from progress and results."""

    def test_empty_user(self, store):
        stats = compute_user_stats(store, 1)
        assert stats.quizzes_completed == 0
        assert stats.courses_completed == 0
        assert stats.courses_in_progress == 0

    def test_counts(self, store):
        tracker = ProgressTracker(store)
        tracker.upsert_progress(1, 1, completed=True, percent_complete=100)
        tracker.upsert_progress(1, 2, percent_complete=40)
        tracker.upsert_progress(1, 3, percent_complete=0)
        tracker.upsert_progress(2, 4, percent_complete=50)
        store.create(Table.QUIZ_RESULTS, QuizResult(user_id=1, quiz_id=1, score=80))
        store.create(Table.QUIZ_RESULTS, QuizResult(user_id=1, quiz_id=1, score=90))

        stats = compute_user_stats(store, 1)

        assert stats.courses_completed == 1
        assert stats.courses_in_progress == 1
        assert stats.quizzes_completed == 2

    def test_placeholders_passed_through(self, store):
        stats = compute_user_stats(store, 1, total_lesson_time=10, longest_streak=3, current_streak=2)
        data = stats.to_dict()
        assert data["total_lesson_time"] == 10
        assert data["longest_streak"] == 3
        assert data["current_streak"] == 2
