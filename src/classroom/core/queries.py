"""Read-only queries over the entity store.

Every query is a linear scan of its table; results keep insertion order
unless stated otherwise. Ordered listings (lessons, quiz questions) use a
stable sort on ``order`` so records sharing an order value stay in creation
order.
"""

from __future__ import annotations

from classroom.core.models import (
    Course,
    Lesson,
    Quiz,
    QuizQuestion,
    QuizResult,
    Subject,
)
from classroom.core.store import EntityStore, Table


class QueryService:
    """Filters composed from store predicates."""

    def __init__(self, store: EntityStore):
        self.store = store

    # -------------------------------------------------------------------------
    # Subjects
    # -------------------------------------------------------------------------

    def all_subjects(self) -> list[Subject]:
        return self.store.list(Table.SUBJECTS)

    def get_subject(self, subject_id: int) -> Subject | None:
        return self.store.get(Table.SUBJECTS, subject_id)

    # -------------------------------------------------------------------------
    # Courses
    # -------------------------------------------------------------------------

    def all_courses(self) -> list[Course]:
        return self.store.list(Table.COURSES)

    def get_course(self, course_id: int) -> Course | None:
        return self.store.get(Table.COURSES, course_id)

    def courses_by_subject(self, subject_id: int) -> list[Course]:
        return self.store.list(Table.COURSES, lambda c: c.subject_id == subject_id)

    def courses_by_grade(self, grade_level: int) -> list[Course]:
        return self.store.list(Table.COURSES, lambda c: c.grade_level == grade_level)

    def courses_by_subject_and_grade(self, subject_id: int, grade_level: int) -> list[Course]:
        return self.store.list(
            Table.COURSES,
            lambda c: c.subject_id == subject_id and c.grade_level == grade_level,
        )

    def featured_courses(self) -> list[Course]:
        return self.store.list(Table.COURSES, lambda c: c.featured)

    def filter_courses(
        self,
        subject_id: int | None = None,
        grade_level: int | None = None,
    ) -> list[Course]:
        """Apply whichever of the subject/grade filters are given."""
        if subject_id is not None and grade_level is not None:
            return self.courses_by_subject_and_grade(subject_id, grade_level)
        if subject_id is not None:
            return self.courses_by_subject(subject_id)
        if grade_level is not None:
            return self.courses_by_grade(grade_level)
        return self.all_courses()

    # -------------------------------------------------------------------------
    # Lessons
    # -------------------------------------------------------------------------

    def get_lesson(self, lesson_id: int) -> Lesson | None:
        return self.store.get(Table.LESSONS, lesson_id)

    def lessons_by_course(self, course_id: int) -> list[Lesson]:
        """Lessons of a course, ascending by ``order``."""
        lessons = self.store.list(Table.LESSONS, lambda l: l.course_id == course_id)
        # sorted() is stable; ties keep creation order
        return sorted(lessons, key=lambda l: l.order)

    # -------------------------------------------------------------------------
    # Quizzes
    # -------------------------------------------------------------------------

    def all_quizzes(self) -> list[Quiz]:
        return self.store.list(Table.QUIZZES)

    def get_quiz(self, quiz_id: int) -> Quiz | None:
        return self.store.get(Table.QUIZZES, quiz_id)

    def quizzes_by_subject(self, subject_id: int) -> list[Quiz]:
        return self.store.list(Table.QUIZZES, lambda q: q.subject_id == subject_id)

    def quizzes_by_grade(self, grade_level: int) -> list[Quiz]:
        return self.store.list(Table.QUIZZES, lambda q: q.grade_level == grade_level)

    def quizzes_by_subject_and_grade(self, subject_id: int, grade_level: int) -> list[Quiz]:
        return self.store.list(
            Table.QUIZZES,
            lambda q: q.subject_id == subject_id and q.grade_level == grade_level,
        )

    def filter_quizzes(
        self,
        subject_id: int | None = None,
        grade_level: int | None = None,
    ) -> list[Quiz]:
        """Apply whichever of the subject/grade filters are given."""
        if subject_id is not None and grade_level is not None:
            return self.quizzes_by_subject_and_grade(subject_id, grade_level)
        if subject_id is not None:
            return self.quizzes_by_subject(subject_id)
        if grade_level is not None:
            return self.quizzes_by_grade(grade_level)
        return self.all_quizzes()

    def questions_for_quiz(self, quiz_id: int) -> list[QuizQuestion]:
        """Questions of a quiz, ascending by ``order``."""
        questions = self.store.list(Table.QUIZ_QUESTIONS, lambda q: q.quiz_id == quiz_id)
        return sorted(questions, key=lambda q: q.order)

    # -------------------------------------------------------------------------
    # Quiz results
    # -------------------------------------------------------------------------

    def results_by_user(self, user_id: int) -> list[QuizResult]:
        return self.store.list(Table.QUIZ_RESULTS, lambda r: r.user_id == user_id)

    def results_by_quiz(self, quiz_id: int) -> list[QuizResult]:
        return self.store.list(Table.QUIZ_RESULTS, lambda r: r.quiz_id == quiz_id)
