"""Tests for QueryService."""

from classroom.core.models import Lesson, Quiz, QuizResult, Subject
from classroom.core.queries import QueryService
from classroom.core.store import Table


class TestCourseFilters:
    """Course filters by subject, grade and featured flag."""

    def test_by_subject(self, store, make_course):
        science = store.create(Table.SUBJECTS, Subject(name="Science", code="science"))
        make_course("Fractions")
        make_course("Planets", subject_id=science.id)

        found = QueryService(store).courses_by_subject(science.id)
        assert [c.title for c in found] == ["Planets"]

    def test_by_grade(self, store, make_course):
        make_course("Grade 5", grade_level=5)
        make_course("Grade 6", grade_level=6)

        found = QueryService(store).courses_by_grade(6)
        assert [c.title for c in found] == ["Grade 6"]

    def test_subject_and_grade_is_intersection(self, seeded_store):
        """Combined filter equals the intersection of the single filters."""
        queries = QueryService(seeded_store)
        for subject in queries.all_subjects():
            for grade in range(1, 13):
                combined = {c.id for c in queries.courses_by_subject_and_grade(subject.id, grade)}
                by_subject = {c.id for c in queries.courses_by_subject(subject.id)}
                by_grade = {c.id for c in queries.courses_by_grade(grade)}
                assert combined == by_subject & by_grade

    def test_featured(self, store, make_course):
        make_course("Plain")
        make_course("Star", featured=True)

        assert [c.title for c in QueryService(store).featured_courses()] == ["Star"]

    def test_filter_courses_dispatch(self, store, make_course):
        """filter_courses applies only the given filters."""
        make_course("A5", grade_level=5)
        make_course("A6", grade_level=6)
        queries = QueryService(store)

        assert len(queries.filter_courses()) == 2
        assert [c.title for c in queries.filter_courses(grade_level=6)] == ["A6"]
        assert len(queries.filter_courses(subject_id=1)) == 2
        assert [c.title for c in queries.filter_courses(subject_id=1, grade_level=5)] == ["A5"]
        assert queries.filter_courses(subject_id=99) == []

    def test_get_course_missing(self, store):
        assert QueryService(store).get_course(1) is None


class TestLessonOrdering:
    """Lessons come back sorted by order, ties in creation order."""

    def test_sorted_by_order(self, store, make_course):
        course = make_course()
        for order in [3, 1, 2]:
            store.create(Table.LESSONS, Lesson(title=f"L{order}", course_id=course.id, order=order))

        lessons = QueryService(store).lessons_by_course(course.id)
        assert [l.order for l in lessons] == [1, 2, 3]

    def test_equal_order_keeps_creation_order(self, store, make_course):
        course = make_course()
        for title, order in [("second-a", 2), ("first", 1), ("second-b", 2), ("second-c", 2)]:
            store.create(Table.LESSONS, Lesson(title=title, course_id=course.id, order=order))

        lessons = QueryService(store).lessons_by_course(course.id)
        assert [l.title for l in lessons] == ["first", "second-a", "second-b", "second-c"]

    def test_only_lessons_of_course(self, store, make_course):
        first, second = make_course("One"), make_course("Two")
        store.create(Table.LESSONS, Lesson(title="x", course_id=first.id, order=1))
        store.create(Table.LESSONS, Lesson(title="y", course_id=second.id, order=1))

        assert [l.title for l in QueryService(store).lessons_by_course(second.id)] == ["y"]


class TestQuizQueries:
    """Quiz filters and question ordering."""

    def test_filter_quizzes(self, store, subject):
        store.create(Table.QUIZZES, Quiz(title="Q5", subject_id=subject.id, grade_level=5))
        store.create(Table.QUIZZES, Quiz(title="Q6", subject_id=subject.id, grade_level=6))
        queries = QueryService(store)

        assert [q.title for q in queries.filter_quizzes(grade_level=5)] == ["Q5"]
        assert [q.title for q in queries.filter_quizzes(subject_id=subject.id, grade_level=6)] == ["Q6"]
        assert len(queries.filter_quizzes()) == 2

    def test_questions_sorted_by_order(self, store, make_quiz):
        quiz, questions = make_quiz(["a", "b", "c"])
        # make_quiz creates in order 1..3; reverse the stored order values
        for question, order in zip(questions, [3, 2, 1]):
            question.order = order

        ordered = QueryService(store).questions_for_quiz(quiz.id)
        assert [q.id for q in ordered] == [questions[2].id, questions[1].id, questions[0].id]

    def test_results_by_user_and_quiz(self, store):
        store.create(Table.QUIZ_RESULTS, QuizResult(user_id=1, quiz_id=1, score=50))
        store.create(Table.QUIZ_RESULTS, QuizResult(user_id=2, quiz_id=1, score=70))
        store.create(Table.QUIZ_RESULTS, QuizResult(user_id=1, quiz_id=2, score=90))
        queries = QueryService(store)

        assert [r.score for r in queries.results_by_user(1)] == [50, 90]
        assert [r.score for r in queries.results_by_quiz(1)] == [50, 70]
