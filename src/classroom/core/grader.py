"""Quiz grading.

Scores a submission against the stored questions of a quiz and records a
QuizResult for every submission (history, never updated).

Matching modes:
- by question id: every answer names the question it answers. Unknown or
  repeated question ids are rejected. Submission order does not matter.
- positional: no answer names a question; answer i is compared to the i-th
  question in ``order``. Kept for clients that only send option ids.

Mixing the two forms in one submission is rejected. In both modes a
question without an answer counts as incorrect, so
``correct_answers + len(incorrect_questions) == total_questions``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from classroom.core.errors import NotFoundError, ValidationError
from classroom.core.models import QuizQuestion, QuizResult
from classroom.core.queries import QueryService
from classroom.core.store import EntityStore, Table

logger = structlog.get_logger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class SubmittedAnswer:
    """One answer of a submission."""

    option_id: str
    question_id: int | None = None

    @classmethod
    def from_value(cls, value: Any) -> SubmittedAnswer:
        """Build from a SubmittedAnswer or a mapping with ``option_id``."""
        if isinstance(value, SubmittedAnswer):
            return value
        if not isinstance(value, Mapping):
            raise ValidationError(f"Answer must be an object, got {type(value).__name__}")
        option_id = value.get("option_id")
        if option_id is None or option_id == "":
            raise ValidationError("Each answer needs an option id")
        return cls(option_id=str(option_id), question_id=value.get("question_id"))


@dataclass
class GradeOutcome:
    """Result of grading one submission."""

    score: int
    total_questions: int
    correct_answers: int
    incorrect_questions: list[int] = field(default_factory=list)
    result: QuizResult | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "score": self.score,
            "total_questions": self.total_questions,
            "correct_answers": self.correct_answers,
            "incorrect_questions": list(self.incorrect_questions),
            "result": self.result.to_dict() if self.result else None,
        }


# =============================================================================
# HELPERS
# =============================================================================


def percentage_score(correct: int, total: int) -> int:
    """Percentage of correct answers, rounded half up.

    >>> percentage_score(2, 3)
    67
    >>> percentage_score(1, 8)
    13
    """
    if total <= 0:
        raise ValueError("total must be positive")
    # integer form of floor(correct * 100 / total + 0.5)
    return (correct * 200 + total) // (2 * total)


def _match_by_question_id(
    questions: list[QuizQuestion],
    answers: list[SubmittedAnswer],
) -> dict[int, str]:
    """Map question id -> chosen option id, rejecting unknown or repeated ids."""
    known_ids = {q.id for q in questions}
    chosen: dict[int, str] = {}
    for answer in answers:
        if answer.question_id not in known_ids:
            raise ValidationError(f"Unknown question id {answer.question_id} for this quiz")
        if answer.question_id in chosen:
            raise ValidationError(f"Question {answer.question_id} answered more than once")
        chosen[answer.question_id] = answer.option_id
    return chosen


def _match_by_position(
    questions: list[QuizQuestion],
    answers: list[SubmittedAnswer],
) -> dict[int, str]:
    """Map question id -> chosen option id using answer position."""
    if len(answers) > len(questions):
        raise ValidationError(
            f"Submission has {len(answers)} answers but the quiz has {len(questions)} questions"
        )
    return {q.id: a.option_id for q, a in zip(questions, answers)}


# =============================================================================
# GRADER
# =============================================================================


class QuizGrader:
    """Grades submissions and stores their results."""

    def __init__(self, store: EntityStore):
        self.store = store
        self.queries = QueryService(store)

    def grade_submission(
        self,
        quiz_id: int,
        user_id: int,
        answers: Any,
        time_taken_seconds: int | None = None,
    ) -> GradeOutcome:
        """Grade a submission and record the result.

        Args:
            quiz_id: Quiz being answered
            user_id: Learner submitting
            answers: List of SubmittedAnswer (or mappings with option_id and
                optional question_id)
            time_taken_seconds: Elapsed time, stored but not scored

        Returns:
            GradeOutcome with the percentage score and the stored result

        Raises:
            ValidationError: If the submission is malformed
            NotFoundError: If the quiz does not exist or has no questions
        """
        if not user_id:
            raise ValidationError("A user id is required")
        if not isinstance(answers, list):
            raise ValidationError("Answers must be a list")

        parsed = [SubmittedAnswer.from_value(a) for a in answers]

        if self.queries.get_quiz(quiz_id) is None:
            raise NotFoundError("Quiz", quiz_id)

        questions = self.queries.questions_for_quiz(quiz_id)
        if not questions:
            raise NotFoundError("Quiz questions")

        with_ids = sum(1 for a in parsed if a.question_id is not None)
        if with_ids == 0:
            chosen = _match_by_position(questions, parsed)
            mode = "positional"
        elif with_ids == len(parsed):
            chosen = _match_by_question_id(questions, parsed)
            mode = "question_id"
        else:
            raise ValidationError("Either every answer names its question id or none does")

        correct = 0
        incorrect: list[int] = []
        for question in questions:
            if chosen.get(question.id) == question.correct_option_id:
                correct += 1
            else:
                incorrect.append(question.id)

        score = percentage_score(correct, len(questions))

        result = self.store.create(
            Table.QUIZ_RESULTS,
            QuizResult(
                user_id=user_id,
                quiz_id=quiz_id,
                score=score,
                incorrect_questions=incorrect,
                time_taken_seconds=time_taken_seconds or 0,
            ),
        )

        logger.info(
            "quiz_graded",
            quiz_id=quiz_id,
            user_id=user_id,
            mode=mode,
            score=score,
            correct=correct,
            total=len(questions),
            result_id=result.id,
        )

        return GradeOutcome(
            score=score,
            total_questions=len(questions),
            correct_answers=correct,
            incorrect_questions=incorrect,
            result=result,
        )
