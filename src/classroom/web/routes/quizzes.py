"""Quiz endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from classroom.core.grader import QuizGrader, SubmittedAnswer
from classroom.core.models import MAX_GRADE_LEVEL, MIN_GRADE_LEVEL
from classroom.core.queries import QueryService
from classroom.web.deps import get_grader, get_queries
from classroom.web.schemas import (
    GradeResponse,
    QuizDetailResponse,
    QuizQuestionResponse,
    QuizResponse,
    QuizSubmission,
)

router = APIRouter(prefix="/api/quizzes", tags=["quizzes"])


@router.get("", response_model=list[QuizResponse])
async def list_quizzes(
    subject_id: int | None = Query(default=None, alias="subjectId"),
    grade_level: int | None = Query(
        default=None, alias="gradeLevel", ge=MIN_GRADE_LEVEL, le=MAX_GRADE_LEVEL
    ),
    queries: QueryService = Depends(get_queries),
) -> list[QuizResponse]:
    """List quizzes, optionally filtered by subject and/or grade."""
    quizzes = queries.filter_quizzes(subject_id=subject_id, grade_level=grade_level)
    return [QuizResponse(**q.to_dict()) for q in quizzes]


@router.get("/{quiz_id}", response_model=QuizDetailResponse)
async def get_quiz(
    quiz_id: int,
    queries: QueryService = Depends(get_queries),
) -> QuizDetailResponse:
    """Get a quiz with its questions in order."""
    quiz = queries.get_quiz(quiz_id)

    if quiz is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Quiz not found",
        )

    questions = [QuizQuestionResponse(**q.to_dict()) for q in queries.questions_for_quiz(quiz_id)]
    return QuizDetailResponse(**quiz.to_dict(), questions=questions)


@router.post("/{quiz_id}/submit", response_model=GradeResponse, status_code=status.HTTP_201_CREATED)
async def submit_quiz(
    quiz_id: int,
    submission: QuizSubmission,
    grader: QuizGrader = Depends(get_grader),
) -> GradeResponse:
    """Grade a submission and store the result."""
    answers = [
        SubmittedAnswer(option_id=a.option_id, question_id=a.question_id)
        for a in submission.answers
    ]
    outcome = grader.grade_submission(
        quiz_id=quiz_id,
        user_id=submission.user_id,
        answers=answers,
        time_taken_seconds=submission.time_taken,
    )
    return GradeResponse(**outcome.to_dict())
