"""Lesson endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from classroom.core.queries import QueryService
from classroom.web.deps import get_queries
from classroom.web.schemas import LessonResponse

router = APIRouter(prefix="/api/lessons", tags=["lessons"])


@router.get("/{lesson_id}", response_model=LessonResponse)
async def get_lesson(
    lesson_id: int,
    queries: QueryService = Depends(get_queries),
) -> LessonResponse:
    """Get a specific lesson by ID."""
    lesson = queries.get_lesson(lesson_id)

    if lesson is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Lesson not found",
        )

    return LessonResponse(**lesson.to_dict())
