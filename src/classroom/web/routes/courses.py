"""Course endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from classroom.core.models import MAX_GRADE_LEVEL, MIN_GRADE_LEVEL
from classroom.core.queries import QueryService
from classroom.web.deps import get_queries
from classroom.web.schemas import CourseResponse, LessonResponse

router = APIRouter(prefix="/api/courses", tags=["courses"])


@router.get("", response_model=list[CourseResponse])
async def list_courses(
    subject_id: int | None = Query(default=None, alias="subjectId"),
    grade_level: int | None = Query(
        default=None, alias="gradeLevel", ge=MIN_GRADE_LEVEL, le=MAX_GRADE_LEVEL
    ),
    queries: QueryService = Depends(get_queries),
) -> list[CourseResponse]:
    """List courses, optionally filtered by subject and/or grade."""
    courses = queries.filter_courses(subject_id=subject_id, grade_level=grade_level)
    return [CourseResponse(**c.to_dict()) for c in courses]


# Declared before /{course_id} so "recommended" is not parsed as an id
@router.get("/recommended", response_model=list[CourseResponse])
async def recommended_courses(
    queries: QueryService = Depends(get_queries),
) -> list[CourseResponse]:
    """List featured courses."""
    return [CourseResponse(**c.to_dict()) for c in queries.featured_courses()]


@router.get("/{course_id}", response_model=CourseResponse)
async def get_course(
    course_id: int,
    queries: QueryService = Depends(get_queries),
) -> CourseResponse:
    """Get a specific course by ID."""
    course = queries.get_course(course_id)

    if course is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Course not found",
        )

    return CourseResponse(**course.to_dict())


@router.get("/{course_id}/lessons", response_model=list[LessonResponse])
async def list_course_lessons(
    course_id: int,
    queries: QueryService = Depends(get_queries),
) -> list[LessonResponse]:
    """List the lessons of a course in order."""
    return [LessonResponse(**l.to_dict()) for l in queries.lessons_by_course(course_id)]
