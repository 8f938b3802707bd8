"""Subject endpoints."""

from fastapi import APIRouter, Depends

from classroom.core.queries import QueryService
from classroom.web.deps import get_queries
from classroom.web.schemas import SubjectResponse

router = APIRouter(prefix="/api/subjects", tags=["subjects"])


@router.get("", response_model=list[SubjectResponse])
async def list_subjects(queries: QueryService = Depends(get_queries)) -> list[SubjectResponse]:
    """List all subjects."""
    return [SubjectResponse(**s.to_dict()) for s in queries.all_subjects()]
