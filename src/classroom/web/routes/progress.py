"""Course progress endpoints."""

from fastapi import APIRouter, Depends, status

from classroom.core.progress import ProgressTracker
from classroom.web.deps import get_current_user_id, get_progress_tracker
from classroom.web.schemas import ProgressResponse, ProgressUpsert

router = APIRouter(prefix="/api/progress", tags=["progress"])


@router.get("", response_model=list[ProgressResponse])
async def list_progress(
    user_id: int = Depends(get_current_user_id),
    tracker: ProgressTracker = Depends(get_progress_tracker),
) -> list[ProgressResponse]:
    """List progress records of the current user."""
    return [ProgressResponse(**p.to_dict()) for p in tracker.progress_for_user(user_id)]


@router.post("", response_model=ProgressResponse, status_code=status.HTTP_201_CREATED)
async def upsert_progress(
    progress_data: ProgressUpsert,
    tracker: ProgressTracker = Depends(get_progress_tracker),
) -> ProgressResponse:
    """Create or update progress for a (user, course) pair."""
    fields = progress_data.model_dump(exclude_unset=True, exclude={"user_id", "course_id"})
    progress = tracker.upsert_progress(
        progress_data.user_id,
        progress_data.course_id,
        **fields,
    )
    return ProgressResponse(**progress.to_dict())
