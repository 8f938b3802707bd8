"""FastAPI dependencies.

The entity store and config live on ``app.state``; each app instance
(and so each test client) has its own store.
"""

from fastapi import Request

from classroom.config.app_config import AppConfig
from classroom.core.accounts import AccountService
from classroom.core.achievements import AchievementService
from classroom.core.grader import QuizGrader
from classroom.core.progress import ProgressTracker
from classroom.core.queries import QueryService
from classroom.core.store import EntityStore


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_queries(request: Request) -> QueryService:
    return QueryService(get_store(request))


def get_progress_tracker(request: Request) -> ProgressTracker:
    return ProgressTracker(get_store(request))


def get_grader(request: Request) -> QuizGrader:
    return QuizGrader(get_store(request))


def get_accounts(request: Request) -> AccountService:
    return AccountService(get_store(request))


def get_achievements(request: Request) -> AchievementService:
    config = get_config(request)
    return AchievementService(
        get_store(request),
        allow_duplicates=config.achievements.allow_duplicates,
    )


def get_current_user_id(request: Request) -> int:
    """Id of the acting user. There is no session yet; it comes from config."""
    return get_config(request).session.current_user_id
