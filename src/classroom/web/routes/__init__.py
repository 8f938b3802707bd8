"""Route handlers for the Web API."""

from classroom.web.routes.health import router as health_router
from classroom.web.routes.auth import router as auth_router
from classroom.web.routes.subjects import router as subjects_router
from classroom.web.routes.courses import router as courses_router
from classroom.web.routes.lessons import router as lessons_router
from classroom.web.routes.progress import router as progress_router
from classroom.web.routes.quizzes import router as quizzes_router
from classroom.web.routes.achievements import router as achievements_router
from classroom.web.routes.users import router as users_router

__all__ = [
    "health_router",
    "auth_router",
    "subjects_router",
    "courses_router",
    "lessons_router",
    "progress_router",
    "quizzes_router",
    "achievements_router",
    "users_router",
]
