"""FastAPI application factory.

Main entry point for the Classroom Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from classroom.config.app_config import AppConfig, load_app_config
from classroom.config.seed import load_seed_data, seed_store
from classroom.core.store import EntityStore, Table
from classroom.web.errors import register_exception_handlers
from classroom.web.routes import (
    health_router,
    auth_router,
    subjects_router,
    courses_router,
    lessons_router,
    progress_router,
    quizzes_router,
    achievements_router,
    users_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    store: EntityStore = app.state.store
    logger.info(
        "api_startup",
        subjects=store.count(Table.SUBJECTS),
        courses=store.count(Table.COURSES),
        quizzes=store.count(Table.QUIZZES),
        users=store.count(Table.USERS),
    )
    yield
    # State is process-local and simply dropped on shutdown
    logger.info("api_shutdown")


def create_app(
    store: EntityStore | None = None,
    config: AppConfig | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Entity store to serve. When omitted a new store is created
            and, if enabled in config, seeded with the startup catalog.
        config: Application config. Defaults to ``load_app_config()``.

    Returns:
        Configured FastAPI app instance
    """
    config = config or load_app_config()

    if store is None:
        store = EntityStore()
        if config.seed.enabled:
            seed_store(store, load_seed_data())

    app = FastAPI(
        title=config.api.title,
        description="Courses, quizzes, progress and achievements for K-12 learners",
        version=config.api.version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.config = config

    # CORS middleware for web clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(subjects_router)
    app.include_router(courses_router)
    app.include_router(lessons_router)
    app.include_router(progress_router)
    app.include_router(quizzes_router)
    app.include_router(achievements_router)
    app.include_router(users_router)

    return app
