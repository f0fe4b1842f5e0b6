"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todo_api.api.deps import get_password_hasher
from todo_api.api.error_handlers import register_error_handlers
from todo_api.api.v1 import router as api_router
from todo_api.core.config import APP_VERSION, Settings, get_settings
from todo_api.core.correlation import CorrelationIdMiddleware
from todo_api.core.database import SessionLocal, engine
from todo_api.core.logging_config import configure_logging
from todo_api.models import Base
from todo_api.services.seed import run_seed

logger = logging.getLogger(__name__)


def _startup(settings: Settings) -> None:
    """Create tables on SQLite dev databases and optionally seed demo data."""
    if settings.is_sqlite:
        # PostgreSQL schemas are managed by Alembic.
        Base.metadata.create_all(bind=engine)
    if settings.SEED_ON_STARTUP and settings.APP_ENV == "prod":
        logger.warning("SEED_ON_STARTUP is ignored with APP_ENV=prod")
    elif settings.SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            users_inserted, todos_inserted = run_seed(db, get_password_hasher(settings))
            logger.info("Seed completed: users=%s todos=%s", users_inserted, todos_inserted)
        finally:
            db.close()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.LOG_LEVEL)
        logger.info(
            "Starting todo-api %s (env=%s, token ttl=%smin)",
            APP_VERSION,
            settings.APP_ENV,
            settings.JWT_EXPIRE_MINUTES,
        )
        _startup(settings)
        yield

    app = FastAPI(
        title="Todo API",
        description="User management, authentication, and todo items",
        version=APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)
    register_error_handlers(app)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", include_in_schema=False)
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Todo API", "docs": "/docs"}

    return app


app = create_app()
