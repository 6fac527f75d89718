"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from emerge_career.api import auth, chat, goals, profile, recommendations, routes
from emerge_career.api.errors import error_response, register_exception_handlers
from emerge_career.config import Settings, get_settings
from emerge_career.logging_setup import configure_logging
from emerge_career.storage.base import Storage
from emerge_career.storage.database import DatabaseStorage
from emerge_career.storage.memory import InMemoryStorage
from emerge_career.suggestions.pipeline import SuggestionPipeline

logger = structlog.get_logger()

# Paths reachable without the shared secret
_PUBLIC_PATHS = {"/api/health"}


def build_storage(settings: Settings) -> Storage:
    """Relational storage when a database URL is configured, else in-memory."""
    if settings.database_url:
        return DatabaseStorage.from_url(settings.database_url, echo=settings.database_echo)
    logger.warning("storage_in_memory", reason="database_url not set")
    return InMemoryStorage()


def create_app(
    settings: Settings | None = None,
    storage: Storage | None = None,
    pipeline: SuggestionPipeline | None = None,
) -> FastAPI:
    """Build the application with its storage backend and suggestion pipeline."""
    settings = settings or get_settings()
    storage = storage or build_storage(settings)
    pipeline = pipeline or SuggestionPipeline.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if isinstance(storage, DatabaseStorage):
            storage.create_tables()
        logger.info(
            "app_started",
            storage=type(storage).__name__,
            llm_configured=pipeline.generator.configured,
        )
        yield
        logger.info("app_stopped")

    app = FastAPI(title="Emerge Career", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.storage = storage
    app.state.pipeline = pipeline

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def auth_middleware(request: Request, call_next):
        """Optional APP_SECRET check on every API path except health."""
        if not settings.app_secret or request.url.path in _PUBLIC_PATHS:
            return await call_next(request)
        if request.method == "OPTIONS":
            return await call_next(request)
        if request.headers.get("X-App-Secret", "") != settings.app_secret:
            return error_response(401, "Unauthorized")
        return await call_next(request)

    register_exception_handlers(app)
    for module in (auth, profile, goals, chat, recommendations, routes):
        app.include_router(module.router)
    return app


configure_logging()
app = create_app()


def main() -> None:
    """Run the application."""
    settings = get_settings()
    uvicorn.run(
        "emerge_career.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":
    main()
