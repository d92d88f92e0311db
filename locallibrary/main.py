"""FastAPI entrypoint for the library catalog."""
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from starlette.exceptions import HTTPException as StarletteHTTPException

from locallibrary.config import Settings, settings as default_settings
from locallibrary.db.connection import close_pool, init_db
from locallibrary.routers import router as catalog_router
from locallibrary.services import build_repositories
from locallibrary.services.repository import Repositories
from locallibrary.utils.logger import get_logger
from locallibrary.utils.views import redirect, render

logger = get_logger(__name__)


def create_app(
    repositories: Optional[Repositories] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the application.

    Without ``repositories`` the app connects to PostgreSQL on startup and
    closes the pool on shutdown.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if repositories is not None:
            yield
            return
        pool = await init_db(settings)
        app.state.repositories = build_repositories(pool)
        try:
            yield
        finally:
            await close_pool()

    app = FastAPI(
        title="Local Library",
        version="0.1.0",
        description="Catalog of books, authors, genres and book copies.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    if repositories is not None:
        app.state.repositories = repositories

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return render(
            request,
            "error.html",
            status_code=exc.status_code,
            title="Error",
            message=exc.detail,
            status=exc.status_code,
            error=None,
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return render(
            request,
            "error.html",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            title="Error",
            message=str(exc) or "Internal Server Error",
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error="".join(traceback.format_exception(exc)) if settings.debug else None,
        )

    @app.get("/", include_in_schema=False)
    async def home():
        return redirect(f"{settings.catalog_prefix}/")

    @app.get("/health", tags=["health"])
    async def healthcheck():
        """Basic health check."""
        return {"status": "ok", "env": settings.app_env}

    app.include_router(catalog_router, prefix=settings.catalog_prefix)
    return app


app = create_app()
