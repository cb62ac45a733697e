"""
NoteSpace FastAPI application entry point.

Flow: identity sync → workspaces → invitations → members → shared notes
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from notespace import __version__
from notespace.config import get_settings
from notespace.db.session import check_db_connection, engine

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    logger.info("NoteSpace starting")
    try:
        try:
            check_db_connection()
            logger.info("Database connection verified")
        except Exception as e:
            logger.critical("Database unreachable: %s", e)
            raise

        if not get_settings().secret_key:
            logger.warning("SECRET_KEY is empty; identity tokens cannot be verified securely")

        yield
    finally:
        logger.info("NoteSpace shutting down")
        engine.dispose()
        logger.info("Database connection pool closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    from notespace.api.errors import register_error_handlers

    register_error_handlers(app)

    # Mount API routes
    from notespace.api.notes import router as notes_router
    from notespace.api.users import router as users_router
    from notespace.api.workspaces import router as workspaces_router

    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(workspaces_router, prefix="/api/workspaces", tags=["workspaces"])
    app.include_router(notes_router, prefix="/api/workspaces", tags=["notes"])

    @app.get("/health")
    def health() -> dict:
        """Health check endpoint. Confirms DB connectivity."""
        from sqlalchemy import text

        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {
                "status": "ok",
                "version": __version__,
                "database": "connected",
            }
        except Exception:
            from fastapi.responses import JSONResponse

            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "version": __version__,
                    "database": "disconnected",
                },
            )

    return app


app = create_app()
