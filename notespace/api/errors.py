"""Map service errors to JSON responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from notespace.services.errors import WorkspaceServiceError

logger = logging.getLogger(__name__)


async def workspace_error_handler(request: Request, exc: WorkspaceServiceError) -> JSONResponse:
    """Render a WorkspaceServiceError as {"detail", "code"} with its status."""
    logger.info(
        "%s %s -> %s (%s)",
        request.method,
        request.url.path,
        exc.status_code,
        exc.code,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the service error handler to app."""
    app.add_exception_handler(WorkspaceServiceError, workspace_error_handler)
