"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from photo_share.api.actions import router as actions_router
from photo_share.api.admin import router as admin_router
from photo_share.api.uploads import router as uploads_router
from photo_share.app_logging import configure_logging
from photo_share.containers import AppContainer
from photo_share.domain.errors import (
    Internal,
    InvalidArgument,
    NotFound,
    PhotoShareError,
)

_STATUS_BY_ERROR: dict[type[PhotoShareError], int] = {
    InvalidArgument: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    Internal: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        if state_container.settings.scheduler_enabled:
            for job in state_container.jobs:
                job.start()
        yield
        for job in state_container.jobs:
            await job.stop()
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(PhotoShareError)
    async def handle_photo_share_error(
        request: Request, exc: PhotoShareError
    ) -> JSONResponse:
        status_code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_502_BAD_GATEWAY)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Request failed: path=%s error=%s", request.url.path, exc)
        return JSONResponse(
            status_code=status_code, content={"success": False, "error": str(exc)}
        )

    app.include_router(actions_router)
    app.include_router(uploads_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
