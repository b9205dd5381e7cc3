"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from enrollflow.api.dependencies import (
    close_record_store,
    close_workflow,
    init_record_store,
    init_workflow,
)
from enrollflow.api.models import APIResponse
from enrollflow.api.routes import accounts, archive, courses, enrollment_requests, enrollments
from enrollflow.config import Settings
from enrollflow.notifications import (
    LoggingNotificationSender,
    NotificationDispatcher,
    StaticEvidenceStore,
    WebhookNotificationSender,
)
from enrollflow.record_store import (
    ConflictError,
    EnrollflowError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from enrollflow.referrals import ReferralLedger
from enrollflow.workflow import EnrollmentWorkflow

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from enrollflow.notifications import NotificationSender

logger = logging.getLogger(__name__)


def _build_sender(settings: Settings) -> NotificationSender:
    """Pick the notification sender for the configured relay."""
    if settings.notify_webhook_url:
        return WebhookNotificationSender(
            settings.notify_webhook_url,
            timeout=settings.notify_timeout,
            token=settings.notify_token,
        )
    return LoggingNotificationSender()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    # Startup
    store = init_record_store(settings.db_path)
    sender = _build_sender(settings)
    workflow = EnrollmentWorkflow(
        store=store,
        ledger=ReferralLedger(store),
        notifier=NotificationDispatcher(sender, background=settings.notify_in_background),
        evidence_store=StaticEvidenceStore(settings.evidence_base_url),
    )
    init_workflow(workflow)
    logger.info("enrollflow API started (db=%s)", settings.db_path)

    yield
    # Shutdown
    if isinstance(sender, WebhookNotificationSender):
        sender.close()
    close_workflow()
    close_record_store()


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=str(exc)).model_dump(),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Service settings. Read from the environment when omitted.
    """
    app = FastAPI(
        title="enrollflow API",
        description="REST API for enrollflow - Course enrollment, review and progress tracking",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings if settings is not None else Settings.from_env()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers, most specific category first
    @app.exception_handler(NotFoundError)
    async def not_found_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(ConflictError)
    async def conflict_handler(_request: Request, exc: ConflictError) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, exc)

    @app.exception_handler(InvalidTransitionError)
    async def invalid_transition_handler(
        _request: Request, exc: InvalidTransitionError
    ) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, exc)

    @app.exception_handler(ValidationError)
    async def validation_handler(_request: Request, exc: ValidationError) -> JSONResponse:
        return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, exc)

    @app.exception_handler(EnrollflowError)
    async def enrollflow_error_handler(_request: Request, exc: EnrollflowError) -> JSONResponse:
        logger.error("Unhandled enrollflow error: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=APIResponse[None](data=None, error="Internal server error").model_dump(),
        )

    # Include routers
    app.include_router(accounts.router, prefix="/api/v1")
    app.include_router(courses.router, prefix="/api/v1")
    app.include_router(enrollment_requests.router, prefix="/api/v1")
    app.include_router(archive.router, prefix="/api/v1")
    app.include_router(enrollments.router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()
