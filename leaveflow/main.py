from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leaveflow.api.v1.router import router as api_v1_router
from leaveflow.config.logging import get_logger, setup_logging
from leaveflow.config.settings import Settings, get_settings
from leaveflow.core.exceptions import register_exception_handlers
from leaveflow.core.middleware import register_middlewares
from leaveflow.db.init_db import init_db
from leaveflow.db.session import build_engine, build_session_factory
from leaveflow.services.auth.auth_service import AuthService
from leaveflow.services.leave.leave_request_service import LeaveRequestService
from leaveflow.services.notification.dispatcher import NotificationDispatcher
from leaveflow.services.notification.push_gateway import (
    FirebasePushGateway,
    LoggingPushGateway,
    PushGateway,
)
from leaveflow.services.workflow.approver_resolver import ApproverResolver

logger = get_logger(__name__)


def build_push_gateway(settings: Settings) -> PushGateway:
    if settings.PUSH_ENABLED and settings.FIREBASE_CREDENTIALS_FILE:
        return FirebasePushGateway(settings.FIREBASE_CREDENTIALS_FILE)
    logger.warning("Firebase credentials not configured, push notifications run in dry-run mode")
    return LoggingPushGateway()


def create_app(
    settings: Optional[Settings] = None,
    push_gateway: Optional[PushGateway] = None,
) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures logging, title, version and debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Builds the engine, session factory and services onto ``app.state``.
    - Includes the API router under ``API_PREFIX``.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS Configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register shared core middlewares (request ID, timing, error logging)
    register_middlewares(app)
    register_exception_handlers(app)

    engine = build_engine(settings)
    session_factory = build_session_factory(engine)
    gateway = push_gateway or build_push_gateway(settings)
    dispatcher = NotificationDispatcher(session_factory, gateway)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.leave_service = LeaveRequestService(
        session_factory,
        dispatcher,
        ApproverResolver(session_factory),
    )
    app.state.auth_service = AuthService(session_factory, settings)

    app.include_router(api_v1_router, prefix=settings.API_PREFIX)

    # Schema bootstrap for dev/test; production schemas are provisioned separately
    @app.on_event("startup")
    async def on_startup() -> None:
        if settings.AUTO_CREATE_TABLES and not settings.is_production():
            init_db(engine)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        engine.dispose()

    logger.info(f"{settings.APP_NAME} {settings.API_VERSION} configured ({settings.ENVIRONMENT})")
    return app


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "leaveflow.main:create_app",
        factory=True,
        host=_settings.HOST,
        port=_settings.PORT,
        reload=_settings.is_development(),
    )
