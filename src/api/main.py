"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.error_handlers import register_exception_handlers
from src.api.routes import health, properties
from src.application.interfaces.notification_sender import NotificationSender
from src.config import Settings, settings
from src.infrastructure.auth.jwt_identity_verifier import JwtIdentityVerifier
from src.infrastructure.database.connection import Database
from src.infrastructure.log_config import configure_logging
from src.infrastructure.notifications.logging_sender import LoggingNotificationSender
from src.infrastructure.notifications.smtp_sender import SmtpNotificationSender

logger = structlog.get_logger(__name__)


def build_notification_sender(config: Settings) -> NotificationSender:
    if not config.smtp_host:
        return LoggingNotificationSender()
    return SmtpNotificationSender(
        config.smtp_host,
        config.smtp_port,
        username=config.smtp_username,
        password=config.smtp_password,
        use_tls=config.smtp_use_tls,
        timeout=config.smtp_timeout_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("rentify_starting")
    database = Database(settings.database_url, echo=settings.database_echo)
    app.state.database = database
    app.state.identity_verifier = JwtIdentityVerifier(settings.jwt_secret, settings.jwt_algorithm)
    app.state.notification_sender = build_notification_sender(settings)
    try:
        yield
    finally:
        await database.dispose()
        logger.info("rentify_stopping")


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Rentify Listings",
        description="Property rental listings: CRUD, likes and seller-interest emails.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(properties.router)

    return app


app = create_app()
