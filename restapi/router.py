"""Application configuration and router setup."""

from contextlib import asynccontextmanager
import fastapi
import structlog
from fastapi.middleware import cors

from components.core.config import get_settings
from components.core.init_db import db_manager, init_db
from components.core.logging_config import configure_logging
from components.reminder.gateway import build_gateway
from components.reminder.scheduler import ReminderScheduler
from components.reminder.sweep import ReminderSweep
from restapi.endpoints import health_check, program, client, payment, dashboard

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    """Create the schema, wire the reminder sweep and run its daily timer."""
    settings = get_settings()
    await init_db()

    gateway = build_gateway(settings)
    sweep = ReminderSweep(db_manager.get_session(), gateway)
    scheduler = ReminderScheduler(
        sweep,
        hour=settings.REMINDER_HOUR,
        minute=settings.REMINDER_MINUTE,
        timezone=settings.REMINDER_TIMEZONE,
    )
    app.state.reminder_sweep = sweep
    app.state.reminder_scheduler = scheduler
    if settings.REMINDER_ENABLED:
        scheduler.start()

    logger.info(
        "app.started",
        service=settings.SERVICE_NAME,
        sms_provider=gateway.provider,
        reminders=settings.REMINDER_ENABLED,
    )
    try:
        yield
    finally:
        await scheduler.stop()
        await gateway.aclose()
        await db_manager.dispose()
        logger.info("app.stopped")


def create_app() -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.JSON_LOGS)

    app = fastapi.FastAPI(
        title=settings.SERVICE_NAME,
        description="Recurring client payments and overdue reminders for a fitness business",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Include routers
    app.include_router(health_check.router)
    app.include_router(program.router)
    app.include_router(client.router)
    app.include_router(payment.router)
    app.include_router(dashboard.router)

    return app
