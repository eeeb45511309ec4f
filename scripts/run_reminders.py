"""Run the overdue-payment reminder sweep once, e.g. from cron."""

from datetime import date
import asyncio

import structlog

from components.core.config import get_settings
from components.core.init_db import db_manager, init_db
from components.core.logging_config import configure_logging
from components.reminder.gateway import build_gateway
from components.reminder.sweep import ReminderSweep

logger = structlog.get_logger(__name__)


async def run_reminders():
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.JSON_LOGS)
    await init_db()
    gateway = build_gateway(settings)
    try:
        report = await ReminderSweep(db_manager.get_session(), gateway).run(date.today())
        logger.info("reminder.manual_run", sent=report.sent, failed=report.failed)
    finally:
        await gateway.aclose()
        await db_manager.dispose()


if __name__ == "__main__":
    asyncio.run(run_reminders())
