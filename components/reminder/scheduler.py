"""Cron job that runs the reminder sweep once a day."""

import asyncio
from datetime import datetime, tzinfo
from typing import Optional, Union

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from components.reminder.sweep import ReminderSweep, SweepReport

logger = structlog.get_logger(__name__)

JOB_ID = "reminder-sweep"


class ReminderScheduler:
    """
    Fires the sweep every day at a fixed wall-clock time.

    Scheduling is delegated to an APScheduler ``CronTrigger``, so the run
    stays at HH:MM local time across DST changes. Overlapping runs are
    prevented with ``max_instances=1``; missed fires are coalesced.
    Holds nothing but its job; all state lives in the database.
    """

    MISFIRE_GRACE_SECONDS = 3600

    def __init__(
        self,
        sweep: ReminderSweep,
        hour: int = 9,
        minute: int = 0,
        timezone: Optional[Union[str, tzinfo]] = None,
    ) -> None:
        self._sweep = sweep
        self.trigger = CronTrigger(hour=hour, minute=minute, timezone=timezone)
        self._scheduler: Optional[AsyncIOScheduler] = None
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def next_run_after(self, now: datetime) -> Optional[datetime]:
        return self.trigger.get_next_fire_time(None, now)

    def _today(self):
        return datetime.now(self.trigger.timezone).date()

    async def run_once(self) -> Optional[SweepReport]:
        """Run one sweep for the current day; errors are logged so the job keeps firing."""
        self._idle.clear()
        today = self._today()
        try:
            return await self._sweep.run(today)
        except Exception:
            logger.exception("reminder.sweep_failed", today=today.isoformat())
            return None
        finally:
            self._idle.set()

    def start(self) -> None:
        if self.running:
            return
        self._scheduler = AsyncIOScheduler(timezone=self.trigger.timezone)
        self._scheduler.add_job(
            self.run_once,
            self.trigger,
            id=JOB_ID,
            max_instances=1,
            coalesce=True,
            misfire_grace_time=self.MISFIRE_GRACE_SECONDS,
        )
        self._scheduler.start()
        job = self._scheduler.get_job(JOB_ID)
        logger.info(
            "reminder.scheduler_started",
            next_run=job.next_run_time.isoformat() if job and job.next_run_time else None,
        )

    async def stop(self) -> None:
        """Stop firing new runs, let an in-flight sweep finish, then shut down."""
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.pause()
            await self._idle.wait()
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("reminder.scheduler_stopped")
