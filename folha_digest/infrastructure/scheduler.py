"""Scheduler management"""

from typing import Any, Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loguru import logger


class SchedulerManager:
    """Owns the AsyncIOScheduler and the daily cron job."""

    def __init__(self, timezone: Optional[str] = None):
        """
        Args:
            timezone: IANA zone name; ``None`` means the process's local zone
        """
        self.scheduler: Optional[AsyncIOScheduler] = None
        self.timezone = timezone

    @property
    def _tz_label(self) -> str:
        return self.timezone or "local"

    def create_scheduler(self) -> AsyncIOScheduler:
        """Create the scheduler instance"""
        if self.scheduler is not None and self.scheduler.running:
            logger.warning("[Scheduler] A scheduler is already running, shutting it down...")
            try:
                self.scheduler.shutdown(wait=False)
            except Exception as e:  # noqa: BLE001
                logger.warning(f"[Scheduler] Error while shutting down old scheduler: {e}")

        if self.timezone:
            self.scheduler = AsyncIOScheduler(timezone=self.timezone)
        else:
            self.scheduler = AsyncIOScheduler()
        logger.info("[Scheduler] Scheduler instance created")
        return self.scheduler

    def add_cron_job(
        self,
        func: Callable,
        hour: int,
        minute: int,
        job_id: str,
        **kwargs: Any
    ) -> None:
        """
        Register a daily cron job.

        Args:
            func: coroutine function to run
            hour: hour of day
            minute: minute of hour
            job_id: job id; an existing job with the same id is replaced
            **kwargs: passed through to ``add_job``
        """
        if self.scheduler is None:
            raise RuntimeError("Scheduler not initialized, call create_scheduler() first")

        self.scheduler.add_job(
            func,
            "cron",
            hour=hour,
            minute=minute,
            id=job_id,
            replace_existing=True,
            **kwargs
        )
        logger.info(
            f"[Scheduler] Added job: {job_id}, "
            f"runs at {hour:02d}:{minute:02d} ({self._tz_label})"
        )

    def reschedule_cron_job(self, job_id: str, hour: int, minute: int = 0) -> bool:
        """
        Move an existing cron job to a new time of day.

        Returns:
            False when the scheduler or the job does not exist yet
        """
        if self.scheduler is None or self.scheduler.get_job(job_id) is None:
            logger.info(f"[Scheduler] Job {job_id} not registered yet, nothing to reschedule")
            return False

        kwargs = {"hour": hour, "minute": minute}
        if self.timezone:
            kwargs["timezone"] = self.timezone
        job = self.scheduler.reschedule_job(job_id, trigger="cron", **kwargs)
        logger.info(
            f"[Scheduler] Rescheduled job: {job_id} to {hour:02d}:{minute:02d} ({self._tz_label}), "
            f"next run = {getattr(job, 'next_run_time', None)}"
        )
        return True

    def start(self) -> None:
        """Start the scheduler"""
        if self.scheduler is None:
            raise RuntimeError("Scheduler not initialized, call create_scheduler() first")

        self.scheduler.start()
        logger.info("[Scheduler] Scheduler started, waiting for jobs to fire...")

        all_jobs = self.scheduler.get_jobs()
        logger.info(f"[Scheduler] {len(all_jobs)} scheduled job(s):")
        for job in all_jobs:
            next_run = getattr(job, 'next_run_time', None)
            if next_run:
                logger.info(f"[Scheduler]   - {job.id}: next run = {next_run}")
            else:
                logger.info(f"[Scheduler]   - {job.id}: added (next run pending)")

    def shutdown(self, wait: bool = True) -> None:
        """Stop the scheduler"""
        if self.scheduler is not None:
            try:
                if self.scheduler.running:
                    self.scheduler.shutdown(wait=wait)
                    logger.info("[Scheduler] Scheduler stopped")
                else:
                    logger.info("[Scheduler] Scheduler not running, nothing to stop")
            except Exception as e:  # noqa: BLE001
                logger.error(f"[Scheduler] Error while stopping scheduler: {e}")
            finally:
                self.scheduler = None

    def get_job(self, job_id: str) -> Optional[Any]:
        if self.scheduler is None:
            return None
        return self.scheduler.get_job(job_id)

    @property
    def running(self) -> bool:
        return self.scheduler is not None and self.scheduler.running
