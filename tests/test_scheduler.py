"""Scheduler manager tests"""
from unittest.mock import AsyncMock

import pytest

from folha_digest.infrastructure.scheduler import SchedulerManager
from folha_digest.services.config_service import DAILY_JOB_ID, ConfigService
from folha_digest.domain.config_store import ConfigStore


class TestSchedulerManager:
    def test_requires_create_scheduler(self):
        manager = SchedulerManager()

        with pytest.raises(RuntimeError):
            manager.add_cron_job(AsyncMock(), hour=8, minute=0, job_id=DAILY_JOB_ID)
        assert manager.get_job(DAILY_JOB_ID) is None
        assert manager.running is False

    def test_reschedule_without_job(self):
        manager = SchedulerManager()
        assert manager.reschedule_cron_job(DAILY_JOB_ID, hour=10) is False

    @pytest.mark.asyncio
    async def test_add_and_reschedule_daily_job(self):
        manager = SchedulerManager(timezone="America/Sao_Paulo")
        manager.create_scheduler()
        manager.add_cron_job(AsyncMock(), hour=8, minute=0, job_id=DAILY_JOB_ID)
        manager.start()
        try:
            job = manager.get_job(DAILY_JOB_ID)
            assert job.next_run_time.hour == 8
            assert job.next_run_time.minute == 0

            assert manager.reschedule_cron_job(DAILY_JOB_ID, hour=14) is True

            job = manager.get_job(DAILY_JOB_ID)
            assert job.next_run_time.hour == 14
            assert len(manager.scheduler.get_jobs()) == 1
        finally:
            manager.shutdown(wait=False)

        assert manager.running is False

    @pytest.mark.asyncio
    async def test_config_update_moves_job(self):
        manager = SchedulerManager(timezone="UTC")
        manager.create_scheduler()
        manager.add_cron_job(AsyncMock(), hour=8, minute=0, job_id=DAILY_JOB_ID)
        manager.start()
        try:
            service = ConfigService(ConfigStore(), manager)
            service.update(hour=21)

            assert manager.get_job(DAILY_JOB_ID).next_run_time.hour == 21
        finally:
            manager.shutdown(wait=False)
