#!/usr/bin/env python3
"""
Background scheduler thread for the nightly forecast and reorder jobs
"""

import threading
import logging
from datetime import datetime, date
from typing import Callable, Dict, Optional

from supplycast.core.config import Settings
from supplycast.models.scheduler import JobName
from supplycast.repositories.company_repository import get_active_companies
from supplycast.services.scheduler_service import SchedulerService

logger = logging.getLogger(__name__)

class JobScheduler:
    """Runs each job once a day at its configured UTC hour for every active company"""

    def __init__(self, session_factory: Callable, settings: Settings):
        self.session_factory = session_factory
        self.settings = settings
        self.running = False
        self.scheduler_thread = None
        self.check_interval = settings.SCHEDULER_CHECK_INTERVAL
        self.job_hours = {
            JobName.FORECASTS.value: settings.FORECAST_JOB_HOUR,
            JobName.REORDER_SUGGESTIONS.value: settings.REORDER_JOB_HOUR
        }
        self.last_run: Dict[str, date] = {}
        self._stop_event = threading.Event()

    def start(self):
        """Start the scheduler thread"""
        if self.running:
            logger.warning("Scheduler is already running")
            return

        self.running = True
        self._stop_event.clear()
        self.scheduler_thread = threading.Thread(target=self._run_scheduler, daemon=True)
        self.scheduler_thread.start()
        logger.info("Job scheduler started")

    def stop(self):
        """Stop the scheduler thread"""
        self.running = False
        self._stop_event.set()
        if self.scheduler_thread:
            self.scheduler_thread.join(timeout=5)
        logger.info("Job scheduler stopped")

    def _run_scheduler(self):
        """Main scheduler loop - runs in background thread"""
        while self.running:
            try:
                self.run_due_jobs()
            except Exception as e:
                logger.error(f"Error in scheduler loop: {e}")

            self._stop_event.wait(self.check_interval)

    def due_jobs(self, now: datetime):
        """Jobs whose hour has come and that have not yet run today"""
        return [
            job_name for job_name, hour in self.job_hours.items()
            if now.hour >= hour and self.last_run.get(job_name) != now.date()
        ]

    def run_due_jobs(self, now: Optional[datetime] = None):
        now = now or datetime.utcnow()
        for job_name in self.due_jobs(now):
            self.run_job_for_all(job_name)
            self.last_run[job_name] = now.date()

    def run_job_for_all(self, job_name: str):
        """Run a job for every active company, each in its own session"""
        db = self.session_factory()
        try:
            company_ids = [c.id for c in get_active_companies(db)]
        finally:
            db.close()

        logger.info(f"Running job {job_name} for {len(company_ids)} companies")
        for company_id in company_ids:
            db = self.session_factory()
            try:
                SchedulerService(db, self.settings).run_job(job_name, company_id)
            except Exception as e:
                logger.error(f"Job {job_name} could not run for company {company_id}: {e}")
            finally:
                db.close()
        logger.info(f"Job {job_name} completed")

    def status(self) -> dict:
        return {
            "running": self.running,
            "check_interval": self.check_interval,
            "job_hours": dict(self.job_hours),
            "last_run": {name: day.isoformat() for name, day in self.last_run.items()}
        }
