#!/usr/bin/env python3
"""
Scheduler service - runs the forecast and reorder jobs for a company and
records each execution
"""

import json
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from supplycast.core.config import Settings, settings as default_settings
from supplycast.core.exceptions import ValidationError
from supplycast.models.scheduler import ExecutionStatus, JobExecution, JobName
from supplycast.repositories.scheduler_repository import (
    create_job_execution,
    get_job_executions,
    update_job_execution
)
from supplycast.services.forecasting_service import ForecastService
from supplycast.services.reorder_service import ReorderService

logger = logging.getLogger(__name__)


class SchedulerService:
    """Executes scheduled jobs against one database session"""

    def __init__(self, db: Session, settings: Settings = default_settings):
        self.db = db
        self.settings = settings

    @staticmethod
    def job_names() -> List[str]:
        return [job.value for job in JobName]

    def _run(self, job_name: str, company_id: int):
        if job_name == JobName.FORECASTS.value:
            return ForecastService(self.db, self.settings).generate_bulk_forecasts(company_id)
        return ReorderService(self.db, self.settings).generate_suggestions(company_id)

    def run_job(self, job_name: str, company_id: int) -> JobExecution:
        """Run a job for one company; the execution row records the per-SKU outcome"""
        if job_name not in self.job_names():
            raise ValidationError(f"Unknown job '{job_name}'", details={"allowed": self.job_names()})

        started_at = datetime.utcnow()
        execution = create_job_execution(
            self.db,
            job_name=job_name,
            company_id=company_id,
            started_at=started_at,
            status=ExecutionStatus.RUNNING.value
        )
        logger.info(f"Running job {job_name} for company {company_id}")

        try:
            report = self._run(job_name, company_id)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Job {job_name} failed for company {company_id}: {e}")
            return update_job_execution(
                self.db,
                execution,
                status=ExecutionStatus.FAILED.value,
                duration_seconds=int((datetime.utcnow() - started_at).total_seconds()),
                error_message=str(e)
            )

        status = ExecutionStatus.PARTIAL.value if report.failure_count else ExecutionStatus.SUCCESS.value
        return update_job_execution(
            self.db,
            execution,
            status=status,
            duration_seconds=int((datetime.utcnow() - started_at).total_seconds()),
            result_summary=json.dumps(report.summary())
        )

    def get_executions(self, company_id: int, job_name: Optional[str] = None, limit: int = 50) -> List[JobExecution]:
        """Execution history of a company"""
        return get_job_executions(self.db, company_id, job_name, limit)
