"""
Tests for scheduled job execution.
"""
import json
from datetime import datetime

import pytest

from supplycast.core.config import Settings
from supplycast.core.exceptions import ValidationError
from supplycast.core.scheduler_background import JobScheduler
from supplycast.models import Company, JobExecution
from supplycast.services.forecasting_service import ForecastService
from supplycast.services.scheduler_service import SchedulerService


@pytest.fixture
def service(db_session, settings):
    return SchedulerService(db_session, settings)


class TestRunJob:

    def test_forecast_job_success(self, service, company, add_item, add_history):
        add_item("SKU-A")
        add_history("SKU-A", [10, 20, 30])

        execution = service.run_job("forecasts", company.id)
        assert execution.status == "success"
        summary = json.loads(execution.result_summary)
        assert summary["succeeded"] == 1
        assert summary["failed"] == 0

    def test_forecast_job_partial(self, service, company, add_item, add_history):
        add_item("SKU-A")
        add_item("SKU-B")
        add_history("SKU-A", [10, 20, 30])

        execution = service.run_job("forecasts", company.id)
        assert execution.status == "partial"
        summary = json.loads(execution.result_summary)
        assert summary["failures"][0]["sku"] == "SKU-B"

    def test_reorder_job(self, service, company, add_item, add_history):
        add_item("SKU-A", quantity=0, reorder_point=10)
        add_history("SKU-A", [100] * 6)

        execution = service.run_job("reorder_suggestions", company.id)
        assert execution.status == "success"
        assert json.loads(execution.result_summary)["succeeded"] == 1

    def test_job_failure_is_recorded(self, service, company, monkeypatch):
        def explode(self, company_id, months=None):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(ForecastService, "generate_bulk_forecasts", explode)

        execution = service.run_job("forecasts", company.id)
        assert execution.status == "failed"
        assert execution.error_message == "database unavailable"

    def test_unknown_job(self, service, company):
        with pytest.raises(ValidationError):
            service.run_job("cleanup", company.id)

    def test_executions_newest_first(self, service, company):
        service.run_job("forecasts", company.id)
        service.run_job("reorder_suggestions", company.id)

        executions = service.get_executions(company.id)
        assert [e.job_name for e in executions] == ["reorder_suggestions", "forecasts"]
        assert [e.job_name for e in service.get_executions(company.id, "forecasts")] == ["forecasts"]


class TestJobScheduler:

    @pytest.fixture
    def scheduler(self, session_factory):
        return JobScheduler(session_factory, Settings(FORECAST_JOB_HOUR=2, REORDER_JOB_HOUR=4))

    def test_due_jobs_follow_configured_hours(self, scheduler):
        assert scheduler.due_jobs(datetime(2024, 1, 15, 1, 0)) == []
        assert scheduler.due_jobs(datetime(2024, 1, 15, 3, 0)) == ["forecasts"]
        assert scheduler.due_jobs(datetime(2024, 1, 15, 5, 0)) == ["forecasts", "reorder_suggestions"]

    def test_jobs_run_once_per_day(self, scheduler, company):
        scheduler.run_due_jobs(datetime(2024, 1, 15, 5, 0))
        assert scheduler.due_jobs(datetime(2024, 1, 15, 23, 0)) == []
        assert scheduler.due_jobs(datetime(2024, 1, 16, 5, 0)) == ["forecasts", "reorder_suggestions"]

    def test_runs_for_every_active_company(self, scheduler, db_session, company, other_company):
        cancelled = Company(name="Initech", subscription_status="cancelled")
        db_session.add(cancelled)
        db_session.commit()

        scheduler.run_due_jobs(datetime(2024, 1, 15, 3, 0))

        db_session.expire_all()
        rows = db_session.query(JobExecution).all()
        assert sorted(row.company_id for row in rows) == sorted([company.id, other_company.id])
        assert all(row.job_name == "forecasts" for row in rows)

    def test_status(self, scheduler):
        status = scheduler.status()
        assert status["running"] is False
        assert status["job_hours"] == {"forecasts": 2, "reorder_suggestions": 4}
