#!/usr/bin/env python3
"""
Scheduler administration API routes
"""

import json
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request

from supplycast.api.deps import get_scheduler_service, to_http_exception
from supplycast.core.security import require_admin
from supplycast.models.user import User
from supplycast.schemas.scheduler import JobExecutionResponse
from supplycast.services.scheduler_service import SchedulerService
from supplycast.utils.response import success_response

router = APIRouter(prefix="/scheduler", tags=["Scheduler"])

def _serialize(execution):
    data = JobExecutionResponse.model_validate(execution).model_dump(mode="json")
    data["result_summary"] = json.loads(execution.result_summary) if execution.result_summary else None
    return data

@router.get("/status")
async def scheduler_status(request: Request, _: User = Depends(require_admin)):
    """Background scheduler state"""
    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is None:
        return success_response({"running": False, "jobs": SchedulerService.job_names()})
    return success_response(dict(scheduler.status(), jobs=SchedulerService.job_names()))

@router.get("/executions")
async def job_executions(
    job_name: Optional[str] = None,
    limit: int = Query(50, ge=1, le=500),
    admin: User = Depends(require_admin),
    service: SchedulerService = Depends(get_scheduler_service)
):
    """Most recent job executions of the company"""
    return success_response([_serialize(e) for e in service.get_executions(admin.company_id, job_name, limit)])

@router.post("/run/{job_name}")
async def run_job(
    job_name: str,
    admin: User = Depends(require_admin),
    service: SchedulerService = Depends(get_scheduler_service)
):
    """Run a job now for the caller's company"""
    try:
        execution = service.run_job(job_name, admin.company_id)
    except Exception as e:
        raise to_http_exception(e)
    return success_response(_serialize(execution), message=f"Job {job_name} finished with status {execution.status}")
