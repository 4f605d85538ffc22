#!/usr/bin/env python3
"""
Scheduler repository for job executions
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from datetime import datetime
from supplycast.models.scheduler import JobExecution

def create_job_execution(
    db: Session,
    job_name: str,
    company_id: int,
    started_at: datetime,
    status: str
) -> JobExecution:
    """Create job execution record"""
    execution = JobExecution(
        job_name=job_name,
        company_id=company_id,
        started_at=started_at,
        status=status
    )
    db.add(execution)
    db.commit()
    db.refresh(execution)
    return execution

def update_job_execution(
    db: Session,
    execution: JobExecution,
    status: str,
    duration_seconds: Optional[int] = None,
    result_summary: Optional[str] = None,
    error_message: Optional[str] = None
) -> JobExecution:
    """Record the outcome of a job execution"""
    execution.status = status
    execution.duration_seconds = duration_seconds
    execution.result_summary = result_summary
    execution.error_message = error_message
    db.commit()
    db.refresh(execution)
    return execution

def get_job_executions(
    db: Session,
    company_id: int,
    job_name: Optional[str] = None,
    limit: int = 50
) -> List[JobExecution]:
    """Get execution history of a company, newest first"""
    query = db.query(JobExecution).filter(JobExecution.company_id == company_id)
    if job_name:
        query = query.filter(JobExecution.job_name == job_name)
    return query.order_by(JobExecution.started_at.desc(), JobExecution.id.desc()).limit(limit).all()
