#!/usr/bin/env python3
"""
Scheduler models for automated forecast and reorder jobs
"""

from sqlalchemy import Column, Integer, String, DateTime, Text
from datetime import datetime
from enum import Enum as PyEnum
from supplycast.core.database import Base

class JobName(PyEnum):
    """Scheduled job enumeration"""
    FORECASTS = "forecasts"
    REORDER_SUGGESTIONS = "reorder_suggestions"

class ExecutionStatus(PyEnum):
    """Job execution status enumeration"""
    RUNNING = "running"
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"

class JobExecution(Base):
    """Model for storing job execution history, one row per company per run"""
    __tablename__ = "job_executions"

    id = Column(Integer, primary_key=True, index=True)
    job_name = Column(String(50), nullable=False, index=True)
    company_id = Column(Integer, nullable=False, index=True)
    started_at = Column(DateTime, nullable=False)
    status = Column(String(20), nullable=False)
    duration_seconds = Column(Integer, nullable=True)
    result_summary = Column(Text, nullable=True)
    error_message = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
