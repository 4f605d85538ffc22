#!/usr/bin/env python3
"""
Scheduler schemas
"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class JobExecutionResponse(BaseModel):
    """Schema for job execution response"""
    id: int
    job_name: str
    company_id: int
    started_at: datetime
    status: str
    duration_seconds: Optional[int]
    result_summary: Optional[str]
    error_message: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
