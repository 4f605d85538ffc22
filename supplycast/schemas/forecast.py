#!/usr/bin/env python3
"""
Forecast and reorder schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

class ActualRequest(BaseModel):
    """Observed demand for a forecast period"""
    actual: float = Field(..., ge=0)

class StoredForecastResponse(BaseModel):
    """Persisted forecast period"""
    period: str
    forecast: int
    lower_bound: int
    upper_bound: int
    confidence: float
    trend: Optional[float]
    seasonality_index: Optional[float]
    actual: Optional[float]
    version: int
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
