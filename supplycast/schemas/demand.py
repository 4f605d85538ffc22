#!/usr/bin/env python3
"""
Demand history schemas
"""

from datetime import date
from typing import List
from pydantic import BaseModel, Field

class DemandPoint(BaseModel):
    """Observed demand for the period starting at period_start"""
    period_start: date
    demand: float = Field(..., ge=0)

class DemandHistoryRequest(BaseModel):
    """Demand observations to record for one SKU"""
    sku: str = Field(..., min_length=1)
    observations: List[DemandPoint] = Field(..., min_length=1)

class DemandPointResponse(BaseModel):
    """Stored demand observation"""
    period_start: date
    demand: float

    class Config:
        from_attributes = True
