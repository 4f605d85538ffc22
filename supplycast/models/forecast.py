#!/usr/bin/env python3
"""
Persisted forecast periods
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, UniqueConstraint
from datetime import datetime
from supplycast.core.database import Base

class ForecastRecord(Base):
    """One forecast period, upserted by (company_id, sku, period)"""
    __tablename__ = "forecast_history"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    sku = Column(String(100), nullable=False, index=True)
    period = Column(String(7), nullable=False)
    forecast = Column(Integer, nullable=False)
    lower_bound = Column(Integer, nullable=False)
    upper_bound = Column(Integer, nullable=False)
    confidence = Column(Float, nullable=False)
    trend = Column(Float, nullable=True)
    seasonality_index = Column(Float, nullable=True)
    actual = Column(Float, nullable=True)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint('company_id', 'sku', 'period', name='unique_forecast_period'),
    )
