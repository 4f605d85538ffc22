#!/usr/bin/env python3
"""
Forecast period repository
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from supplycast.models.forecast import ForecastRecord

def get_forecast_record(db: Session, company_id: int, sku: str, period: str) -> Optional[ForecastRecord]:
    """Get the stored forecast for one period"""
    return db.query(ForecastRecord).filter(
        ForecastRecord.company_id == company_id,
        ForecastRecord.sku == sku,
        ForecastRecord.period == period
    ).first()

def upsert_forecast_period(
    db: Session,
    company_id: int,
    sku: str,
    period: str,
    forecast: int,
    lower_bound: int,
    upper_bound: int,
    confidence: float,
    trend: float,
    seasonality_index: float
) -> ForecastRecord:
    """Create or overwrite the forecast for (company, sku, period); recorded actuals are kept"""
    record = get_forecast_record(db, company_id, sku, period)

    if record:
        record.forecast = forecast
        record.lower_bound = lower_bound
        record.upper_bound = upper_bound
        record.confidence = confidence
        record.trend = trend
        record.seasonality_index = seasonality_index
        record.version = (record.version or 0) + 1
    else:
        record = ForecastRecord(
            company_id=company_id,
            sku=sku,
            period=period,
            forecast=forecast,
            lower_bound=lower_bound,
            upper_bound=upper_bound,
            confidence=confidence,
            trend=trend,
            seasonality_index=seasonality_index,
            version=1
        )
        db.add(record)
    db.flush()
    return record

def get_forecast_records(db: Session, company_id: int, sku: str) -> List[ForecastRecord]:
    """Get stored forecast periods of a SKU in period order"""
    return db.query(ForecastRecord).filter(
        ForecastRecord.company_id == company_id,
        ForecastRecord.sku == sku
    ).order_by(ForecastRecord.period).all()

def get_records_with_actuals(db: Session, company_id: int, sku: str, limit: int = 12) -> List[ForecastRecord]:
    """Get the earliest stored periods with a recorded, non-zero actual"""
    return db.query(ForecastRecord).filter(
        ForecastRecord.company_id == company_id,
        ForecastRecord.sku == sku,
        ForecastRecord.actual.isnot(None),
        ForecastRecord.actual != 0
    ).order_by(ForecastRecord.period).limit(limit).all()
