#!/usr/bin/env python3
"""
Forecast engine - seasonality/trend demand projection and reorder-point math

Pure computation over a demand series; persistence lives in the services that
call it.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from supplycast.core.exceptions import InsufficientDataError, ValidationError


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going towards +inf"""
    return int(math.floor(value + 0.5))


@dataclass
class ForecastPeriod:
    """Projected demand for one calendar month"""
    period: str
    demand: int
    lower_bound: int
    upper_bound: int
    confidence: float

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "demand": self.demand,
            "lowerBound": self.lower_bound,
            "upperBound": self.upper_bound,
            "confidence": self.confidence
        }


@dataclass
class ForecastResult:
    """Forecast for one SKU as returned to the caller"""
    sku: str
    historical_data: List[float]
    forecast: List[ForecastPeriod]
    seasonality_index: float
    trend: float
    synthetic: bool = False

    def to_dict(self) -> dict:
        return {
            "sku": self.sku,
            "historicalData": list(self.historical_data),
            "forecast": [p.to_dict() for p in self.forecast],
            "seasonalityIndex": self.seasonality_index,
            "trend": self.trend,
            "synthetic": self.synthetic
        }


@dataclass
class ReorderPoint:
    """Reorder threshold and the safety stock it includes"""
    reorder_point: int
    safety_stock: int
    average_daily_demand: float
    lead_time_days: int
    standard_deviation: float = 0.0

    def to_dict(self) -> dict:
        return {
            "reorderPoint": self.reorder_point,
            "safetyStock": self.safety_stock,
            "averageDailyDemand": self.average_daily_demand,
            "leadTimeDays": self.lead_time_days,
            "standardDeviation": self.standard_deviation
        }


class ForecastEngine:
    """Seasonality and trend adjusted demand projection"""

    MIN_OBSERVATIONS = 3
    Z_SCORE = 1.96
    CONFIDENCE = 0.95
    SEASON_LENGTH = 12
    SEASONAL_AMPLITUDE = 0.2
    DAYS_PER_PERIOD = 30
    SYNTHETIC_LENGTH = 12
    SYNTHETIC_NOISE = 0.3

    @staticmethod
    def to_series(data: Sequence[float]) -> np.ndarray:
        """Validate a demand series and convert it to a float array"""
        values = np.asarray(list(data), dtype=float)
        if values.size and not np.all(np.isfinite(values)):
            raise ValidationError("Demand observations must be finite numbers")
        if values.size and np.any(values < 0):
            raise ValidationError("Demand observations must be non-negative")
        return values

    @staticmethod
    def calculate_seasonality_index(data: np.ndarray) -> float:
        """Ratio of the mean of the last 3 observations to the overall mean"""
        if len(data) < 2:
            return 1.0

        mean = float(np.mean(data))
        if mean == 0:
            return 1.0
        return float(np.mean(data[-3:])) / mean

    @staticmethod
    def calculate_trend(data: np.ndarray) -> float:
        """Percentage change between the first and second half means"""
        if len(data) < 2:
            return 0.0

        half = len(data) // 2
        first_mean = float(np.mean(data[:half]))
        second_mean = float(np.mean(data[half:]))
        if first_mean == 0:
            return 0.0
        return (second_mean - first_mean) / first_mean * 100

    @staticmethod
    def calculate_standard_deviation(data: np.ndarray) -> float:
        """Population standard deviation"""
        if len(data) == 0:
            return 0.0
        return float(np.std(data, ddof=0))

    @staticmethod
    def period_labels(months: int, today: Optional[date] = None) -> List[str]:
        """Consecutive YYYY-MM labels starting the month after `today`"""
        today = today or date.today()
        start = pd.Period(today, freq='M') + 1
        return list(pd.period_range(start=start, periods=months, freq='M').strftime('%Y-%m'))

    @classmethod
    def generate_periods(
        cls,
        data: np.ndarray,
        trend: float,
        seasonality_index: float,
        months: int,
        today: Optional[date] = None
    ) -> List[ForecastPeriod]:
        """Project `months` periods with 95% normal-approximation bounds"""
        base_demand = float(np.mean(data))
        trend_factor = 1 + trend / 100
        margin = cls.calculate_standard_deviation(data) * cls.Z_SCORE

        periods = []
        for i, label in enumerate(cls.period_labels(months, today)):
            seasonality_adjustment = 1 + math.sin(2 * math.pi * i / cls.SEASON_LENGTH) * cls.SEASONAL_AMPLITUDE
            trend_adjustment = trend_factor ** i
            demand = round_half_up(base_demand * seasonality_adjustment * trend_adjustment * seasonality_index)

            periods.append(ForecastPeriod(
                period=label,
                demand=demand,
                lower_bound=max(0, round_half_up(demand - margin)),
                upper_bound=round_half_up(demand + margin),
                confidence=cls.CONFIDENCE
            ))
        return periods

    @classmethod
    def forecast(
        cls,
        sku: str,
        data: Sequence[float],
        months: int = 12,
        today: Optional[date] = None,
        synthetic: bool = False
    ) -> ForecastResult:
        """Forecast `months` periods from a chronological demand series"""
        if months < 0:
            raise ValidationError("months must be zero or positive", details={"months": months})

        series = cls.to_series(data)
        if len(series) < cls.MIN_OBSERVATIONS:
            raise InsufficientDataError(
                details={"sku": sku, "observations": int(len(series)), "required": cls.MIN_OBSERVATIONS}
            )

        seasonality_index = cls.calculate_seasonality_index(series)
        trend = cls.calculate_trend(series)

        return ForecastResult(
            sku=sku,
            historical_data=[float(v) for v in series],
            forecast=cls.generate_periods(series, trend, seasonality_index, months, today),
            seasonality_index=seasonality_index,
            trend=trend,
            synthetic=synthetic
        )

    @classmethod
    def reorder_point(cls, data: Sequence[float], lead_time_days: int) -> ReorderPoint:
        """Reorder point = average daily demand over the lead time plus safety stock"""
        series = cls.to_series(data)
        if len(series) == 0:
            raise InsufficientDataError("No demand history to compute a reorder point from")
        if lead_time_days <= 0:
            raise ValidationError("lead_time_days must be positive", details={"lead_time_days": lead_time_days})

        average_daily_demand = float(np.mean(series)) / cls.DAYS_PER_PERIOD
        standard_deviation = cls.calculate_standard_deviation(series)
        safety_stock = math.ceil(cls.Z_SCORE * standard_deviation * math.sqrt(lead_time_days))
        reorder_point = math.ceil(average_daily_demand * lead_time_days + safety_stock)

        return ReorderPoint(
            reorder_point=int(reorder_point),
            safety_stock=int(safety_stock),
            average_daily_demand=average_daily_demand,
            lead_time_days=lead_time_days,
            standard_deviation=standard_deviation
        )

    @classmethod
    def synthesize_history(cls, base_value: float, rng: Optional[np.random.Generator] = None) -> List[float]:
        """Bootstrap series: base value with sinusoidal seasonality and +/-15% noise"""
        rng = rng if rng is not None else np.random.default_rng()
        history = []
        for i in range(cls.SYNTHETIC_LENGTH):
            variation = (rng.random() - 0.5) * base_value * cls.SYNTHETIC_NOISE
            seasonality = math.sin(2 * math.pi * i / cls.SEASON_LENGTH) * base_value * cls.SEASONAL_AMPLITUDE
            history.append(float(max(0, round_half_up(base_value + variation + seasonality))))
        return history

