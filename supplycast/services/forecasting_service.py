#!/usr/bin/env python3
"""
Forecasting service - loads demand history, runs the forecast engine and
persists forecast periods
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from sqlalchemy.orm import Session

from supplycast.core.config import Settings, settings as default_settings
from supplycast.core.exceptions import NotFoundError, ValidationError
from supplycast.models.forecast import ForecastRecord
from supplycast.models.inventory import DemandObservation
from supplycast.repositories.forecast_repository import (
    get_forecast_record,
    get_forecast_records,
    get_records_with_actuals,
    upsert_forecast_period
)
from supplycast.repositories.inventory_repository import (
    get_company_skus,
    get_demand_history,
    get_inventory_item,
    upsert_demand_observation
)
from supplycast.services.forecast_engine import ForecastEngine, ForecastResult, round_half_up
from supplycast.services.reports import BatchReport

logger = logging.getLogger(__name__)

SYNTHETIC_FALLBACK_BASE = 100


@dataclass
class BulkForecastReport(BatchReport):
    """Bulk forecast run over a company's catalog"""
    months: int = 12
    forecasts: List[ForecastResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = self.summary()
        data["months"] = self.months
        data["forecasts"] = [f.to_dict() for f in self.forecasts]
        return data


class ForecastService:
    """Demand forecasting for one request or job; construct one per session"""

    def __init__(
        self,
        db: Session,
        settings: Settings = default_settings,
        today: Optional[date] = None,
        rng: Optional[np.random.Generator] = None
    ):
        self.db = db
        self.settings = settings
        self.today = today
        self.rng = rng

    def load_history(
        self,
        company_id: int,
        sku: str,
        allow_synthetic: Optional[bool] = None
    ) -> Tuple[List[float], bool]:
        """Return (series, synthetic) for a SKU

        When fewer than MIN_OBSERVATIONS real observations exist and the
        synthetic fallback is allowed, a bootstrap series is built from the
        item's current quantity.
        """
        if allow_synthetic is None:
            allow_synthetic = self.settings.SYNTHETIC_HISTORY_ENABLED

        observations = get_demand_history(self.db, company_id, sku, limit=self.settings.HISTORY_WINDOW)
        values = [float(o.demand) for o in observations]

        if len(values) >= ForecastEngine.MIN_OBSERVATIONS or not allow_synthetic:
            return values, False

        item = get_inventory_item(self.db, company_id, sku)
        if item is not None:
            base_value = item.quantity or 0
        elif not values:
            base_value = SYNTHETIC_FALLBACK_BASE
        else:
            return values, False

        logger.warning(
            f"Using synthetic demand history for company {company_id} SKU {sku} "
            f"({len(values)} real observations, base {base_value})"
        )
        return ForecastEngine.synthesize_history(base_value, self.rng), True

    def generate_forecast(
        self,
        company_id: int,
        sku: str,
        months: Optional[int] = None,
        allow_synthetic: Optional[bool] = None
    ) -> ForecastResult:
        """Forecast a SKU and upsert every period"""
        if months is None:
            months = self.settings.FORECAST_DEFAULT_MONTHS

        history, synthetic = self.load_history(company_id, sku, allow_synthetic)
        result = ForecastEngine.forecast(sku, history, months, today=self.today, synthetic=synthetic)

        self._save_forecast(company_id, result)
        logger.info(
            f"Forecast generated for company {company_id} SKU {sku}: "
            f"{len(result.forecast)} periods, trend {result.trend:.2f}%"
        )
        return result

    def _save_forecast(self, company_id: int, result: ForecastResult):
        for period in result.forecast:
            upsert_forecast_period(
                self.db,
                company_id=company_id,
                sku=result.sku,
                period=period.period,
                forecast=period.demand,
                lower_bound=period.lower_bound,
                upper_bound=period.upper_bound,
                confidence=period.confidence,
                trend=result.trend,
                seasonality_index=result.seasonality_index
            )
        self.db.commit()

    def generate_bulk_forecasts(self, company_id: int, months: Optional[int] = None) -> BulkForecastReport:
        """Forecast every SKU of a company; failures are logged and reported per SKU"""
        if months is None:
            months = self.settings.FORECAST_DEFAULT_MONTHS

        report = BulkForecastReport(company_id=company_id, months=months)
        for sku in get_company_skus(self.db, company_id):
            try:
                report.forecasts.append(self.generate_forecast(company_id, sku, months))
                report.succeeded(sku)
            except Exception as e:
                self.db.rollback()
                logger.error(f"Failed to generate forecast for company {company_id} SKU {sku}: {e}")
                report.failed(sku, e)

        logger.info(
            f"Bulk forecast for company {company_id}: "
            f"{report.success_count} succeeded, {report.failure_count} failed"
        )
        return report

    def get_stored_forecast(self, company_id: int, sku: str) -> List[ForecastRecord]:
        """Persisted forecast periods of a SKU in period order"""
        return get_forecast_records(self.db, company_id, sku)

    def record_actual(self, company_id: int, sku: str, period: str, actual: float) -> ForecastRecord:
        """Record the observed demand for a forecast period"""
        if actual is None or actual < 0:
            raise ValidationError("actual must be a non-negative number", details={"actual": actual})

        record = get_forecast_record(self.db, company_id, sku, period)
        if record is None:
            raise NotFoundError(
                f"No forecast stored for SKU {sku} period {period}",
                details={"sku": sku, "period": period}
            )

        record.actual = actual
        self.db.commit()
        self.db.refresh(record)
        return record

    def calculate_forecast_accuracy(self, company_id: int, sku: str, months: int = 12) -> int:
        """Accuracy percentage, 100 minus MAPE, over the earliest `months` periods with actuals

        Periods whose actual is zero carry no percentage error and do not count
        towards `months`.
        """
        records = get_records_with_actuals(self.db, company_id, sku, limit=months)
        errors = [abs((record.actual - record.forecast) / record.actual) for record in records]
        if not errors:
            return 0

        mape = float(np.mean(errors)) * 100
        return max(0, round_half_up((1 - mape / 100) * 100))

    def company_accuracy(self, company_id: int, months: int = 12) -> Dict[str, Any]:
        """Accuracy of every SKU of a company and their average"""
        accuracies = [
            {"sku": sku, "accuracy": self.calculate_forecast_accuracy(company_id, sku, months)}
            for sku in get_company_skus(self.db, company_id)
        ]
        average = round_half_up(float(np.mean([a["accuracy"] for a in accuracies]))) if accuracies else 0
        return {"averageAccuracy": average, "accuracies": accuracies}

    def record_demand(
        self,
        company_id: int,
        sku: str,
        observations: Sequence[Tuple[date, float]]
    ) -> List[DemandObservation]:
        """Record demand observations; a period recorded twice is overwritten"""
        for period_start, demand in observations:
            if demand is None or demand < 0:
                raise ValidationError(
                    "Demand observations must be non-negative",
                    details={"period_start": str(period_start), "demand": demand}
                )

        saved = []
        for period_start, demand in observations:
            saved.append(upsert_demand_observation(self.db, company_id, sku, period_start, demand))
        self.db.commit()
        return saved

    def get_history(self, company_id: int, sku: str) -> List[DemandObservation]:
        """Stored demand observations of a SKU, oldest first"""
        return get_demand_history(self.db, company_id, sku, limit=self.settings.HISTORY_WINDOW)
