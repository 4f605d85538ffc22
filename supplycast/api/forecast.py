#!/usr/bin/env python3
"""
Forecasting, reorder and inventory analysis API routes
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from supplycast.api.deps import (
    get_classification_service,
    get_forecast_service,
    get_reorder_service,
    to_http_exception
)
from supplycast.core.security import get_current_user
from supplycast.models.user import User
from supplycast.schemas.forecast import ActualRequest, StoredForecastResponse
from supplycast.services.classification_service import ClassificationService
from supplycast.services.forecasting_service import ForecastService
from supplycast.services.reorder_service import ReorderService
from supplycast.utils.response import batch_response, success_response

router = APIRouter(prefix="/forecasts", tags=["Forecasting"])

@router.get("/sku/{sku}")
async def forecast_sku(
    sku: str,
    months: Optional[int] = Query(None, ge=0),
    allow_synthetic: Optional[bool] = None,
    current_user: User = Depends(get_current_user),
    service: ForecastService = Depends(get_forecast_service)
):
    """Generate and store the demand forecast of a SKU"""
    try:
        result = service.generate_forecast(current_user.company_id, sku, months, allow_synthetic)
    except Exception as e:
        raise to_http_exception(e)
    return success_response(result.to_dict(), message="Forecast generated")

@router.get("/sku/{sku}/stored")
async def stored_forecast(
    sku: str,
    current_user: User = Depends(get_current_user),
    service: ForecastService = Depends(get_forecast_service)
):
    records = service.get_stored_forecast(current_user.company_id, sku)
    return success_response([
        StoredForecastResponse.model_validate(r).model_dump(mode="json") for r in records
    ])

@router.put("/sku/{sku}/periods/{period}/actual")
async def record_actual(
    sku: str,
    period: str,
    request: ActualRequest,
    current_user: User = Depends(get_current_user),
    service: ForecastService = Depends(get_forecast_service)
):
    """Record observed demand against a stored forecast period"""
    try:
        record = service.record_actual(current_user.company_id, sku, period, request.actual)
    except Exception as e:
        raise to_http_exception(e)
    return success_response(
        StoredForecastResponse.model_validate(record).model_dump(mode="json"),
        message="Actual recorded"
    )

@router.post("/bulk")
async def bulk_forecast(
    months: Optional[int] = Query(None, ge=0),
    current_user: User = Depends(get_current_user),
    service: ForecastService = Depends(get_forecast_service)
):
    """Forecast every SKU of the company; per-SKU failures are reported, not raised"""
    try:
        report = service.generate_bulk_forecasts(current_user.company_id, months)
    except Exception as e:
        raise to_http_exception(e)
    return batch_response(report, "Bulk forecast")

@router.get("/accuracy")
async def forecast_accuracy(
    sku: Optional[str] = None,
    months: int = Query(12, ge=1),
    current_user: User = Depends(get_current_user),
    service: ForecastService = Depends(get_forecast_service)
):
    """Accuracy of one SKU, or of every SKU with the company average"""
    if sku:
        return success_response({
            "sku": sku,
            "accuracy": service.calculate_forecast_accuracy(current_user.company_id, sku, months)
        })
    return success_response(service.company_accuracy(current_user.company_id, months))

@router.get("/reorder-point/{sku}")
async def reorder_point(
    sku: str,
    current_user: User = Depends(get_current_user),
    service: ReorderService = Depends(get_reorder_service)
):
    try:
        result = service.calculate_reorder_point(current_user.company_id, sku)
    except Exception as e:
        raise to_http_exception(e)
    return success_response(dict(sku=sku, **result.to_dict()))

@router.post("/reorder-suggestions/generate")
async def generate_reorder_suggestions(
    current_user: User = Depends(get_current_user),
    service: ReorderService = Depends(get_reorder_service)
):
    try:
        report = service.generate_suggestions(current_user.company_id)
    except Exception as e:
        raise to_http_exception(e)
    return batch_response(report, "Reorder suggestions")

@router.get("/reorder-suggestions")
async def list_reorder_suggestions(
    status: str = "pending",
    current_user: User = Depends(get_current_user),
    service: ReorderService = Depends(get_reorder_service)
):
    try:
        suggestions = service.list_suggestions(current_user.company_id, status)
    except Exception as e:
        raise to_http_exception(e)
    return success_response(suggestions)

@router.post("/reorder-suggestions/{suggestion_id}/approve")
async def approve_reorder_suggestion(
    suggestion_id: int,
    current_user: User = Depends(get_current_user),
    service: ReorderService = Depends(get_reorder_service)
):
    """Approve a pending suggestion into a draft purchase order"""
    try:
        result = service.approve(current_user.company_id, suggestion_id, current_user.id)
    except Exception as e:
        raise to_http_exception(e)
    return success_response(result, message="Suggestion approved and purchase order created")

@router.post("/reorder-suggestions/{suggestion_id}/reject")
async def reject_reorder_suggestion(
    suggestion_id: int,
    current_user: User = Depends(get_current_user),
    service: ReorderService = Depends(get_reorder_service)
):
    try:
        result = service.reject(current_user.company_id, suggestion_id, current_user.id)
    except Exception as e:
        raise to_http_exception(e)
    return success_response(result, message="Suggestion rejected")

@router.get("/abc-xyz")
async def abc_xyz_analysis(
    current_user: User = Depends(get_current_user),
    service: ClassificationService = Depends(get_classification_service)
):
    return success_response(service.abc_xyz_analysis(current_user.company_id))

@router.get("/aging-analysis")
async def aging_analysis(
    current_user: User = Depends(get_current_user),
    service: ClassificationService = Depends(get_classification_service)
):
    return success_response(service.aging_analysis(current_user.company_id))
