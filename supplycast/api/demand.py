#!/usr/bin/env python3
"""
Demand history API routes
"""

from fastapi import APIRouter, Depends

from supplycast.api.deps import get_forecast_service, to_http_exception
from supplycast.core.security import get_current_user
from supplycast.models.user import User
from supplycast.schemas.demand import DemandHistoryRequest, DemandPointResponse
from supplycast.services.forecasting_service import ForecastService
from supplycast.utils.response import success_response

router = APIRouter(prefix="/demand", tags=["Demand History"])

def _serialize(observations):
    return [DemandPointResponse.model_validate(o).model_dump(mode="json") for o in observations]

@router.post("/history")
async def record_history(
    request: DemandHistoryRequest,
    current_user: User = Depends(get_current_user),
    service: ForecastService = Depends(get_forecast_service)
):
    """Record demand observations for a SKU; a repeated period is overwritten"""
    try:
        saved = service.record_demand(
            current_user.company_id,
            request.sku,
            [(point.period_start, point.demand) for point in request.observations]
        )
    except Exception as e:
        raise to_http_exception(e)

    return success_response(
        {"sku": request.sku, "observations": _serialize(saved)},
        message=f"Recorded {len(saved)} observations"
    )

@router.get("/history/{sku}")
async def get_history(
    sku: str,
    current_user: User = Depends(get_current_user),
    service: ForecastService = Depends(get_forecast_service)
):
    """Stored demand history of a SKU, oldest first"""
    observations = service.get_history(current_user.company_id, sku)
    return success_response({
        "sku": sku,
        "observations": _serialize(observations),
        "values": [o.demand for o in observations]
    })
