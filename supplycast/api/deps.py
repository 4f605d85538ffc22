#!/usr/bin/env python3
"""
Shared router dependencies and domain error translation
"""

import logging
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from supplycast.core.config import Settings, settings
from supplycast.core.database import get_db
from supplycast.core.exceptions import (
    InsufficientDataError,
    InvalidStateError,
    NotFoundError,
    SupplyCastError,
    ValidationError
)
from supplycast.services.classification_service import ClassificationService
from supplycast.services.forecasting_service import ForecastService
from supplycast.services.reorder_service import ReorderService
from supplycast.services.scheduler_service import SchedulerService
from supplycast.utils.response import error_response

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InsufficientDataError, status.HTTP_400_BAD_REQUEST),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (InvalidStateError, status.HTTP_400_BAD_REQUEST),
)

def get_settings() -> Settings:
    return settings

def get_forecast_service(
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings)
) -> ForecastService:
    return ForecastService(db, app_settings)

def get_reorder_service(
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings)
) -> ReorderService:
    return ReorderService(db, app_settings)

def get_classification_service(db: Session = Depends(get_db)) -> ClassificationService:
    return ClassificationService(db)

def get_scheduler_service(
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings)
) -> SchedulerService:
    return SchedulerService(db, app_settings)

def to_http_exception(error: Exception) -> HTTPException:
    """Map a service error onto the HTTP status the API reports for it"""
    if isinstance(error, HTTPException):
        return error

    if isinstance(error, SupplyCastError):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        for error_type, code in _STATUS_BY_ERROR:
            if isinstance(error, error_type):
                status_code = code
                break
        return HTTPException(
            status_code=status_code,
            detail=dict(error_response(error.message), **error.to_dict())
        )

    logger.exception(f"Unhandled error: {error}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error_response("Internal server error")
    )
