"""
Pydantic schemas for request/response validation
"""

from supplycast.schemas.user import UserCreate, UserLogin, UserResponse, AdminSetActiveRequest
from supplycast.schemas.auth import Token
from supplycast.schemas.demand import DemandPoint, DemandHistoryRequest, DemandPointResponse
from supplycast.schemas.forecast import ActualRequest, StoredForecastResponse
from supplycast.schemas.scheduler import JobExecutionResponse

__all__ = [
    "UserCreate", "UserLogin", "UserResponse", "AdminSetActiveRequest",
    "Token",
    "DemandPoint", "DemandHistoryRequest", "DemandPointResponse",
    "ActualRequest", "StoredForecastResponse",
    "JobExecutionResponse"
]
