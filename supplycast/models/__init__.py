"""
Database models
"""
from supplycast.core.database import Base
from supplycast.models.company import Company, Supplier, SubscriptionStatus
from supplycast.models.user import User
from supplycast.models.inventory import InventoryItem, DemandObservation, StockLevel
from supplycast.models.forecast import ForecastRecord
from supplycast.models.reorder import (
    ReorderSuggestion,
    ReorderPriority,
    ReorderStatus,
    PurchaseOrder,
    PurchaseOrderLine
)
from supplycast.models.scheduler import JobExecution, JobName, ExecutionStatus

__all__ = [
    "Base",
    "Company",
    "Supplier",
    "SubscriptionStatus",
    "User",
    "InventoryItem",
    "DemandObservation",
    "StockLevel",
    "ForecastRecord",
    "ReorderSuggestion",
    "ReorderPriority",
    "ReorderStatus",
    "PurchaseOrder",
    "PurchaseOrderLine",
    "JobExecution",
    "JobName",
    "ExecutionStatus"
]
