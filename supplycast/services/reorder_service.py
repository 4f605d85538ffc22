#!/usr/bin/env python3
"""
Reorder advisor - reorder-point calculation, replenishment suggestions and
their approval into draft purchase orders
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from supplycast.core.config import Settings, settings as default_settings
from supplycast.core.exceptions import InvalidStateError, NotFoundError, ValidationError
from supplycast.models.inventory import InventoryItem, StockLevel
from supplycast.models.reorder import ReorderPriority, ReorderStatus, ReorderSuggestion
from supplycast.repositories.company_repository import get_supplier_by_id
from supplycast.repositories.inventory_repository import get_company_inventory, get_inventory_item
from supplycast.repositories.reorder_repository import (
    create_purchase_order,
    create_reorder_suggestion,
    get_reorder_suggestion,
    get_suggestions_by_status,
    has_pending_suggestion
)
from supplycast.services.forecast_engine import ForecastEngine, ReorderPoint
from supplycast.services.forecasting_service import ForecastService
from supplycast.services.reports import BatchReport
from supplycast.utils.hash_utils import generate_po_number

logger = logging.getLogger(__name__)

REASON_BELOW_REORDER_POINT = "below_reorder_point"
REASON_NO_DEMAND_HISTORY = "below_reorder_point_no_history"


def serialize_suggestion(suggestion: ReorderSuggestion) -> Dict[str, Any]:
    """Suggestion enriched with the inventory item it refers to"""
    item = suggestion.inventory_item
    supplier = item.supplier if item is not None else None
    return {
        "id": suggestion.id,
        "sku": suggestion.sku,
        "name": item.name if item is not None else None,
        "currentQuantity": item.quantity if item is not None else None,
        "suggestedQty": suggestion.suggested_qty,
        "reason": suggestion.reason,
        "priority": suggestion.priority,
        "status": suggestion.status,
        "unitCost": item.unit_cost if item is not None else None,
        "supplier": supplier.name if supplier is not None else None,
        "purchaseOrderId": suggestion.purchase_order_id,
        "createdAt": suggestion.created_at.isoformat() if suggestion.created_at else None
    }


@dataclass
class SuggestionReport(BatchReport):
    """Suggestions created by one advisor run"""
    suggestions: List[Dict[str, Any]] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = self.summary()
        data["suggestions"] = self.suggestions
        data["skippedPending"] = self.skipped
        return data


class ReorderService:
    """Reorder advisor bound to one database session"""

    def __init__(
        self,
        db: Session,
        settings: Settings = default_settings,
        forecast_service: Optional[ForecastService] = None
    ):
        self.db = db
        self.settings = settings
        self.forecast_service = forecast_service or ForecastService(db, settings)

    @staticmethod
    def should_reorder(item: InventoryItem) -> bool:
        """At or below the stored reorder point and not already flagged out of stock"""
        return (
            item.quantity <= (item.reorder_point or 0)
            and item.stock_level != StockLevel.OUT_OF_STOCK.value
        )

    @staticmethod
    def assign_priority(quantity: int, reorder_point: Optional[int]) -> str:
        """URGENT when empty, HIGH below half the reorder point, otherwise MEDIUM"""
        if quantity == 0:
            return ReorderPriority.URGENT.value
        if quantity < (reorder_point or 0) / 2:
            return ReorderPriority.HIGH.value
        return ReorderPriority.MEDIUM.value

    def lead_time_for(self, item: InventoryItem) -> int:
        return item.lead_time_days or self.settings.DEFAULT_LEAD_TIME_DAYS

    def calculate_reorder_point(self, company_id: int, sku: str) -> ReorderPoint:
        """Reorder point and safety stock from the SKU's demand history"""
        item = get_inventory_item(self.db, company_id, sku)
        if item is None:
            raise NotFoundError("Inventory item not found", details={"sku": sku})

        history, _ = self.forecast_service.load_history(company_id, sku)
        return ForecastEngine.reorder_point(history, self.lead_time_for(item))

    def suggested_quantity(self, company_id: int, item: InventoryItem) -> Tuple[int, str]:
        """(quantity, reason) for an item that needs replenishing

        A configured reorder_qty is used as is. Otherwise the quantity comes from
        the demand-based reorder point; an item with no demand history is topped
        back up to its stored reorder point instead.
        """
        if item.reorder_qty:
            return item.reorder_qty, REASON_BELOW_REORDER_POINT

        history, _ = self.forecast_service.load_history(company_id, item.sku)
        if not history:
            logger.warning(
                f"No demand history for company {company_id} SKU {item.sku}; "
                f"suggesting the gap to reorder point {item.reorder_point or 0}"
            )
            return max((item.reorder_point or 0) - item.quantity, 0), REASON_NO_DEMAND_HISTORY

        reorder_point = ForecastEngine.reorder_point(history, self.lead_time_for(item))
        quantity = max(reorder_point.safety_stock * 2, reorder_point.reorder_point - item.quantity)
        return quantity, REASON_BELOW_REORDER_POINT

    def generate_suggestions(self, company_id: int) -> SuggestionReport:
        """Create a pending suggestion for every item that needs replenishing"""
        report = SuggestionReport(company_id=company_id)

        for item in get_company_inventory(self.db, company_id):
            if not self.should_reorder(item):
                continue

            if self.settings.REORDER_SKIP_DUPLICATE_PENDING and has_pending_suggestion(self.db, company_id, item.sku):
                report.skipped.append(item.sku)
                continue

            try:
                quantity, reason = self.suggested_quantity(company_id, item)
                suggestion = create_reorder_suggestion(
                    self.db,
                    company_id=company_id,
                    inventory_item_id=item.id,
                    sku=item.sku,
                    suggested_qty=quantity,
                    reason=reason,
                    priority=self.assign_priority(item.quantity, item.reorder_point)
                )
                report.suggestions.append(serialize_suggestion(suggestion))
                report.succeeded(item.sku)
            except Exception as e:
                self.db.rollback()
                logger.error(f"Failed to generate reorder suggestion for company {company_id} SKU {item.sku}: {e}")
                report.failed(item.sku, e)

        logger.info(
            f"Reorder suggestions for company {company_id}: "
            f"{report.success_count} created, {report.failure_count} failed, {len(report.skipped)} skipped"
        )
        return report

    def list_suggestions(self, company_id: int, status: str = ReorderStatus.PENDING.value) -> List[Dict[str, Any]]:
        """Suggestions with a given status, most urgent first"""
        valid = [s.value for s in ReorderStatus]
        if status not in valid:
            raise ValidationError(f"Invalid status '{status}'", details={"allowed": valid})
        return [serialize_suggestion(s) for s in get_suggestions_by_status(self.db, company_id, status)]

    def _get_pending(self, company_id: int, suggestion_id: int) -> ReorderSuggestion:
        suggestion = get_reorder_suggestion(self.db, company_id, suggestion_id)
        if suggestion is None:
            raise NotFoundError("Reorder suggestion not found", details={"id": suggestion_id})
        if suggestion.status != ReorderStatus.PENDING.value:
            raise InvalidStateError("Suggestion has already been processed", details={"status": suggestion.status})
        return suggestion

    def approve(self, company_id: int, suggestion_id: int, user_id: int) -> Dict[str, Any]:
        """Approve a pending suggestion and raise a draft purchase order for it"""
        suggestion = self._get_pending(company_id, suggestion_id)
        item = suggestion.inventory_item

        if item is None or not item.supplier_id:
            raise ValidationError("Inventory item has no supplier assigned", code="NO_SUPPLIER")

        supplier = get_supplier_by_id(self.db, company_id, item.supplier_id)
        if supplier is None:
            raise ValidationError(
                "Assigned supplier does not belong to this company",
                code="NO_SUPPLIER",
                details={"supplier_id": item.supplier_id}
            )

        unit_cost = item.unit_cost or 0
        purchase_order = create_purchase_order(
            self.db,
            company_id=company_id,
            supplier_id=supplier.id,
            po_number=generate_po_number(),
            lines=[{
                "sku": suggestion.sku,
                "product_name": item.name or suggestion.sku,
                "quantity": suggestion.suggested_qty,
                "unit_price": unit_cost,
                "total_price": suggestion.suggested_qty * unit_cost
            }],
            notes=f"Auto-generated from reorder suggestion. SKU: {suggestion.sku}"
        )

        suggestion.status = ReorderStatus.APPROVED.value
        suggestion.decided_by = user_id
        suggestion.decided_at = datetime.utcnow()
        suggestion.purchase_order_id = purchase_order.id
        self.db.commit()

        logger.info(f"Suggestion {suggestion.id} approved by user {user_id}: PO {purchase_order.po_number}")
        return {
            "purchaseOrderId": purchase_order.id,
            "poNumber": purchase_order.po_number,
            "totalAmount": purchase_order.total_amount
        }

    def reject(self, company_id: int, suggestion_id: int, user_id: int) -> Dict[str, Any]:
        """Reject a pending suggestion"""
        suggestion = self._get_pending(company_id, suggestion_id)
        suggestion.status = ReorderStatus.REJECTED.value
        suggestion.decided_by = user_id
        suggestion.decided_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(suggestion)

        logger.info(f"Suggestion {suggestion.id} rejected by user {user_id}")
        return serialize_suggestion(suggestion)
