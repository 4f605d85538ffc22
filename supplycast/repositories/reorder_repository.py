#!/usr/bin/env python3
"""
Reorder suggestion and purchase order repository
"""

from typing import List, Optional
from sqlalchemy import case
from sqlalchemy.orm import Session
from supplycast.models.reorder import (
    ReorderSuggestion, ReorderStatus, ReorderPriority, PurchaseOrder, PurchaseOrderLine
)

_PRIORITY_RANK = case(
    (ReorderSuggestion.priority == ReorderPriority.URGENT.value, 0),
    (ReorderSuggestion.priority == ReorderPriority.HIGH.value, 1),
    else_=2
)

def create_reorder_suggestion(
    db: Session,
    company_id: int,
    inventory_item_id: int,
    sku: str,
    suggested_qty: int,
    priority: str,
    reason: str = "below_reorder_point"
) -> ReorderSuggestion:
    """Create a pending reorder suggestion"""
    suggestion = ReorderSuggestion(
        company_id=company_id,
        inventory_item_id=inventory_item_id,
        sku=sku,
        suggested_qty=suggested_qty,
        reason=reason,
        priority=priority,
        status=ReorderStatus.PENDING.value
    )
    db.add(suggestion)
    db.commit()
    db.refresh(suggestion)
    return suggestion

def get_reorder_suggestion(db: Session, company_id: int, suggestion_id: int) -> Optional[ReorderSuggestion]:
    """Get a suggestion of a company by ID"""
    return db.query(ReorderSuggestion).filter(
        ReorderSuggestion.company_id == company_id,
        ReorderSuggestion.id == suggestion_id
    ).first()

def get_suggestions_by_status(db: Session, company_id: int, status: str) -> List[ReorderSuggestion]:
    """Get suggestions by status, most urgent first then newest first"""
    return db.query(ReorderSuggestion).filter(
        ReorderSuggestion.company_id == company_id,
        ReorderSuggestion.status == status
    ).order_by(
        _PRIORITY_RANK,
        ReorderSuggestion.created_at.desc(),
        ReorderSuggestion.id.desc()
    ).all()

def has_pending_suggestion(db: Session, company_id: int, sku: str) -> bool:
    """Check whether a SKU already has a pending suggestion"""
    return db.query(ReorderSuggestion.id).filter(
        ReorderSuggestion.company_id == company_id,
        ReorderSuggestion.sku == sku,
        ReorderSuggestion.status == ReorderStatus.PENDING.value
    ).first() is not None

def create_purchase_order(
    db: Session,
    company_id: int,
    supplier_id: int,
    po_number: str,
    lines: List[dict],
    notes: Optional[str] = None
) -> PurchaseOrder:
    """Create a draft purchase order with its lines (not committed)"""
    purchase_order = PurchaseOrder(
        company_id=company_id,
        supplier_id=supplier_id,
        po_number=po_number,
        status="DRAFT",
        total_amount=sum(line["total_price"] for line in lines),
        notes=notes
    )
    for line in lines:
        purchase_order.lines.append(PurchaseOrderLine(**line))
    db.add(purchase_order)
    db.flush()
    return purchase_order
