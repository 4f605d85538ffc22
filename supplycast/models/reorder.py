#!/usr/bin/env python3
"""
Reorder suggestion and purchase order models
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from enum import Enum as PyEnum
from supplycast.core.database import Base

class ReorderPriority(PyEnum):
    """Reorder priority enumeration"""
    URGENT = "URGENT"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"

class ReorderStatus(PyEnum):
    """Reorder suggestion status enumeration"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class ReorderSuggestion(Base):
    """Replenishment suggestion awaiting a human decision"""
    __tablename__ = "reorder_suggestions"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    inventory_item_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=False, index=True)
    sku = Column(String(100), nullable=False, index=True)
    suggested_qty = Column(Integer, nullable=False)
    reason = Column(String(50), nullable=False, default="below_reorder_point")
    priority = Column(String(10), nullable=False)
    status = Column(String(20), nullable=False, default=ReorderStatus.PENDING.value, index=True)
    decided_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    decided_at = Column(DateTime, nullable=True)
    purchase_order_id = Column(Integer, ForeignKey("purchase_orders.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    inventory_item = relationship("InventoryItem", lazy="joined")

class PurchaseOrder(Base):
    """Draft purchase order raised from an approved suggestion"""
    __tablename__ = "purchase_orders"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False)
    po_number = Column(String(50), unique=True, nullable=False)
    status = Column(String(20), nullable=False, default="DRAFT")
    total_amount = Column(Float, nullable=False, default=0.0)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    lines = relationship("PurchaseOrderLine", back_populates="purchase_order", cascade="all, delete-orphan")

class PurchaseOrderLine(Base):
    """Line item of a purchase order"""
    __tablename__ = "purchase_order_lines"

    id = Column(Integer, primary_key=True, index=True)
    purchase_order_id = Column(Integer, ForeignKey("purchase_orders.id"), nullable=False, index=True)
    sku = Column(String(100), nullable=False)
    product_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)
    total_price = Column(Float, nullable=False)

    purchase_order = relationship("PurchaseOrder", back_populates="lines")
