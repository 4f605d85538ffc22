#!/usr/bin/env python3
"""
Inventory and demand history models
"""

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from enum import Enum as PyEnum
from supplycast.core.database import Base

class StockLevel(PyEnum):
    """Stock level flag maintained by the inventory layer"""
    HEALTHY = "HEALTHY"
    LOW = "LOW"
    OUT_OF_STOCK = "OUT_OF_STOCK"

class InventoryItem(Base):
    """Current stock position for one SKU of a company"""
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    sku = Column(String(100), nullable=False, index=True)
    name = Column(String(255), nullable=True)
    quantity = Column(Integer, nullable=False, default=0)
    unit_cost = Column(Float, nullable=False, default=0.0)
    reorder_point = Column(Integer, nullable=True)
    reorder_qty = Column(Integer, nullable=True)
    safety_stock = Column(Integer, nullable=True)
    # Lead time used by reorder-point math; kept apart from safety_stock
    lead_time_days = Column(Integer, nullable=True)
    turnover_rate = Column(Float, nullable=True)
    stock_level = Column(String(20), nullable=False, default=StockLevel.HEALTHY.value)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True)
    last_updated = Column(DateTime, default=datetime.utcnow, nullable=False)

    supplier = relationship("Supplier", lazy="joined")

    __table_args__ = (
        UniqueConstraint('company_id', 'sku', name='unique_company_sku'),
    )

class DemandObservation(Base):
    """One period of observed demand for a SKU"""
    __tablename__ = "demand_observations"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    sku = Column(String(100), nullable=False, index=True)
    period_start = Column(Date, nullable=False)
    demand = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint('company_id', 'sku', 'period_start', name='unique_demand_observation'),
    )
