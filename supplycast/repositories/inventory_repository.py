#!/usr/bin/env python3
"""
Inventory and demand history repository
"""

from typing import List, Optional
from datetime import date
from sqlalchemy.orm import Session
from supplycast.models.inventory import InventoryItem, DemandObservation

def get_inventory_item(db: Session, company_id: int, sku: str) -> Optional[InventoryItem]:
    """Get the inventory item for a SKU"""
    return db.query(InventoryItem).filter(
        InventoryItem.company_id == company_id,
        InventoryItem.sku == sku
    ).first()

def get_company_inventory(db: Session, company_id: int) -> List[InventoryItem]:
    """Get every inventory item of a company in insertion order"""
    return db.query(InventoryItem).filter(
        InventoryItem.company_id == company_id
    ).order_by(InventoryItem.id).all()

def get_company_skus(db: Session, company_id: int) -> List[str]:
    """Get the SKUs of a company in insertion order"""
    rows = db.query(InventoryItem.sku).filter(
        InventoryItem.company_id == company_id
    ).order_by(InventoryItem.id).all()
    return [row[0] for row in rows]

def get_demand_history(db: Session, company_id: int, sku: str, limit: int = 52) -> List[DemandObservation]:
    """Get the most recent observations of a SKU, oldest first"""
    rows = db.query(DemandObservation).filter(
        DemandObservation.company_id == company_id,
        DemandObservation.sku == sku
    ).order_by(DemandObservation.period_start.desc()).limit(limit).all()
    return list(reversed(rows))

def upsert_demand_observation(
    db: Session,
    company_id: int,
    sku: str,
    period_start: date,
    demand: float
) -> DemandObservation:
    """Create or overwrite the observation for a period (not committed)"""
    observation = db.query(DemandObservation).filter(
        DemandObservation.company_id == company_id,
        DemandObservation.sku == sku,
        DemandObservation.period_start == period_start
    ).first()

    if observation:
        observation.demand = demand
    else:
        observation = DemandObservation(
            company_id=company_id,
            sku=sku,
            period_start=period_start,
            demand=demand
        )
        db.add(observation)
    db.flush()
    return observation
