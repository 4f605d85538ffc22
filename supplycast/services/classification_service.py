#!/usr/bin/env python3
"""
Inventory classification - ABC value concentration, XYZ demand regularity and
aging analysis
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from sqlalchemy.orm import Session

from supplycast.models.inventory import InventoryItem
from supplycast.repositories.inventory_repository import get_company_inventory

ABC_A_THRESHOLD = 80
ABC_B_THRESHOLD = 95
CATEGORIES = [f"{abc}{xyz}" for abc in "ABC" for xyz in "XYZ"]


def days_since(moment: datetime, now: datetime) -> int:
    """Whole days elapsed between two timestamps"""
    return int((now - moment).total_seconds() // 86400)


def aging_category(turnover_rate: float, days_since_update: int) -> str:
    if turnover_rate < 2 or days_since_update > 180:
        return "Slow Mover"
    if turnover_rate < 4 or days_since_update > 90:
        return "Medium Mover"
    return "Fast Mover"


def classify_items(items: Sequence[InventoryItem], now: datetime) -> List[Dict[str, Any]]:
    """ABC/XYZ tag every item, ordered by stock value descending

    The sort is stable so items of equal value keep their input order. With a
    total value of zero every percentage is 0.
    """
    if not items:
        return []

    df = pd.DataFrame([
        {
            "sku": item.sku,
            "name": item.name,
            "quantity": item.quantity,
            "value": float(item.quantity * item.unit_cost),
            "turnoverRate": item.turnover_rate,
            "daysSinceLastUpdate": days_since(item.last_updated, now)
        }
        for item in items
    ])
    df["turnoverRate"] = df["turnoverRate"].fillna(0).astype(float)
    df = df.sort_values("value", ascending=False, kind="stable").reset_index(drop=True)

    total_value = df["value"].sum()
    if total_value:
        df["valuePercentage"] = df["value"] / total_value * 100
        df["cumulativePercentage"] = df["value"].cumsum() / total_value * 100
    else:
        df["valuePercentage"] = 0.0
        df["cumulativePercentage"] = 0.0

    df["abcClass"] = np.select(
        [df["cumulativePercentage"] <= ABC_A_THRESHOLD, df["cumulativePercentage"] <= ABC_B_THRESHOLD],
        ["A", "B"],
        default="C"
    )
    df["xyzClass"] = np.select(
        [
            (df["turnoverRate"] >= 4) | (df["daysSinceLastUpdate"] <= 60),
            (df["turnoverRate"] >= 2) | (df["daysSinceLastUpdate"] <= 90)
        ],
        ["X", "Y"],
        default="Z"
    )
    df["category"] = df["abcClass"] + df["xyzClass"]

    columns = [
        "sku", "name", "value", "valuePercentage", "cumulativePercentage",
        "abcClass", "xyzClass", "category", "turnoverRate", "quantity"
    ]
    return df[columns].to_dict("records")


def summarize(analysis: Sequence[Dict[str, Any]]) -> Dict[str, int]:
    summary = {"totalItems": len(analysis)}
    for category in CATEGORIES:
        summary[category.lower()] = sum(1 for row in analysis if row["category"] == category)
    return summary


def aging_analysis(items: Sequence[InventoryItem], now: datetime) -> List[Dict[str, Any]]:
    """Mover category per item, slowest turnover first"""
    analysis = []
    for item in items:
        turnover_rate = item.turnover_rate or 0
        days = days_since(item.last_updated, now)
        analysis.append({
            "sku": item.sku,
            "name": item.name,
            "quantity": item.quantity,
            "value": item.quantity * item.unit_cost,
            "turnoverRate": turnover_rate,
            "daysSinceLastUpdate": days,
            "category": aging_category(turnover_rate, days)
        })
    return sorted(analysis, key=lambda row: row["turnoverRate"])


class ClassificationService:
    """Recomputes classifications over a company's current inventory"""

    def __init__(self, db: Session, now: Optional[datetime] = None):
        self.db = db
        self.now = now

    def _now(self) -> datetime:
        return self.now or datetime.utcnow()

    def abc_xyz_analysis(self, company_id: int) -> Dict[str, Any]:
        analysis = classify_items(get_company_inventory(self.db, company_id), self._now())
        return {"analysis": analysis, "summary": summarize(analysis)}

    def aging_analysis(self, company_id: int) -> List[Dict[str, Any]]:
        return aging_analysis(get_company_inventory(self.db, company_id), self._now())
