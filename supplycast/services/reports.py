#!/usr/bin/env python3
"""
Structured results of best-effort batch operations
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ItemOutcome:
    """What happened to one SKU inside a batch"""
    sku: str
    success: bool
    error: Optional[str] = None
    code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"sku": self.sku, "success": self.success, "error": self.error, "code": self.code}


@dataclass
class BatchReport:
    """Per-item outcomes of a batch; a failing item never aborts the batch"""
    company_id: int
    outcomes: List[ItemOutcome] = field(default_factory=list)

    def succeeded(self, sku: str):
        self.outcomes.append(ItemOutcome(sku=sku, success=True))

    def failed(self, sku: str, error: Exception):
        self.outcomes.append(ItemOutcome(
            sku=sku,
            success=False,
            error=str(getattr(error, "message", None) or error),
            code=getattr(error, "code", None)
        ))

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failure_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.success)

    @property
    def failures(self) -> List[ItemOutcome]:
        return [o for o in self.outcomes if not o.success]

    def summary(self) -> Dict[str, Any]:
        return {
            "companyId": self.company_id,
            "processed": len(self.outcomes),
            "succeeded": self.success_count,
            "failed": self.failure_count,
            "failures": [o.to_dict() for o in self.failures]
        }
