#!/usr/bin/env python3
"""
Company (tenant) and supplier models
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from datetime import datetime
from enum import Enum as PyEnum
from supplycast.core.database import Base

class SubscriptionStatus(PyEnum):
    """Subscription status enumeration"""
    ACTIVE = "active"
    TRIALING = "trialing"
    CANCELLED = "cancelled"

class Company(Base):
    """Tenant owning users, inventory and forecasts"""
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False, index=True)
    subscription_status = Column(String(20), nullable=False, default=SubscriptionStatus.ACTIVE.value)
    created_at = Column(DateTime, default=datetime.utcnow)

class Supplier(Base):
    """Supplier an inventory item is replenished from"""
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
