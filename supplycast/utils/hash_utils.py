#!/usr/bin/env python3
"""
Password hashing and reference-number utilities
"""

import secrets
from datetime import datetime
from passlib.context import CryptContext

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(password: str) -> str:
    """Hash a password"""
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    return pwd_context.verify(plain_password, hashed_password)

def generate_po_number(now: datetime = None) -> str:
    """Generate a purchase order number such as PO-20261017120000-3f9a1c"""
    now = now or datetime.utcnow()
    return f"PO-{now.strftime('%Y%m%d%H%M%S')}-{secrets.token_hex(3)}"
