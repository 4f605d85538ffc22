#!/usr/bin/env python3
"""
Company and user repository for database operations
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from supplycast.models.company import Company, Supplier, SubscriptionStatus
from supplycast.models.user import User

def get_company_by_name(db: Session, name: str) -> Optional[Company]:
    """Get company by name"""
    return db.query(Company).filter(Company.name == name).first()

def create_company(db: Session, name: str) -> Company:
    """Create a new company"""
    company = Company(name=name, subscription_status=SubscriptionStatus.ACTIVE.value)
    db.add(company)
    db.commit()
    db.refresh(company)
    return company

def get_active_companies(db: Session) -> List[Company]:
    """Get companies whose subscription is active"""
    return db.query(Company).filter(
        Company.subscription_status == SubscriptionStatus.ACTIVE.value
    ).order_by(Company.id).all()

def get_supplier_by_id(db: Session, company_id: int, supplier_id: int) -> Optional[Supplier]:
    """Get a supplier of a company"""
    return db.query(Supplier).filter(
        Supplier.company_id == company_id,
        Supplier.id == supplier_id
    ).first()

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """Get user by username"""
    return db.query(User).filter(User.username == username).first()

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by email"""
    return db.query(User).filter(User.email == email).first()

def get_company_user(db: Session, company_id: int, user_id: int) -> Optional[User]:
    """Get a user of a company by ID"""
    return db.query(User).filter(
        User.company_id == company_id,
        User.id == user_id
    ).first()

def create_user(
    db: Session,
    company_id: int,
    username: str,
    email: str,
    password: str,
    full_name: Optional[str] = None,
    is_admin: bool = False
) -> User:
    """Create a new user; company admins are approved on creation"""
    user = User(
        company_id=company_id,
        username=username,
        email=email,
        hashed_password=User.get_password_hash(password),
        full_name=full_name,
        is_active=True,
        is_approved=is_admin,
        is_admin=is_admin
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

def get_company_users(db: Session, company_id: int, skip: int = 0, limit: int = 100) -> List[User]:
    """Get all users of a company"""
    return db.query(User).filter(
        User.company_id == company_id
    ).order_by(User.id).offset(skip).limit(limit).all()

def get_company_user_count(db: Session, company_id: int) -> int:
    """Get user count of a company"""
    return db.query(User).filter(User.company_id == company_id).count()

def update_user_status(db: Session, company_id: int, user_id: int, is_active: bool) -> Optional[User]:
    """Update user active status"""
    user = get_company_user(db, company_id, user_id)
    if user:
        user.is_active = is_active
        db.commit()
        db.refresh(user)
    return user

def update_user_approval(db: Session, company_id: int, user_id: int, is_approved: bool) -> Optional[User]:
    """Update user approval status"""
    user = get_company_user(db, company_id, user_id)
    if user:
        user.is_approved = is_approved
        db.commit()
        db.refresh(user)
    return user
