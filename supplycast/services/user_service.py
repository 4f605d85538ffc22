#!/usr/bin/env python3
"""
User management service, scoped to the admin's company
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from supplycast.repositories.company_repository import (
    get_company_users,
    update_user_approval,
    update_user_status
)
from supplycast.models.user import User

class UserService:
    """Service for company user administration"""

    @staticmethod
    def get_company_users(db: Session, company_id: int) -> List[User]:
        """Get all users of a company"""
        return get_company_users(db, company_id)

    @staticmethod
    def approve_user(db: Session, company_id: int, user_id: int) -> Optional[User]:
        """Approve a user of the company"""
        return update_user_approval(db, company_id, user_id, True)

    @staticmethod
    def set_user_active(db: Session, company_id: int, user_id: int, is_active: bool) -> Optional[User]:
        """Activate or deactivate a user of the company"""
        return update_user_status(db, company_id, user_id, is_active)
