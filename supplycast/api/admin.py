#!/usr/bin/env python3
"""
Admin API routes, limited to the admin's own company
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from supplycast.core.database import get_db
from supplycast.core.security import require_admin
from supplycast.models.user import User
from supplycast.schemas.user import UserResponse, AdminSetActiveRequest
from supplycast.services.user_service import UserService

router = APIRouter(prefix="/admin", tags=["Admin"])

@router.get("/users", response_model=List[UserResponse])
async def get_company_users(
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Get all users of the company (admin only)"""
    return [UserResponse.model_validate(user) for user in UserService.get_company_users(db, admin.company_id)]

@router.patch("/users/{user_id}/approve")
async def approve_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Approve a user (admin only)"""
    user = UserService.approve_user(db, admin.company_id, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {
        "message": "User approved successfully",
        "user_id": user_id,
        "is_approved": user.is_approved
    }

@router.patch("/users/{user_id}/active")
async def set_user_active(
    user_id: int,
    request: AdminSetActiveRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Set user active status (admin only)"""
    user = UserService.set_user_active(db, admin.company_id, user_id, request.is_active)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {
        "message": f"User {'activated' if request.is_active else 'deactivated'} successfully",
        "user_id": user_id,
        "is_active": user.is_active
    }
