#!/usr/bin/env python3
"""
User schemas for request/response validation
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class UserBase(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., max_length=100)
    full_name: Optional[str] = Field(None, max_length=100)

class UserCreate(UserBase):
    """Sign-up; an unknown company_name creates the company with this user as its admin"""
    company_name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=6)

class UserLogin(BaseModel):
    username: str
    password: str

class UserResponse(UserBase):
    """User as seen by the user themselves and by company admins"""
    id: int
    company_id: int
    is_active: bool
    is_approved: bool
    is_admin: bool
    created_at: datetime

    class Config:
        from_attributes = True

class AdminSetActiveRequest(BaseModel):
    is_active: bool
