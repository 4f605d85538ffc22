#!/usr/bin/env python3
"""
Authentication service
"""

from typing import Optional
from sqlalchemy.orm import Session
from datetime import timedelta
from supplycast.core.config import settings
from supplycast.core.security import create_access_token
from supplycast.repositories.company_repository import (
    create_company,
    create_user,
    get_company_by_name,
    get_company_user_count,
    get_user_by_email,
    get_user_by_username
)
from supplycast.models.user import User

class AuthService:
    @staticmethod
    def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
        """Authenticate user with username and password"""
        user = get_user_by_username(db, username)
        if not user:
            return None
        if not user.verify_password(password):
            return None
        return user

    @staticmethod
    def create_access_token(user: User) -> str:
        """Create access token for user"""
        access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        return create_access_token(
            data={"sub": user.username, "company_id": user.company_id},
            expires_delta=access_token_expires
        )

    @staticmethod
    def register_user(
        db: Session,
        company_name: str,
        username: str,
        email: str,
        password: str,
        full_name: Optional[str] = None
    ) -> User:
        """Register a user, creating the company on first sign-up

        The first user of a company becomes its approved admin; later users
        wait for that admin's approval.
        """
        if get_user_by_username(db, username):
            raise ValueError("Username already exists")
        if get_user_by_email(db, email):
            raise ValueError("Email already registered")

        company = get_company_by_name(db, company_name) or create_company(db, company_name)
        is_first_user = get_company_user_count(db, company.id) == 0

        return create_user(
            db,
            company_id=company.id,
            username=username,
            email=email,
            password=password,
            full_name=full_name,
            is_admin=is_first_user
        )
