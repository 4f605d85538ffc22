#!/usr/bin/env python3
"""
JWT handling and the current-user dependencies

Tokens carry the username as `sub` and the user's company as `company_id`;
a token whose company no longer matches the user is rejected.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from supplycast.core.config import settings
from supplycast.core.database import get_db

security = HTTPBearer()

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token that expires after `expires_delta` or the configured lifetime"""
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    return jwt.encode(dict(data, exp=expire), settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """Claims of a valid token, or None when it is malformed, expired or has no subject"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if payload.get("sub") is None:
        return None
    return payload

def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
):
    """Authenticated, active and approved user of the bearer token"""
    from supplycast.repositories.company_repository import get_user_by_username

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    user = get_user_by_username(db, payload["sub"])
    if user is None:
        raise credentials_exception

    company_id = payload.get("company_id")
    if company_id is not None and company_id != user.company_id:
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")

    if not user.is_approved and not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User not approved by admin")

    return user

def require_admin(current_user = Depends(get_current_user)):
    """Company admin of the bearer token"""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required"
        )
    return current_user
