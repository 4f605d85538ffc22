#!/usr/bin/env python3
"""
Authentication schemas
"""

from pydantic import BaseModel

class Token(BaseModel):
    """Bearer token issued at login, with the seconds until it expires"""
    access_token: str
    token_type: str
    expires_in: int
    user: dict
